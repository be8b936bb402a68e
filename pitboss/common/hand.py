"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
A hand only ever grows during play; callers receive copies of its cards so the
ordered sequence held by the hand cannot be changed from outside.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import List

from pitboss.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    Subclasses build game rules on top of the ordered card sequence.
    """

    __slots__ = ("_cards",)

    def __init__(self):
        self._cards: List[Card] = []

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards in the hand, in the order received."""
        return list(self._cards)

    @property
    def count(self) -> int:
        """Returns the number of cards in the hand."""
        return len(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        if not isinstance(card, Card):
            raise TypeError(f"Expected a Card, got {card!r}")
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cards!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self._cards)
