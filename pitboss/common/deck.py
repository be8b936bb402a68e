"""
This module contains the Deck class, which represents a single 52-card deck.

Decks are the raw material of a shoe: the shoe concatenates several fresh decks
and shuffles the result.

>>> deck = Deck()
>>> deck.size
52
>>> deck.deal()
Card(Suit.HEARTS, Rank.TWO)
>>> deck.size
51
"""

import random
from typing import List, Optional

from pitboss.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a deck of cards. Cards are dealt from the front.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a default deck will be constructed.
        """
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
        else:
            self.cards = list(cards)

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks.

        :return: A list of Card instances representing the default deck.
        """
        return self._default_deck.copy()

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        """
        Shuffle the cards in the deck.

        :param rng: Random generator to shuffle with; the module generator if omitted.
        """
        (rng or random).shuffle(self.cards)
        return self

    def deal(self) -> Card:
        """
        Remove and return the front card of the deck.

        :raises IndexError: If the deck is empty.
        """
        if not self.cards:
            raise IndexError("Cannot deal from an empty deck")
        return self.cards.pop(0)

    @property
    def size(self) -> int:
        """Return the number of remaining cards in the deck."""
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def __repr__(self) -> str:
        return f"Deck({self.cards!r})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
