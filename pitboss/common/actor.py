"""
This module contains the Actor abstract base class.

Actor serves as a blueprint for any participant seated at a card table: it owns
an ordered list of hands and a cursor selecting the hand currently in play.
Concrete participants (players who bet, dealers who follow a fixed strategy)
decide how their hands are created and reset between rounds.
"""

from abc import ABC, abstractmethod
from typing import List

from pitboss.common.card import Card
from pitboss.common.hand import AbstractHand


class Actor(ABC):
    """
    Abstract base class representing an actor in a card game.

    :param name: Name of the actor
    """

    def __init__(self, name: str):
        self.name = name
        self.hands: List[AbstractHand] = []
        self.current_hand_index = 0

    @property
    def current_hand(self):
        """
        The actor's current hand.
        """
        return self.hands[self.current_hand_index]

    def deal_card(self, card: Card) -> None:
        """
        Deal a card to the current hand as part of the initial deal.

        :param card: The card to add to the actor's current hand
        """
        self.current_hand.deal_card(card)

    @abstractmethod
    def clear_hand(self) -> None:
        """
        Discard the actor's hands in preparation for a new round.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
