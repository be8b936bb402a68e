"""
Multi-deck shoe with cut-card reshuffle policy.

The shoe holds the undrawn remainder of ``num_decks`` shuffled decks. A cut card
is placed at ``penetration`` of the way through the pool; once play reaches it,
``needs_reshuffle()`` reports True and the next reshuffle opportunity replaces
the whole pool with a freshly shuffled set. ``draw()`` never reshuffles on its own.
"""

import logging
import random
from typing import Callable, List, Optional

from pitboss.common.card import Card
from pitboss.common.deck import Deck

logger = logging.getLogger("pitboss.shoe")


class EmptyShoeError(Exception):
    """Raised when a card is drawn from a shoe with no cards left."""

    pass


class Shoe:
    def __init__(
        self,
        num_decks: int = 6,
        penetration: float = 0.75,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], List[Card]]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of decks to use in the shoe (default is 6, values below 1 are raised to 1)
        :param penetration: Fraction of the shoe to deal before the cut card is reached (default is 75%)
        :param rng: Random generator used for every shuffle; inject a seeded one for reproducible play
        :param deck_factory: Optional callable that returns a list of cards for one deck
        """
        if not 0 < penetration <= 1:
            raise ValueError("Penetration must be between 0 and 1")
        if num_decks < 1:
            logger.debug("Invalid deck count %s, using a single deck", num_decks)
            num_decks = 1

        self.num_decks = num_decks
        self.penetration = penetration
        self.rng = rng if rng is not None else random.Random()
        self.deck_factory = deck_factory

        # Calculate total cards based on deck factory or assume standard deck
        if deck_factory:
            self.cards_per_deck = len(deck_factory())
        else:
            self.cards_per_deck = 52

        self.total_cards = self.cards_per_deck * num_decks
        self.cards: List[Card] = []
        self.next_card_index = 0
        self.cut_card = 0

        self.reshuffle()

    def _build_decks(self) -> List[Card]:
        cards: List[Card] = []
        for _ in range(self.num_decks):
            if self.deck_factory:
                cards.extend(self.deck_factory())
            else:
                cards.extend(Deck().cards)
        return cards

    def reshuffle(self) -> None:
        """
        Discard the remaining pool and replace it with a freshly shuffled full set.

        The cut card position is recomputed against the new pool size.
        """
        self.cards = self._build_decks()
        self.rng.shuffle(self.cards)
        self.next_card_index = 0
        self.cut_card = int(len(self.cards) * self.penetration)
        logger.debug(
            "Reshuffled %d decks (%d cards), cut card at %d",
            self.num_decks,
            len(self.cards),
            self.cut_card,
        )

    def draw(self) -> Card:
        """
        Remove and return the front card of the pool.

        :raises EmptyShoeError: If no cards remain.
        """
        if self.is_empty():
            raise EmptyShoeError("shoe is empty")
        card = self.cards[self.next_card_index]
        self.next_card_index += 1
        return card

    def needs_reshuffle(self) -> bool:
        """Return True once the cut card has been reached."""
        return self.cards_remaining <= self.total_cards - self.cut_card

    def is_empty(self) -> bool:
        return self.cards_remaining <= 0

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the shoe."""
        return len(self.cards) - self.next_card_index

    def get_penetration_percentage(self) -> float:
        """Return how far through the shoe we are, as a fraction of the full shoe."""
        return (self.total_cards - self.cards_remaining) / self.total_cards

    def __str__(self) -> str:
        return (
            f"Shoe: {self.num_decks} decks, {self.cards_remaining} cards remaining "
            f"({self.get_penetration_percentage() * 100:.1f}% penetration)"
        )

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, penetration={self.penetration})"
