"""
This module provides the `Player` and `Dealer` classes for a game of Blackjack.

The `Player` class represents a player in the game. It holds one to four hands
(the second through fourth created by splitting), a cursor selecting the hand
currently in play, and a chip balance behind a pluggable `ChipManager`. Every
betting operation is delegated to the selected hand, which owns the chip math.

The `Dealer` class represents the dealer in the game. It holds a single hand,
never bets, and draws according to a fixed table of rules.

This module is part of the `pitboss` package.
"""

from typing import List, Optional

from pitboss.blackjack.bankroll import BasicChipManager, ChipManager
from pitboss.blackjack.constants import (
    BLACKJACK,
    DEALER_STAND_VALUE,
    DEFAULT_STARTING_CHIPS,
    MAX_HANDS,
)
from pitboss.blackjack.errors import InvalidActionError
from pitboss.blackjack.hand import BlackjackHand
from pitboss.common.actor import Actor
from pitboss.common.card import Card


class Player(Actor):
    """A player in a game of Blackjack."""

    def __init__(
        self,
        name: str,
        chips: int = DEFAULT_STARTING_CHIPS,
        chip_manager: Optional[ChipManager] = None,
    ):
        """
        Creates a new player.

        Args:
            name: Player name, unique at the table.
            chips: Starting chips for the default chip manager.
            chip_manager: Balance capability to use instead of a plain counter.
        """
        super().__init__(name)
        self.chip_manager = chip_manager if chip_manager is not None else BasicChipManager(chips)
        self.hands: List[BlackjackHand] = [BlackjackHand(player=self)]
        self.current_hand_index = 0
        self.active = True

    @property
    def chips(self) -> int:
        return self.chip_manager.get_chips()

    def add_chips(self, amount: int) -> None:
        self.chip_manager.add_chips(amount)

    @property
    def total_bet(self) -> int:
        """Sum of the bets still at risk across all hands."""
        return sum(hand.bet for hand in self.hands)

    def hand_values(self) -> List[int]:
        return [hand.value() for hand in self.hands]

    def _hand(self, hand_index: Optional[int]) -> BlackjackHand:
        if hand_index is None:
            return self.current_hand
        if not 0 <= hand_index < len(self.hands):
            raise InvalidActionError(f"{self.name} has no hand {hand_index + 1}")
        return self.hands[hand_index]

    def set_current_hand_index(self, index: int) -> None:
        if not 0 <= index < len(self.hands):
            raise InvalidActionError(f"{self.name} has no hand {index + 1}")
        self.current_hand_index = index

    def add_hand(self, hand: BlackjackHand) -> None:
        """Append a hand created by splitting."""
        if len(self.hands) >= MAX_HANDS:
            raise InvalidActionError(f"{self.name} cannot hold more than {MAX_HANDS} hands")
        self.hands.append(hand)

    # Per-hand operations. Each acts on the current hand unless a hand index is given.

    def place_bet(self, amount: int, hand_index: Optional[int] = None) -> None:
        self._hand(hand_index).place_bet(amount)

    def hit(self, card: Card, hand_index: Optional[int] = None) -> None:
        self._hand(hand_index).hit(card)

    def stand(self, hand_index: Optional[int] = None) -> None:
        self._hand(hand_index).stand()

    def can_double_down(self, hand_index: Optional[int] = None) -> bool:
        return self._hand(hand_index).can_double_down()

    def double_down(self, hand_index: Optional[int] = None) -> None:
        self._hand(hand_index).double_down()

    def can_split(self, hand_index: Optional[int] = None) -> bool:
        return self._hand(hand_index).can_split()

    def split(self, hand_index: Optional[int] = None) -> BlackjackHand:
        return self._hand(hand_index).split()

    def can_surrender(self, hand_index: Optional[int] = None) -> bool:
        return self._hand(hand_index).can_surrender()

    def surrender(self, hand_index: Optional[int] = None) -> None:
        self._hand(hand_index).surrender()

    # Turn progression

    def is_standing(self) -> bool:
        """True if the player is inactive or the current hand takes no more input."""
        return not self.active or self.current_hand.is_terminal

    def has_active_hands(self) -> bool:
        """True if any hand from the cursor onward is still playable."""
        if not self.active:
            return False
        return any(
            not hand.is_terminal for hand in self.hands[self.current_hand_index :]
        )

    def move_to_next_active_hand(self) -> bool:
        """
        Move the cursor to the first playable hand.

        Returns False and leaves the cursor alone when no hand is playable.
        """
        for index, hand in enumerate(self.hands):
            if not hand.is_terminal:
                self.current_hand_index = index
                return True
        return False

    def clear_hand(self) -> None:
        """Reset to a single fresh hand, discarding any split hands."""
        self.hands = [BlackjackHand(player=self)]
        self.current_hand_index = 0

    def __str__(self) -> str:
        status = "active" if self.active else "inactive"
        header = f"{self.name} (Chips: {self.chips}, Bet: {self.total_bet}, {status})"
        if len(self.hands) == 1:
            return f"{header}: {self.hands[0]}"

        lines = []
        for index, hand in enumerate(self.hands):
            current = " *CURRENT*" if index == self.current_hand_index else ""
            lines.append(f"Hand {index + 1}: {hand}{current}")
        return f"{header}:\n  " + "\n  ".join(lines)


class Dealer(Actor):
    """A dealer in a game of Blackjack."""

    def __init__(self, name: str = "Dealer", hit_soft_17: bool = True):
        super().__init__(name)
        self.hit_soft_17 = hit_soft_17
        self.hands: List[BlackjackHand] = [BlackjackHand()]

    @property
    def hand(self) -> BlackjackHand:
        """Returns the dealer's hand."""
        return self.hands[0]

    @property
    def up_card(self) -> Card:
        """The dealer's face-up card."""
        if not self.hand.count:
            raise InvalidActionError("dealer has no cards")
        return self.hand.cards[0]

    def hit(self, card: Card) -> None:
        self.hand.hit(card, "dealer hit")

    def stand(self) -> None:
        self.hand.stand("dealer stands")

    def should_hit(self) -> bool:
        """
        Decide whether the dealer draws another card.

        Stands when busted, on hard 17 or more and on 18 or more; hits soft 17
        when `hit_soft_17` is set; hits 16 or less.
        """
        hand = self.hand
        value = hand.value()
        if value > BLACKJACK:
            return False
        if value >= DEALER_STAND_VALUE and not hand.is_soft:
            return False
        if value == DEALER_STAND_VALUE and hand.is_soft:
            return self.hit_soft_17
        if value > DEALER_STAND_VALUE:
            return False
        return True

    @property
    def has_blackjack(self) -> bool:
        return self.hand.is_blackjack

    @property
    def is_busted(self) -> bool:
        return self.hand.is_busted

    def value(self) -> int:
        return self.hand.value()

    def clear_hand(self) -> None:
        self.hand.clear()

    def __str__(self) -> str:
        return f"Dealer: {self.hand}"

    def str_hidden(self) -> str:
        return f"Dealer: {self.hand.str_hidden()}"
