"""
BlackjackHand: value computation, lifecycle flags, per-hand betting and the action log.

A hand is the atomic unit of play. Its value is always derived from its cards;
its lifecycle ends in exactly one of stood, busted or surrendered; and all chip
movements for a bet (placing, doubling, splitting, surrendering and settling)
go through the methods on this class, using the owning player's chip manager.
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from pitboss.blackjack.action import ActionType, HandAction
from pitboss.blackjack.constants import (
    BLACKJACK,
    MAX_HANDS,
    SOFT_ACE_BONUS,
    get_blackjack_value,
)
from pitboss.blackjack.errors import InsufficientFundsError, InvalidActionError
from pitboss.common.card import Card, Rank
from pitboss.common.hand import Hand

if TYPE_CHECKING:
    from pitboss.blackjack.actor import Player
    from pitboss.blackjack.bankroll import ChipManager


def _raw_total(cards: Sequence[Card]) -> int:
    """Total with every Ace counted as 11."""
    return sum(get_blackjack_value(card.rank) for card in cards)


def _best_total(cards: Sequence[Card]) -> int:
    """
    Return the best total for the cards.

    Aces start at 11 and are reduced to 1, one at a time, while the total is over 21.
    """
    total = _raw_total(cards)
    aces = sum(1 for card in cards if card.rank == Rank.ACE)
    while total > BLACKJACK and aces:
        total -= SOFT_ACE_BONUS
        aces -= 1
    return total


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    __slots__ = (
        "player",
        "_is_split",
        "_is_active",
        "_is_stood",
        "_is_surrendered",
        "_is_doubled",
        "_actions",
        "_bet",
        "_winnings",
    )

    def __init__(self, player: Optional["Player"] = None, is_split: bool = False):
        """
        Create an empty hand.

        Args:
            player: The player who owns this hand and whose chips back its bet.
                The player owns the hand; this is a plain back-reference. Dealer
                hands have no player and cannot bet.
            is_split: Whether the hand was created by splitting a pair.
        """
        super().__init__()
        self.player = player
        self._is_split = is_split
        self._is_active = True
        self._is_stood = False
        self._is_surrendered = False
        self._is_doubled = False
        self._actions: List[HandAction] = []
        self._bet = 0
        self._winnings = 0

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    def value(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return _best_total(self._cards)

    @property
    def is_soft(self) -> bool:
        """
        Determine if the hand is soft: it holds an Ace and the total with every
        Ace counted as 11 does not exceed 21. A-6 is soft 17, A-A-5 is hard 17.
        """
        has_ace = any(card.rank == Rank.ACE for card in self._cards)
        return has_ace and _raw_total(self._cards) <= BLACKJACK

    @property
    def is_busted(self) -> bool:
        return self.value() > BLACKJACK

    @property
    def is_blackjack(self) -> bool:
        """A natural: two cards totalling 21 that did not come from a split."""
        return len(self._cards) == 2 and not self._is_split and self.value() == BLACKJACK

    @property
    def is_pair(self) -> bool:
        """Two cards of the same rank."""
        return len(self._cards) == 2 and self._cards[0].rank == self._cards[1].rank

    # ------------------------------------------------------------------
    # Lifecycle flags
    # ------------------------------------------------------------------

    @property
    def is_split(self) -> bool:
        """Return whether this hand was created from a split."""
        return self._is_split

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_stood(self) -> bool:
        return self._is_stood

    @property
    def is_surrendered(self) -> bool:
        return self._is_surrendered

    @property
    def is_doubled(self) -> bool:
        return self._is_doubled

    @property
    def is_terminal(self) -> bool:
        """True once the hand can no longer take player input."""
        return self._is_stood or self.is_busted or self.is_blackjack

    # ------------------------------------------------------------------
    # Cards and the action log
    # ------------------------------------------------------------------

    def add_card(
        self, card: Card, action_type: ActionType = ActionType.HIT, details: str = ""
    ) -> None:
        """Append a card and record how it arrived."""
        if self._is_stood:
            raise InvalidActionError("cannot add a card to a hand that is standing")
        super().add_card(card)
        self.record_action(action_type, details, card)

    def deal_card(self, card: Card) -> None:
        """Add a card as part of the initial deal."""
        self.add_card(card, ActionType.DEAL, "initial deal")

    def hit(self, card: Card, details: str = "player hit") -> None:
        self.add_card(card, ActionType.HIT, details)

    def double_down_hit(self, card: Card) -> None:
        """Add the single card a doubled hand receives."""
        self.add_card(card, ActionType.DOUBLE, "double down card")

    def record_action(
        self, action_type: ActionType, details: str = "", card: Optional[Card] = None
    ) -> None:
        self._actions.append(HandAction(type=action_type, card=card, details=details))

    @property
    def actions(self) -> List[HandAction]:
        """Returns a copy of all actions taken on this hand."""
        return list(self._actions)

    def action_summary(self) -> str:
        if not self._actions:
            return "No actions"
        return ", ".join(action.summary() for action in self._actions)

    def stand(self, details: str = "") -> None:
        """Mark the hand as stood. This is terminal for the hand."""
        if self._is_stood:
            raise InvalidActionError("hand is already standing")
        self._is_stood = True
        self._is_active = False
        self.record_action(ActionType.STAND, details)

    def clear(self) -> None:
        """
        Reset cards, flags, bet and winnings for a new round.

        The action log is append-only and survives a clear.
        """
        self._cards.clear()
        self._is_split = False
        self._is_active = True
        self._is_stood = False
        self._is_surrendered = False
        self._is_doubled = False
        self._bet = 0
        self._winnings = 0

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    @property
    def bet(self) -> int:
        """The amount currently at risk on this hand (zero once settled)."""
        return self._bet

    @property
    def winnings(self) -> int:
        """Net result of the hand; negative for a loss."""
        return self._winnings

    def _chip_manager(self) -> "ChipManager":
        if self.player is None:
            raise InvalidActionError("hand has no player, so it cannot hold a bet")
        return self.player.chip_manager

    def _require_chips(self, chips: "ChipManager", amount: int, purpose: str) -> None:
        if not chips.has_enough_chips(amount):
            raise InsufficientFundsError(
                f"insufficient chips to {purpose}: have {chips.get_chips()}, need {amount}"
            )

    def place_bet(self, amount: int) -> None:
        """
        Place the opening bet on this hand, deducting it from the owner's chips.

        Raises:
            InsufficientFundsError: If the amount is not positive or cannot be covered.
            InvalidActionError: If the hand already carries a bet.
        """
        chips = self._chip_manager()
        if amount <= 0:
            raise InsufficientFundsError("bet must be positive")
        if self._bet:
            raise InvalidActionError("a bet has already been placed on this hand")
        self._require_chips(chips, amount, "bet")

        chips.deduct_chips(amount)
        self._bet = amount

    def _doublable(self) -> bool:
        return (
            self.player is not None
            and len(self._cards) == 2
            and not self._is_stood
            and not self._is_doubled
        )

    def can_double_down(self) -> bool:
        """Two cards and enough chips to match the current bet."""
        return self._doublable() and self._chip_manager().has_enough_chips(self._bet)

    def double_down(self) -> None:
        """
        Double the bet. The hand is then expected to take exactly one card and stand;
        both of those steps are left to the caller.
        """
        if not self._doublable():
            raise InvalidActionError("cannot double down on this hand")
        chips = self._chip_manager()
        self._require_chips(chips, self._bet, "double down")

        chips.deduct_chips(self._bet)
        previous = self._bet
        self._bet *= 2
        self._is_doubled = True
        self.record_action(
            ActionType.DOUBLE, f"bet increased from {previous} to {self._bet}"
        )

    def _splittable(self) -> bool:
        return (
            self.player is not None
            and len(self.player.hands) < MAX_HANDS
            and self.is_pair
            and not self._is_stood
            and not self._is_doubled
        )

    def can_split(self) -> bool:
        """A pair, fewer than four hands for the owner, and chips to cover a second bet."""
        return self._splittable() and self._chip_manager().has_enough_chips(self._bet)

    def split(self) -> "BlackjackHand":
        """
        Move the second card into a new sibling hand carrying the same bet.

        Both hands are marked as split. The new hand is appended to the owner's
        hands and returned.
        """
        if not self._splittable():
            raise InvalidActionError("cannot split this hand")
        chips = self._chip_manager()
        self._require_chips(chips, self._bet, "split")

        chips.deduct_chips(self._bet)
        self.record_action(
            ActionType.SPLIT, f"split into {len(self.player.hands) + 1} hands"
        )
        second_card = self._cards.pop()
        self._is_split = True

        new_hand = BlackjackHand(player=self.player, is_split=True)
        new_hand.add_card(second_card, ActionType.DEAL, "split card")
        new_hand._bet = self._bet
        new_hand.record_action(ActionType.SPLIT, "created from split")
        self.player.add_hand(new_hand)
        return new_hand

    def can_surrender(self) -> bool:
        """Only on an unsplit player's first two cards, before standing or busting."""
        return (
            self.player is not None
            and len(self.player.hands) == 1
            and len(self._cards) == 2
            and not self._is_stood
            and not self._is_doubled
            and not self.is_busted
        )

    def surrender(self) -> None:
        """Forfeit the hand, returning half the bet, and stand."""
        if not self.can_surrender():
            raise InvalidActionError("cannot surrender this hand")
        chips = self._chip_manager()

        refund = self._bet // 2
        chips.add_chips(refund)
        self._winnings = -(self._bet - refund)
        self._bet = 0
        self._is_surrendered = True
        self.record_action(ActionType.SURRENDER, f"received {refund} chips back")
        self.stand()

    # Settlement primitives. Each must run at most once per hand per round; the
    # bet is zeroed so the game's payout loop skips hands already settled.

    def win_bet(self, multiplier: float = 1.0) -> int:
        """Pay back the bet plus ``bet * multiplier`` and return the winnings."""
        chips = self._chip_manager()
        winnings = int(self._bet * multiplier)
        chips.add_chips(self._bet + winnings)
        self._winnings = winnings
        self._bet = 0
        return winnings

    def lose_bet(self) -> int:
        """Record the loss; the chips left the player when the bet was placed."""
        self._chip_manager()
        self._winnings = -self._bet
        self._bet = 0
        return self._winnings

    def push_bet(self) -> int:
        """Return the bet unchanged."""
        chips = self._chip_manager()
        chips.add_chips(self._bet)
        self._winnings = 0
        self._bet = 0
        return self._winnings

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if not self._cards:
            return "Empty hand"
        cards = ", ".join(str(card) for card in self._cards)
        split_text = " (Split)" if self._is_split else ""
        return f"[{cards}] (Value: {self.value()}){split_text}"

    def str_hidden(self) -> str:
        """Render the hand with the first (hole) card face down."""
        if not self._cards:
            return "Empty hand"
        if len(self._cards) == 1:
            return "[Hidden]"
        visible = self._cards[1:]
        cards = ", ".join(["Hidden"] + [str(card) for card in visible])
        return f"[{cards}] (Visible Value: {_best_total(visible)})"
