from typing import Optional

from pitboss.blackjack.constants import (
    DEFAULT_BLACKJACK_PAYOUT,
    DEFAULT_NUM_DECKS,
    DEFAULT_PENETRATION,
    DEFAULT_STARTING_CHIPS,
)
from pitboss.blackjack.errors import TableLimitError


class Rules:
    """
    Table configuration for a blackjack game.

    Args:
        num_decks: Decks in the shoe. Values below 1 are raised to 1 by the shoe.
        penetration: Fraction of the shoe dealt before the cut card, 0 < p <= 1.
        blackjack_payout: Winnings multiplier for a natural blackjack.
        dealer_hit_soft_17: Whether the dealer draws on soft 17.
        min_bet: Smallest bet accepted at the table.
        max_bet: Largest bet accepted at the table, or None for no limit.
        starting_chips: Chips given to players added without an explicit amount.
    """

    def __init__(
        self,
        num_decks: int = DEFAULT_NUM_DECKS,
        penetration: float = DEFAULT_PENETRATION,
        blackjack_payout: float = DEFAULT_BLACKJACK_PAYOUT,
        dealer_hit_soft_17: bool = True,
        min_bet: int = 1,
        max_bet: Optional[int] = None,
        starting_chips: int = DEFAULT_STARTING_CHIPS,
    ):
        if not 0 < penetration <= 1:
            raise ValueError("Penetration must be between 0 and 1")
        if min_bet < 1:
            raise ValueError("Minimum bet must be at least 1")
        if max_bet is not None and max_bet < min_bet:
            raise ValueError("Maximum bet cannot be below the minimum bet")
        if starting_chips < 0:
            raise ValueError("Starting chips cannot be negative")

        self.num_decks = num_decks
        self.penetration = penetration
        self.blackjack_payout = blackjack_payout
        self.dealer_hit_soft_17 = dealer_hit_soft_17
        self.min_bet = min_bet
        self.max_bet = max_bet
        self.starting_chips = starting_chips

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "num_decks": self.num_decks,
            "penetration": self.penetration,
            "blackjack_payout": self.blackjack_payout,
            "dealer_hit_soft_17": self.dealer_hit_soft_17,
            "min_bet": self.min_bet,
            "max_bet": self.max_bet,
            "starting_chips": self.starting_chips,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Rules":
        """Build rules from a dictionary produced by `to_dict`."""
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            raise ValueError(f"Unknown rule settings: {', '.join(sorted(unknown))}")
        return cls(**data)

    def check_bet(self, amount: int) -> None:
        """
        Check a bet against the table limits.

        Raises:
            TableLimitError: If the bet is below the minimum or above the maximum.
        """
        if amount < self.min_bet:
            raise TableLimitError(f"Bet must be at least {self.min_bet}")
        if self.max_bet is not None and amount > self.max_bet:
            raise TableLimitError(f"Bet would exceed table maximum of {self.max_bet}")

    def __repr__(self) -> str:
        settings = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"Rules({settings})"
