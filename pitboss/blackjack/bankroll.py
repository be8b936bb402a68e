"""
Chip balance management for blackjack players.

Every player holds its chips behind a `ChipManager`. The hand-level betting
operations only ever talk to this interface, so alternate balance policies
(spending caps, externally persisted accounts) can be injected into a player
without touching any betting logic.
"""

from abc import ABC, abstractmethod

from pitboss.blackjack.errors import InsufficientFundsError


class ChipManager(ABC):
    """
    Abstract balance capability used by a player's hands.

    Implementations must never let the balance go negative: `deduct_chips`
    raises `InsufficientFundsError` instead.
    """

    @abstractmethod
    def get_chips(self) -> int:
        """Return the current chip count."""

    @abstractmethod
    def set_chips(self, amount: int) -> None:
        """Set the chip count to the specified amount."""

    @abstractmethod
    def add_chips(self, amount: int) -> None:
        """Add the specified amount to the chip count."""

    @abstractmethod
    def deduct_chips(self, amount: int) -> None:
        """Remove the specified amount from the chip count."""

    @abstractmethod
    def has_enough_chips(self, amount: int) -> bool:
        """Return True if the specified amount could be deducted."""


class BasicChipManager(ChipManager):
    """
    A simple integer chip counter.
    """

    def __init__(self, initial_chips: int = 0):
        """
        Initialize a basic chip manager.

        Args:
            initial_chips: Starting chip count
        """
        if initial_chips < 0:
            raise ValueError("Initial chips cannot be negative")
        self._chips = initial_chips

    def get_chips(self) -> int:
        return self._chips

    def set_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Chip count cannot be negative")
        self._chips = amount

    def add_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot add a negative amount of chips")
        self._chips += amount

    def deduct_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot deduct a negative amount of chips")
        if amount > self._chips:
            raise InsufficientFundsError(
                f"insufficient chips: have {self._chips}, need {amount}"
            )
        self._chips -= amount

    def has_enough_chips(self, amount: int) -> bool:
        return self._chips >= amount

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._chips})"


class SpendingLimitChipManager(BasicChipManager):
    """
    Chip manager that caps the total amount wagered in a period.

    Chips returned by wins or pushes do not restore the allowance; call
    `reset_spending` to start a new period.
    """

    def __init__(self, initial_chips: int, spending_limit: int):
        """
        Args:
            initial_chips: Starting chip count
            spending_limit: Maximum total deductions allowed per period
        """
        super().__init__(initial_chips)
        if spending_limit < 0:
            raise ValueError("Spending limit cannot be negative")
        self.spending_limit = spending_limit
        self.spent = 0

    @property
    def remaining_allowance(self) -> int:
        return self.spending_limit - self.spent

    def deduct_chips(self, amount: int) -> None:
        if amount > self.remaining_allowance:
            raise InsufficientFundsError(
                f"spending limit exceeded: spent {self.spent}, limit "
                f"{self.spending_limit}, trying to spend {amount} more"
            )
        super().deduct_chips(amount)
        self.spent += amount

    def has_enough_chips(self, amount: int) -> bool:
        return super().has_enough_chips(amount) and amount <= self.remaining_allowance

    def reset_spending(self) -> None:
        """Start a new spending period."""
        self.spent = 0
