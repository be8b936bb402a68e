"""
Exceptions raised by the blackjack engine.

    - `InsufficientFundsError`: Raised when a player does not have enough chips to perform an action.
    - `InvalidActionError`: Raised when an action's preconditions do not hold.
    - `PlayerNotFoundError`: Raised when an action names a player who is not seated.
    - `TableLimitError`: Raised when a bet falls outside the table limits.

An empty shoe is reported separately by `pitboss.common.shoe.EmptyShoeError`.
"""


class BlackjackError(Exception):
    """Base class for rule violations reported by the engine."""

    pass


class InsufficientFundsError(BlackjackError):
    """Raised when a player does not have enough chips to perform an action."""

    pass


class InvalidActionError(BlackjackError):
    """Raised when a player attempts to perform an action that is not currently valid."""

    pass


class PlayerNotFoundError(InvalidActionError):
    """Raised when an action is addressed to a player who is not at the table."""

    pass


class TableLimitError(BlackjackError):
    """Raised when a bet would fall outside the table limits."""

    pass
