"""
Player decisions and the per-hand action log.

`Action` enumerates the choices a player can make on a hand. `ActionType` and
`HandAction` describe entries in a hand's append-only audit trail, which also
records dealt cards. Nothing in the rules engine reads the audit trail.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pitboss.common.card import Card


class Action(Enum):
    """Enum for the possible actions a player can take in a game of blackjack."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"


class ActionType(Enum):
    """Kinds of entries recorded in a hand's action log."""

    DEAL = "deal"
    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"


_SUMMARY_VERBS = {
    ActionType.DEAL: "dealt",
    ActionType.HIT: "hit",
    ActionType.DOUBLE: "double",
}


@dataclass(frozen=True)
class HandAction:
    """A single entry in a hand's action log."""

    type: ActionType
    card: Optional[Card] = None
    timestamp: datetime = field(default_factory=datetime.now)
    details: str = ""

    def summary(self) -> str:
        """Render the entry for display, e.g. ``"hit 5 of ♣ (player hit)"``."""
        text = _SUMMARY_VERBS.get(self.type, self.type.value)
        if self.card is not None:
            text = f"{text} {self.card}"
        if self.details:
            text = f"{text} ({self.details})"
        return text

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "card": str(self.card) if self.card is not None else None,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }
