"""Blackjack-specific constants and value mappings."""

from pitboss.common.card import Rank

BLACKJACK = 21
DEALER_STAND_VALUE = 17
SOFT_ACE_BONUS = 10  # difference between an Ace counted as 11 and as 1

# A player may hold at most this many hands, the second through fourth created by splitting
MAX_HANDS = 4

DEFAULT_NUM_DECKS = 6
DEFAULT_PENETRATION = 0.75
DEFAULT_BLACKJACK_PAYOUT = 1.5
DEFAULT_STARTING_CHIPS = 1000

# Aces are counted as 11 here and reduced to 1 by the hand when needed
BLACKJACK_VALUES = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,
}


def get_blackjack_value(rank: Rank) -> int:
    """Get the blackjack value for a given rank."""
    return BLACKJACK_VALUES[rank]
