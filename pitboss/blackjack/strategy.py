import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from pitboss.blackjack.action import Action
from pitboss.blackjack.constants import DEALER_STAND_VALUE, get_blackjack_value
from pitboss.common.card import Card, Rank

logger = logging.getLogger("pitboss.strategy")


def valid_actions(player) -> List[Action]:
    """Actions the player may take on their current hand."""
    if player.is_standing():
        return []
    actions = [Action.HIT, Action.STAND]
    if player.can_double_down():
        actions.append(Action.DOUBLE)
    if player.can_split():
        actions.append(Action.SPLIT)
    if player.can_surrender():
        actions.append(Action.SURRENDER)
    return actions


class Strategy(ABC):
    @abstractmethod
    def decide_action(self, player, dealer_up_card: Card) -> Action:
        pass

    def get_bet_amount(self, min_bet: int, max_bet, player_chips: int) -> int:
        """
        Determine bet amount for next hand. Called BEFORE cards are dealt.
        Default implementation returns minimum bet.
        """
        return min_bet


class DealerStrategy(Strategy):
    """Play the player's hand the way the dealer plays: hit below 17 and on soft 17."""

    def decide_action(self, player, dealer_up_card: Card = None) -> Action:
        hand = player.current_hand
        if hand.is_busted:
            return Action.STAND
        if hand.value() < DEALER_STAND_VALUE or (
            hand.value() == DEALER_STAND_VALUE and hand.is_soft
        ):
            return Action.HIT
        return Action.STAND


# Rows are keyed by hand type; columns are the dealer up card 2-10, A.
# H hit, S stand, D double (else hit), DS double (else stand), P split,
# R surrender (else hit), RS surrender (else stand).
BASIC_STRATEGY_TABLE: Dict[str, str] = {
    "Hard5": "H H H H H H H H H H",
    "Hard6": "H H H H H H H H H H",
    "Hard7": "H H H H H H H H H H",
    "Hard8": "H H H H H H H H H H",
    "Hard9": "H D D D D H H H H H",
    "Hard10": "D D D D D D D D H H",
    "Hard11": "D D D D D D D D D D",
    "Hard12": "H H S S S H H H H H",
    "Hard13": "S S S S S H H H H H",
    "Hard14": "S S S S S H H H H H",
    "Hard15": "S S S S S H H H R R",
    "Hard16": "S S S S S H H R R R",
    "Hard17": "S S S S S S S S S RS",
    "Hard18": "S S S S S S S S S S",
    "Hard19": "S S S S S S S S S S",
    "Hard20": "S S S S S S S S S S",
    "Hard21": "S S S S S S S S S S",
    "Soft13": "H H H D D H H H H H",
    "Soft14": "H H H D D H H H H H",
    "Soft15": "H H D D D H H H H H",
    "Soft16": "H H D D D H H H H H",
    "Soft17": "H D D D D H H H H H",
    "Soft18": "DS DS DS DS DS S S H H H",
    "Soft19": "S S S S DS S S S S S",
    "Soft20": "S S S S S S S S S S",
    "Soft21": "S S S S S S S S S S",
    "Pair2": "P P P P P P H H H H",
    "Pair3": "P P P P P P H H H H",
    "Pair4": "H H H P P H H H H H",
    "Pair5": "D D D D D D D D H H",
    "Pair6": "P P P P P H H H H H",
    "Pair7": "P P P P P P H H H H",
    "Pair8": "P P P P P P P P P P",
    "Pair9": "P P P P P S P P S S",
    "Pair10": "S S S S S S S S S S",
    "PairA": "P P P P P P P P P P",
}


class BasicStrategy(Strategy):
    def __init__(self, table: Dict[str, str] = None):
        table = table if table is not None else BASIC_STRATEGY_TABLE
        self.strategy = {hand_type: row.split() for hand_type, row in table.items()}
        self.dealer_indexes = {
            "2": 0,
            "3": 1,
            "4": 2,
            "5": 3,
            "6": 4,
            "7": 5,
            "8": 6,
            "9": 7,
            "10": 8,
            "A": 9,
        }

    def _get_hand_type(self, hand, can_split: bool) -> str:
        if hand.is_pair and can_split:
            rank = hand.cards[0].rank
            if rank == Rank.ACE:
                return "PairA"
            return f"Pair{get_blackjack_value(rank)}"
        if hand.is_soft:
            return f"Soft{hand.value()}"
        return f"Hard{hand.value()}"

    def _get_dealer_card(self, dealer_up_card: Card) -> str:
        rank = dealer_up_card.rank
        if rank == Rank.ACE:
            return "A"
        return str(get_blackjack_value(rank))

    def _get_action_from_strategy(self, hand_type: str, dealer_card: str) -> str:
        actions = self.strategy.get(hand_type)
        if not actions:
            return "H"  # Default to Hit if hand type not found
        return actions[self.dealer_indexes[dealer_card]]

    def _map_action_symbol(self, symbol: str) -> Action:
        mapping = {
            "H": Action.HIT,
            "S": Action.STAND,
            "D": Action.DOUBLE,
            "DS": Action.DOUBLE,
            "P": Action.SPLIT,
            "R": Action.SURRENDER,
            "RS": Action.SURRENDER,
        }
        return mapping[symbol]

    def decide_action(self, player, dealer_up_card: Card) -> Action:
        legal = valid_actions(player)
        hand_type = self._get_hand_type(player.current_hand, Action.SPLIT in legal)
        dealer_card = self._get_dealer_card(dealer_up_card)
        action_symbol = self._get_action_from_strategy(hand_type, dealer_card)

        try:
            action = self._map_action_symbol(action_symbol)
        except KeyError:
            logger.warning("Unknown action symbol: %s, defaulting to HIT", action_symbol)
            action = Action.HIT

        final_action = self._get_valid_action(legal, action, action_symbol)
        logger.debug(
            "%s vs %s: %s -> %s", hand_type, dealer_card, action_symbol, final_action.value
        )
        return final_action

    def _get_valid_action(self, legal: List[Action], action: Action, action_symbol: str) -> Action:
        if action in legal:
            return action
        if action_symbol in ("DS", "RS"):
            return Action.STAND
        if Action.HIT in legal:
            return Action.HIT
        return Action.STAND
