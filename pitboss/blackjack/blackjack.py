"""
This module contains the round orchestrator for a game of Blackjack.

A `BlackjackGame` owns one table: a shoe, a dealer and the seated players. A
round is driven externally, one call per step:

1. `start_new_round` resets every hand and reshuffles if the cut card was reached.
2. `place_bet` for each player, then `deal_initial_cards`.
3. `player_hit`, `player_stand`, `player_split`, `player_surrender` and
   `player_double_down_hit` while `get_active_player` names someone.
4. `dealer_play` once `is_round_complete`.
5. `payout_results` settles every open bet exactly once.

Every step validates its preconditions before touching the shoe or a hand and
raises one of the errors in `pitboss.blackjack.errors` (or `EmptyShoeError`)
without changing any state.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pitboss.blackjack.action import ActionType
from pitboss.blackjack.actor import Dealer, Player
from pitboss.blackjack.bankroll import ChipManager
from pitboss.blackjack.errors import InvalidActionError, PlayerNotFoundError
from pitboss.blackjack.hand import BlackjackHand
from pitboss.blackjack.rules import Rules
from pitboss.blackjack.stats import SimulationStats
from pitboss.common.shoe import EmptyShoeError, Shoe

logger = logging.getLogger("pitboss.blackjack")


class GameResult(Enum):
    """Result of one player hand against the dealer."""

    PLAYER_WIN = "Player Wins"
    DEALER_WIN = "Dealer Wins"
    PUSH = "Push (Tie)"
    PLAYER_BLACKJACK = "Player Blackjack"
    DEALER_BLACKJACK = "Dealer Blackjack"


@dataclass(frozen=True)
class HandOutcome:
    """Settlement record for one hand."""

    player_name: str
    hand_index: int
    result: GameResult
    winnings: int


class BlackjackGame:
    """
    A class to represent a game of Blackjack.

    Attributes
    ----------
    rules : Rules
        Table configuration.
    shoe : Shoe
        Shoe of cards for the game.
    dealer : Dealer
        Dealer for the game.
    round : int
        Number of rounds started so far.
    stats : SimulationStats
        Statistics for the rounds settled so far.
    """

    def __init__(self, rules: Optional[Rules] = None, rng: Optional[random.Random] = None):
        self.rules = rules if rules is not None else Rules()
        self.shoe = Shoe(
            num_decks=self.rules.num_decks,
            penetration=self.rules.penetration,
            rng=rng,
        )
        self.dealer = Dealer(hit_soft_17=self.rules.dealer_hit_soft_17)
        self._players: List[Player] = []
        self.round = 0
        self.stats = SimulationStats()
        self._stats_round: Optional[int] = None

    # Player management

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    def add_player(
        self,
        name: str,
        chips: Optional[int] = None,
        chip_manager: Optional[ChipManager] = None,
    ) -> Player:
        """
        Seat a new player.

        :param name: Unique name at the table
        :param chips: Starting chips, defaulting to the table's starting chips
        :param chip_manager: Balance capability to use instead of a plain counter
        :raises InvalidActionError: If a player with that name is already seated
        """
        if self.get_player(name) is not None:
            raise InvalidActionError(f"player {name} is already at the table")
        if chips is None:
            chips = self.rules.starting_chips

        player = Player(name, chips=chips, chip_manager=chip_manager)
        self._players.append(player)
        logger.debug("Added player %s with %d chips", name, player.chips)
        return player

    def get_player(self, name: str) -> Optional[Player]:
        for player in self._players:
            if player.name == name:
                return player
        return None

    def remove_player(self, name: str) -> bool:
        player = self.get_player(name)
        if player is None:
            return False
        if player.total_bet:
            logger.warning(
                "Removing %s with %d chips still bet on the table", name, player.total_bet
            )
        self._players.remove(player)
        return True

    def _require_player(self, name: str) -> Player:
        player = self.get_player(name)
        if player is None:
            raise PlayerNotFoundError(f"player {name} not found")
        return player

    def _acting_player(self, name: str) -> Player:
        player = self._require_player(name)
        if not player.active:
            raise InvalidActionError(f"player {name} is not active")
        if player.is_standing():
            raise InvalidActionError(f"player {name} is already standing")
        return player

    def place_bet(self, name: str, amount: int) -> None:
        """
        Place the opening bet for a player's current hand.

        :raises PlayerNotFoundError: If no player has that name
        :raises InvalidActionError: If the player is inactive or already has a bet down
        :raises TableLimitError: If the bet is outside the table limits
        :raises InsufficientFundsError: If the bet is not positive or cannot be covered
        """
        player = self._require_player(name)
        if not player.active:
            raise InvalidActionError(f"player {name} is not active")
        if amount > 0:
            self.rules.check_bet(amount)
        player.place_bet(amount)
        logger.debug("%s bets %d", name, amount)

    # Round flow

    def ensure_shoe_ready(self) -> bool:
        """Reshuffle if the cut card has been reached. Returns True if a reshuffle happened."""
        if self.shoe.is_empty() or self.shoe.needs_reshuffle():
            self.shoe.reshuffle()
            logger.info("Shoe reshuffled before round %d", self.round)
            return True
        return False

    def start_new_round(self) -> None:
        """
        Reset every hand for the next round and reshuffle if the cut card was reached.

        :raises InvalidActionError: If a player still has an unsettled bet
        """
        unsettled = [player.name for player in self._players if player.total_bet]
        if unsettled:
            raise InvalidActionError(
                f"bets are still open for {', '.join(unsettled)}; settle the round first"
            )

        self.round += 1
        logger.info("Starting round %d", self.round)

        self.dealer.clear_hand()
        for player in self._players:
            player.clear_hand()
            player.active = True

        self.ensure_shoe_ready()

    def deal_initial_cards(self) -> None:
        """
        Deal two cards to every active player and to the dealer, one at a time.

        :raises InvalidActionError: If cards have already been dealt this round
        :raises EmptyShoeError: If the shoe runs out mid-deal; the round cannot continue
        """
        active = [player for player in self._players if player.active]
        if self.dealer.hand.count or any(player.current_hand.count for player in active):
            raise InvalidActionError("cards have already been dealt this round")

        for _ in range(2):
            for player in active:
                player.deal_card(self.shoe.draw())
            self.dealer.deal_card(self.shoe.draw())

        for player in active:
            logger.debug("%s dealt %s", player.name, player.current_hand)
        logger.debug("Dealer shows %s", self.dealer.up_card)

    def _advance(self, player: Player) -> None:
        """Move past a finished hand, deactivating the player when none are left."""
        if not player.current_hand.is_terminal:
            return
        if not player.move_to_next_active_hand():
            player.active = False
            logger.debug("%s has finished all hands", player.name)

    def player_hit(self, name: str) -> None:
        player = self._acting_player(name)
        card = self.shoe.draw()
        player.hit(card)
        logger.debug("%s hits: %s", name, player.current_hand)
        self._advance(player)

    def player_stand(self, name: str) -> None:
        player = self._acting_player(name)
        player.stand()
        logger.debug("%s stands on %d", name, player.current_hand.value())
        self._advance(player)

    def player_split(self, name: str) -> BlackjackHand:
        """
        Split the player's current pair and deal one card to each resulting hand.

        Returns the newly created hand.
        """
        player = self._acting_player(name)
        hand = player.current_hand
        if player.can_split() and self.shoe.cards_remaining < 2:
            raise EmptyShoeError("not enough cards left to split")

        new_hand = player.split()
        hand.add_card(self.shoe.draw(), ActionType.DEAL, "split deal")
        new_hand.add_card(self.shoe.draw(), ActionType.DEAL, "split deal")
        logger.debug("%s splits into %d hands", name, len(player.hands))
        self._advance(player)
        return new_hand

    def player_surrender(self, name: str) -> None:
        player = self._acting_player(name)
        player.surrender()
        logger.debug("%s surrenders", name)
        self._advance(player)

    def player_double_down_hit(self, name: str) -> None:
        """Double the bet, take exactly one card and stand."""
        player = self._acting_player(name)
        hand = player.current_hand
        if player.can_double_down() and self.shoe.is_empty():
            raise EmptyShoeError("no card left to double down")

        hand.double_down()
        hand.double_down_hit(self.shoe.draw())
        hand.stand("double down")
        logger.debug("%s doubles down: %s", name, hand)
        self._advance(player)

    def dealer_play(self) -> None:
        """
        Draw for the dealer while the table says to, then stand.

        :raises InvalidActionError: If a player still has a hand to play
        """
        if not self.is_round_complete():
            raise InvalidActionError("players are still acting")
        while self.dealer.should_hit():
            self.dealer.hit(self.shoe.draw())
        self.dealer.stand()
        logger.debug("Dealer finishes with %s", self.dealer.hand)

    # Settlement

    def evaluate_hand(self, hand: BlackjackHand) -> GameResult:
        """Compare one hand against the dealer's. Has no side effects."""
        dealer_hand = self.dealer.hand
        if hand.is_blackjack and dealer_hand.is_blackjack:
            return GameResult.PUSH
        if hand.is_blackjack:
            return GameResult.PLAYER_BLACKJACK
        if dealer_hand.is_blackjack:
            return GameResult.DEALER_BLACKJACK
        if hand.is_busted:
            return GameResult.DEALER_WIN
        if dealer_hand.is_busted:
            return GameResult.PLAYER_WIN

        player_value = hand.value()
        dealer_value = dealer_hand.value()
        if player_value > dealer_value:
            return GameResult.PLAYER_WIN
        if player_value < dealer_value:
            return GameResult.DEALER_WIN
        return GameResult.PUSH

    def payout_results(self) -> List[HandOutcome]:
        """
        Settle every hand that still carries a bet.

        Settled hands have their bet zeroed, so calling this again settles nothing.
        """
        outcomes = []
        for player in self._players:
            for index, hand in enumerate(player.hands):
                if hand.bet == 0:
                    continue

                result = self.evaluate_hand(hand)
                if result == GameResult.PLAYER_BLACKJACK:
                    winnings = hand.win_bet(self.rules.blackjack_payout)
                elif result == GameResult.PLAYER_WIN:
                    winnings = hand.win_bet(1.0)
                elif result == GameResult.PUSH:
                    winnings = hand.push_bet()
                else:
                    winnings = hand.lose_bet()

                outcomes.append(HandOutcome(player.name, index, result, winnings))
                logger.debug(
                    "%s hand %d: %s (%+d)", player.name, index + 1, result.value, winnings
                )

        if self._stats_round != self.round and (outcomes or self.dealer.hand.is_stood):
            self._stats_round = self.round
            hands = [hand for player in self._players for hand in player.hands]
            surrenders = sum(1 for hand in hands if hand.is_surrendered)
            net = sum(hand.winnings for hand in hands)
            self.stats.update(outcomes, surrenders=surrenders, net_winnings=net)
            logger.info("Round %d settled: %d hands, net %+d", self.round, len(outcomes), net)

        return outcomes

    # Status

    def is_round_complete(self) -> bool:
        """True once every active player is standing on their current hand."""
        return all(player.is_standing() for player in self._players if player.active)

    def get_active_player(self) -> Optional[Player]:
        """The first player who still has a decision to make, if any."""
        for player in self._players:
            if player.active and not player.is_standing():
                return player
        return None

    def game_status(self, show_dealer_hole: bool = False) -> str:
        lines = [f"Round {self.round}", str(self.shoe)]
        lines.append(str(self.dealer) if show_dealer_hole else self.dealer.str_hidden())
        lines.extend(str(player) for player in self._players)
        return "\n".join(lines)
