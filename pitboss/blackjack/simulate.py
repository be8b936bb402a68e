"""
This module runs automated rounds of Blackjack from the command line.

Every seated player is played by the same strategy: `--strat basic` follows a
basic strategy table, `--strat dealer` mimics the dealer. `--seed` makes the
run reproducible and `--vis` plots the table's running net winnings.

For example, `pitboss-sim --num_games 1000 --players Alice Bob --seed 7` plays
a thousand rounds for two players and prints a summary.
"""

import argparse
import logging
import os
import random
import time
from typing import List, Optional

import matplotlib.pyplot as plt

from pitboss.blackjack.action import Action
from pitboss.blackjack.blackjack import BlackjackGame, HandOutcome
from pitboss.blackjack.constants import (
    DEFAULT_NUM_DECKS,
    DEFAULT_PENETRATION,
    DEFAULT_STARTING_CHIPS,
)
from pitboss.blackjack.rules import Rules
from pitboss.blackjack.strategy import BasicStrategy, DealerStrategy, Strategy

logger = logging.getLogger("pitboss.blackjack")

STRATEGIES = {
    "basic": BasicStrategy,
    "dealer": DealerStrategy,
}


class BankrollGraph:
    def __init__(self, max_games):
        self.max_games = max_games
        self.games = []
        self.net_earnings = []

        plt.ion()  # Turn on interactive mode
        self.fig, self.ax = plt.subplots()
        (self.line,) = self.ax.plot([], [], "b-")

        self.ax.set_xlim(0, max_games)
        self.ax.set_ylim(-100, 100)
        self.ax.set_title("Blackjack Performance")
        self.ax.set_xlabel("Games")
        self.ax.set_ylabel("Net Earnings")
        self.ax.grid(True)

    def update(self, game_number, earnings):
        self.games.append(game_number)
        self.net_earnings.append(earnings)

        self.line.set_data(self.games, self.net_earnings)

        if game_number > self.ax.get_xlim()[1]:
            self.ax.set_xlim(0, game_number + 10)

        y_min = min(self.net_earnings) - 10
        y_max = max(self.net_earnings) + 10
        self.ax.set_ylim(y_min, y_max)

        self.fig.canvas.draw()
        self.fig.canvas.flush_events()


def configure_logging(level: str = "WARNING") -> None:
    """
    Attach a console handler to the package logger.

    Setting PITBOSS_DISABLE_LOGGING to 1, true or yes raises the threshold to ERROR.
    """
    root = logging.getLogger("pitboss")
    if os.environ.get("PITBOSS_DISABLE_LOGGING", "").lower() in ("1", "true", "yes"):
        root.setLevel(logging.ERROR)
    else:
        root.setLevel(getattr(logging, level.upper()))

    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def play_round(game: BlackjackGame, strategy: Strategy, bet: int) -> List[HandOutcome]:
    """
    Play one full round with every player driven by the strategy.

    Players who cannot cover the bet sit the round out.
    """
    game.start_new_round()

    for player in game.players:
        amount = strategy.get_bet_amount(bet, game.rules.max_bet, player.chips)
        if not player.chip_manager.has_enough_chips(amount):
            logger.debug("%s cannot cover a bet of %d and sits out", player.name, amount)
            player.active = False
            continue
        game.place_bet(player.name, amount)

    if not any(player.active for player in game.players):
        return []

    game.deal_initial_cards()

    actions = {
        Action.HIT: game.player_hit,
        Action.STAND: game.player_stand,
        Action.DOUBLE: game.player_double_down_hit,
        Action.SPLIT: game.player_split,
        Action.SURRENDER: game.player_surrender,
    }
    player = game.get_active_player()
    while player is not None:
        action = strategy.decide_action(player, game.dealer.up_card)
        actions[action](player.name)
        player = game.get_active_player()

    game.dealer_play()
    return game.payout_results()


def create_rules(args) -> Rules:
    """Create the Rules object based on the command line arguments."""
    return Rules(
        num_decks=args.decks,
        penetration=args.penetration,
        min_bet=args.bet,
        starting_chips=args.chips,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function to run the simulation.

    It parses the command line, seats the players, plays the requested number of
    rounds and prints the statistics of the rounds played.
    """
    parser = argparse.ArgumentParser(description="Simulate rounds of Blackjack.")
    parser.add_argument(
        "--num_games", type=int, default=100, help="Number of rounds to simulate"
    )
    parser.add_argument(
        "--players", nargs="+", default=["Player1"], help="Names of the seated players"
    )
    parser.add_argument(
        "--decks", type=int, default=DEFAULT_NUM_DECKS, help="Number of decks in the shoe"
    )
    parser.add_argument(
        "--penetration",
        type=float,
        default=DEFAULT_PENETRATION,
        help="Fraction of the shoe dealt before reshuffling",
    )
    parser.add_argument(
        "--chips", type=int, default=DEFAULT_STARTING_CHIPS, help="Starting chips per player"
    )
    parser.add_argument("--bet", type=int, default=10, help="Bet per hand")
    parser.add_argument(
        "--strat",
        type=str,
        choices=sorted(STRATEGIES),
        default="basic",
        help="Pick your strategy. 'basic' for basic strategy, 'dealer' to play like the dealer",
    )
    parser.add_argument("--seed", type=int, help="Seed for the shoe's random generator")
    parser.add_argument(
        "--vis",
        action="store_true",
        help="Visualize the simulation results in real-time graph.",
        default=False,
    )
    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging threshold for engine messages",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    game = BlackjackGame(create_rules(args), rng=random.Random(args.seed))
    for name in args.players:
        game.add_player(name)
    strategy = STRATEGIES[args.strat]()
    starting_total = sum(player.chips for player in game.players)

    graph = BankrollGraph(args.num_games) if args.vis else None

    start_time = time.time()
    rounds_played = 0
    for i in range(args.num_games):
        if not any(player.chip_manager.has_enough_chips(args.bet) for player in game.players):
            logger.info("No player can cover the bet, stopping after %d rounds", i)
            break
        play_round(game, strategy, args.bet)
        rounds_played += 1
        if graph:
            graph.update(i + 1, sum(player.chips for player in game.players) - starting_total)
    duration = time.time() - start_time

    report = game.stats.report()
    print("Simulation completed.")
    print(f"Rounds played: {rounds_played:,}")
    print(f"Player wins: {report['player_wins']:,}")
    print(f"Dealer wins: {report['dealer_wins']:,}")
    print(f"Draws: {report['draws']:,}")
    print(f"Blackjacks: {report['blackjacks']:,}")
    print(f"Surrenders: {report['surrenders']:,}")
    print(f"Net Earnings: {report['net_winnings']:,}")
    print(
        f"Mean per round: {report['mean_winnings']:.2f} "
        f"(std {report['std_winnings']:.2f})"
    )
    for player in game.players:
        print(f"{player.name}: {player.chips:,} chips")
    print(f"\nDuration of simulation: {duration:.2f} seconds")

    if graph:
        plt.ioff()
        plt.show()  # Keep the graph window open after simulation ends


if __name__ == "__main__":
    main()
