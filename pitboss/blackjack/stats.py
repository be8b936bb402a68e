"""
This module contains the SimulationStats class which is responsible for
tracking and updating the statistics of a run of blackjack rounds.
"""

from typing import TYPE_CHECKING, Iterable, List

import numpy as np

if TYPE_CHECKING:
    from pitboss.blackjack.blackjack import HandOutcome


class SimulationStats:
    """
    A class that holds the statistics of the simulation.
    """

    def __init__(self):
        """
        Initializes the SimulationStats with default values.
        """
        self.games_played = 0
        self.player_wins = 0
        self.dealer_wins = 0
        self.draws = 0
        self.blackjacks = 0
        self.surrenders = 0
        self.round_winnings: List[int] = []

    def update(
        self, outcomes: Iterable["HandOutcome"], surrenders: int = 0, net_winnings: int = 0
    ) -> None:
        """
        Record one settled round.

        :param outcomes: Settlement records for the hands paid in the round
        :param surrenders: Number of hands surrendered before settlement
        :param net_winnings: Net chips won (negative if lost) across all players
        """
        from pitboss.blackjack.blackjack import GameResult  # circular import

        self.games_played += 1
        self.surrenders += surrenders
        self.round_winnings.append(net_winnings)

        for outcome in outcomes:
            if outcome.result == GameResult.PLAYER_BLACKJACK:
                self.blackjacks += 1
                self.player_wins += 1
            elif outcome.result == GameResult.PLAYER_WIN:
                self.player_wins += 1
            elif outcome.result == GameResult.PUSH:
                self.draws += 1
            else:
                self.dealer_wins += 1

    @property
    def net_winnings(self) -> int:
        return int(np.sum(self.round_winnings)) if self.round_winnings else 0

    def mean_winnings(self) -> float:
        """Mean net winnings per round."""
        if not self.round_winnings:
            return 0.0
        return float(np.mean(self.round_winnings))

    def std_winnings(self) -> float:
        """Standard deviation of net winnings per round."""
        if not self.round_winnings:
            return 0.0
        return float(np.std(self.round_winnings))

    def report(self) -> dict:
        """
        Returns a dictionary containing the current statistics.
        """
        return {
            "games_played": self.games_played,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "draws": self.draws,
            "blackjacks": self.blackjacks,
            "surrenders": self.surrenders,
            "net_winnings": self.net_winnings,
            "mean_winnings": self.mean_winnings(),
            "std_winnings": self.std_winnings(),
        }
