import logging
import random

from pitboss.blackjack.blackjack import BlackjackGame
from pitboss.blackjack.rules import Rules
from pitboss.blackjack.simulate import configure_logging, main, play_round
from pitboss.blackjack.strategy import BasicStrategy, DealerStrategy


def test_play_round_conserves_chips():
    game = BlackjackGame(Rules(), rng=random.Random(7))
    players = [game.add_player(name, chips=1000) for name in ("Alice", "Bob", "Carol")]

    for _ in range(200):
        play_round(game, BasicStrategy(), 10)
        assert all(player.total_bet == 0 for player in players)

    total = sum(player.chips for player in players)
    assert total == 3000 + game.stats.net_winnings
    assert game.stats.games_played == 200


def test_play_round_is_reproducible():
    def run(seed):
        game = BlackjackGame(Rules(num_decks=2), rng=random.Random(seed))
        player = game.add_player("Alice", chips=500)
        for _ in range(50):
            play_round(game, DealerStrategy(), 10)
        return player.chips

    assert run(3) == run(3)


def test_broke_player_sits_out():
    game = BlackjackGame(Rules(num_decks=1), rng=random.Random(1))
    player = game.add_player("Alice", chips=5)
    assert play_round(game, BasicStrategy(), 10) == []
    assert player.chips == 5
    assert player.current_hand.count == 0


def test_main_prints_summary(capsys):
    main(["--num_games", "20", "--players", "Alice", "Bob", "--seed", "11"])
    out = capsys.readouterr().out
    assert "Simulation completed." in out
    assert "Rounds played: 20" in out
    assert "Alice:" in out
    assert "Bob:" in out


def test_disable_logging_env(monkeypatch):
    monkeypatch.setenv("PITBOSS_DISABLE_LOGGING", "true")
    configure_logging("DEBUG")
    assert logging.getLogger("pitboss").level == logging.ERROR

    monkeypatch.delenv("PITBOSS_DISABLE_LOGGING")
    configure_logging("INFO")
    assert logging.getLogger("pitboss").level == logging.INFO
