import pytest

from pitboss.blackjack.actor import Dealer, Player
from pitboss.blackjack.bankroll import BasicChipManager
from pitboss.blackjack.errors import InvalidActionError
from pitboss.blackjack.hand import BlackjackHand
from pitboss.common.card import Card, Rank, Suit


def deal(actor, *ranks):
    suits = [Suit.HEARTS, Suit.SPADES, Suit.CLUBS, Suit.DIAMONDS]
    for i, rank in enumerate(ranks):
        actor.deal_card(Card(suits[i % 4], rank))


@pytest.fixture
def player():
    return Player("Alice", chips=1000)


@pytest.fixture
def dealer():
    return Dealer()


class TestPlayer:
    def test_initial_state(self, player):
        assert player.chips == 1000
        assert len(player.hands) == 1
        assert player.current_hand_index == 0
        assert player.active
        assert player.total_bet == 0

    def test_injected_chip_manager(self):
        manager = BasicChipManager(42)
        player = Player("Bob", chip_manager=manager)
        assert player.chip_manager is manager
        assert player.chips == 42

    def test_add_chips(self, player):
        player.add_chips(50)
        assert player.chips == 1050

    def test_is_standing(self, player):
        deal(player, Rank.TEN, Rank.SEVEN)
        assert not player.is_standing()
        player.stand()
        assert player.is_standing()

    def test_inactive_player_is_standing(self, player):
        player.active = False
        assert player.is_standing()
        assert not player.has_active_hands()

    def test_move_to_next_active_hand(self, player):
        player.place_bet(10)
        deal(player, Rank.EIGHT, Rank.EIGHT)
        player.split()
        player.hit(Card(Suit.CLUBS, Rank.TEN))
        player.stand()

        assert player.has_active_hands() is True
        assert player.move_to_next_active_hand()
        assert player.current_hand_index == 1

        player.hit(Card(Suit.CLUBS, Rank.NINE))
        player.stand()
        assert not player.move_to_next_active_hand()
        assert player.current_hand_index == 1
        assert not player.has_active_hands()

    def test_add_hand_limit(self, player):
        for _ in range(3):
            player.add_hand(BlackjackHand(player=player))
        assert len(player.hands) == 4
        with pytest.raises(InvalidActionError):
            player.add_hand(BlackjackHand(player=player))
        assert len(player.hands) == 4

    def test_set_current_hand_index(self, player):
        with pytest.raises(InvalidActionError):
            player.set_current_hand_index(1)
        player.set_current_hand_index(0)
        assert player.current_hand_index == 0

    def test_hand_values(self, player):
        player.place_bet(10)
        deal(player, Rank.EIGHT, Rank.EIGHT)
        player.split()
        assert player.hand_values() == [8, 8]
        assert player.total_bet == 20

    def test_clear_hand(self, player):
        player.place_bet(10)
        deal(player, Rank.EIGHT, Rank.EIGHT)
        player.split()
        player.clear_hand()
        assert len(player.hands) == 1
        assert player.current_hand.count == 0
        assert player.current_hand_index == 0

    def test_str(self, player):
        deal(player, Rank.ACE, Rank.KING)
        assert str(player) == (
            "Alice (Chips: 1000, Bet: 0, active): [A of ♥, K of ♠] (Value: 21)"
        )

    def test_str_with_split_hands(self, player):
        player.place_bet(10)
        deal(player, Rank.EIGHT, Rank.EIGHT)
        player.split()
        text = str(player)
        assert "Hand 1: [8 of ♥] (Value: 8) (Split) *CURRENT*" in text
        assert "Hand 2: [8 of ♠] (Value: 8) (Split)" in text


class TestDealer:
    @pytest.mark.parametrize(
        "ranks, should_hit",
        [
            ((Rank.TEN, Rank.SIX), True),
            ((Rank.TEN, Rank.SEVEN), False),
            ((Rank.ACE, Rank.SIX), True),
            ((Rank.ACE, Rank.ACE, Rank.FIVE), False),
            ((Rank.ACE, Rank.ACE, Rank.FOUR), True),
            ((Rank.ACE, Rank.SEVEN), False),
            ((Rank.TEN, Rank.SIX, Rank.ACE), False),
            ((Rank.TEN, Rank.SIX, Rank.NINE), False),
            ((Rank.TWO, Rank.THREE), True),
        ],
    )
    def test_should_hit(self, dealer, ranks, should_hit):
        deal(dealer, *ranks)
        assert dealer.should_hit() is should_hit

    def test_stands_on_soft_17_when_configured(self):
        dealer = Dealer(hit_soft_17=False)
        deal(dealer, Rank.ACE, Rank.SIX)
        assert not dealer.should_hit()

    def test_up_card(self, dealer):
        with pytest.raises(InvalidActionError):
            dealer.up_card
        deal(dealer, Rank.KING, Rank.NINE)
        assert dealer.up_card == Card(Suit.HEARTS, Rank.KING)

    def test_blackjack_and_bust(self, dealer):
        deal(dealer, Rank.ACE, Rank.QUEEN)
        assert dealer.has_blackjack
        assert not dealer.is_busted
        assert dealer.value() == 21

    def test_clear_hand_keeps_log(self, dealer):
        deal(dealer, Rank.TEN, Rank.SEVEN)
        dealer.stand()
        dealer.clear_hand()
        assert dealer.hand.count == 0
        assert not dealer.hand.is_stood
        assert len(dealer.hand.actions) == 3

    def test_str(self, dealer):
        deal(dealer, Rank.KING, Rank.NINE)
        assert str(dealer) == "Dealer: [K of ♥, 9 of ♠] (Value: 19)"
        assert dealer.str_hidden() == "Dealer: [Hidden, 9 of ♠] (Visible Value: 9)"
