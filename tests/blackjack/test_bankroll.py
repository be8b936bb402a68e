import pytest

from pitboss.blackjack.actor import Player
from pitboss.blackjack.bankroll import BasicChipManager, SpendingLimitChipManager
from pitboss.blackjack.errors import InsufficientFundsError
from pitboss.common.card import Card, Rank, Suit


class TestBasicChipManager:
    def test_add_and_deduct(self):
        chips = BasicChipManager(100)
        chips.add_chips(50)
        chips.deduct_chips(30)
        assert chips.get_chips() == 120

    def test_deduct_more_than_balance(self):
        chips = BasicChipManager(100)
        with pytest.raises(InsufficientFundsError):
            chips.deduct_chips(101)
        assert chips.get_chips() == 100

    def test_has_enough_chips(self):
        chips = BasicChipManager(100)
        assert chips.has_enough_chips(100)
        assert not chips.has_enough_chips(101)

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            BasicChipManager(-1)
        chips = BasicChipManager(10)
        with pytest.raises(ValueError):
            chips.set_chips(-1)
        with pytest.raises(ValueError):
            chips.add_chips(-1)


class TestSpendingLimitChipManager:
    def test_deductions_count_toward_limit(self):
        chips = SpendingLimitChipManager(1000, spending_limit=100)
        chips.deduct_chips(60)
        assert chips.remaining_allowance == 40
        with pytest.raises(InsufficientFundsError):
            chips.deduct_chips(50)
        assert chips.get_chips() == 940

    def test_winnings_do_not_restore_allowance(self):
        chips = SpendingLimitChipManager(1000, spending_limit=100)
        chips.deduct_chips(100)
        chips.add_chips(200)
        assert not chips.has_enough_chips(1)

    def test_reset_spending(self):
        chips = SpendingLimitChipManager(1000, spending_limit=100)
        chips.deduct_chips(100)
        chips.reset_spending()
        assert chips.has_enough_chips(100)

    def test_player_with_spending_limit(self):
        player = Player("Carol", chip_manager=SpendingLimitChipManager(500, 150))
        player.place_bet(100)
        player.current_hand.deal_card(Card(Suit.HEARTS, Rank.SIX))
        player.current_hand.deal_card(Card(Suit.SPADES, Rank.FIVE))
        assert not player.can_double_down()
        with pytest.raises(InsufficientFundsError):
            player.double_down()
        assert player.chips == 400
