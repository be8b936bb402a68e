import pytest

from pitboss.common.card import Card, Rank, Suit
from pitboss.common.hand import Hand


def test_add_card():
    hand = Hand()
    card = Card(Suit.HEARTS, Rank.ACE)
    hand.add_card(card)
    assert hand.cards == [card]
    assert hand.count == 1
    assert len(hand) == 1


def test_add_card_rejects_non_cards():
    hand = Hand()
    with pytest.raises(TypeError):
        hand.add_card("A of ♥")


def test_cards_returns_a_copy():
    hand = Hand()
    hand.add_card(Card(Suit.HEARTS, Rank.ACE))
    hand.cards.append(Card(Suit.SPADES, Rank.TWO))
    assert hand.count == 1


def test_hand_str():
    hand = Hand()
    hand.add_card(Card(Suit.HEARTS, Rank.ACE))
    hand.add_card(Card(Suit.SPADES, Rank.TWO))
    assert str(hand) == "A of ♥, 2 of ♠"
