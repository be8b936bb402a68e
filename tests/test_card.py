import copy
import pickle

import pytest
from pitboss.common.card import Card, Suit, Rank


def test_card_initialization():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT


def test_card_repr():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert repr(card) == "Card(Suit.HEARTS, Rank.EIGHT)"


def test_card_str():
    assert str(Card(Suit.HEARTS, Rank.EIGHT)) == "8 of ♥"
    assert str(Card(Suit.SPADES, Rank.KING)) == "K of ♠"
    assert str(Card(Suit.CLUBS, Rank.TEN)) == "10 of ♣"


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card("Z", Rank.EIGHT)


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, "invalid")


def test_card_is_immutable():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    with pytest.raises(AttributeError):
        card.rank = Rank.NINE
    assert card.rank == Rank.EIGHT


def test_card_equality_and_hash():
    assert Card(Suit.HEARTS, Rank.ACE) == Card(Suit.HEARTS, Rank.ACE)
    assert Card(Suit.HEARTS, Rank.ACE) != Card(Suit.SPADES, Rank.ACE)
    assert len({Card(Suit.HEARTS, Rank.ACE), Card(Suit.HEARTS, Rank.ACE)}) == 1


def test_face_cards_are_distinct_ranks():
    assert Card(Suit.HEARTS, Rank.KING) != Card(Suit.HEARTS, Rank.QUEEN)
    assert Rank.JACK is not Rank.TEN


def test_card_survives_copy_and_pickle():
    card = Card(Suit.DIAMONDS, Rank.QUEEN)
    assert copy.deepcopy(card) == card
    assert pickle.loads(pickle.dumps(card)) == card
