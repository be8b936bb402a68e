import random
from collections import Counter

import pytest

from pitboss.common.card import Card, Rank, Suit
from pitboss.common.deck import Deck


def test_deck_initialization():
    deck = Deck()
    assert isinstance(deck.cards, list)
    assert len(deck.cards) == 52
    assert len(set(deck.cards)) == 52


def test_deck_has_four_of_each_rank():
    counts = Counter(card.rank for card in Deck().cards)
    assert set(counts.values()) == {4}
    assert len(counts) == 13


def test_deck_initialization_with_custom_cards():
    cards = [
        Card(Suit.HEARTS, Rank.TWO),
        Card(Suit.DIAMONDS, Rank.ACE),
        Card(Suit.CLUBS, Rank.JACK),
    ]
    deck = Deck(cards)
    assert deck.cards == cards


def test_deck_shuffle_keeps_cards():
    deck = Deck()
    original_order = deck.cards.copy()
    deck.shuffle(random.Random(3))
    assert deck.cards != original_order
    assert set(deck.cards) == set(original_order)


def test_deck_shuffle_is_reproducible_with_seed():
    first = Deck().shuffle(random.Random(42))
    second = Deck().shuffle(random.Random(42))
    assert first.cards == second.cards


def test_deck_deal():
    deck = Deck()
    top = deck.cards[0]
    card = deck.deal()
    assert card == top
    assert deck.size == 51


def test_deal_from_empty_deck():
    deck = Deck([])
    assert deck.is_empty()
    with pytest.raises(IndexError):
        deck.deal()


def test_default_decks_are_independent():
    first = Deck()
    first.deal()
    assert Deck().size == 52
