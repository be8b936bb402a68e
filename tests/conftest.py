"""
Pytest configuration for tests at the root level.

Provides seeded generators and shoe stacking so that rounds can be dealt from
a known sequence of cards.
"""

import random

import pytest


def stack_shoe(shoe, cards):
    """Place the given cards at the front of the shoe's undrawn pool."""
    undrawn = list(shoe.cards[shoe.next_card_index :])
    for stacked in cards:
        undrawn.remove(stacked)
    shoe.cards = list(cards) + undrawn
    shoe.next_card_index = 0


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def stacker():
    """Returns a function that stacks cards on top of a shoe."""
    return stack_shoe
