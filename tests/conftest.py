"""Pytest fixtures for the strategy evolver tests."""

import pytest

from core.cards import Card, Rank, Shoe, Suit
from core.hand import Hand
from core.game import RuleSet, StrategyEvaluator
from core.random_source import RandomSource
from core.strategy import Strategy


def _build_hand(*ranks: Rank) -> Hand:
    """Build a hand from ranks, cycling through suits."""
    suits = list(Suit)
    hand = Hand()
    for i, rank in enumerate(ranks):
        hand.add_card(Card(rank, suits[i % len(suits)]))
    return hand


@pytest.fixture
def make_hand():
    """Factory building a hand from ranks."""
    return _build_hand


@pytest.fixture
def rng():
    """Seeded randomizer for reproducible tests."""
    return RandomSource(42)


@pytest.fixture
def shoe(rng):
    """A 2-deck shoe."""
    return Shoe(num_decks=2, rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return _build_hand(Rank.ACE, Rank.SIX)


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (A-6-K)."""
    return _build_hand(Rank.ACE, Rank.SIX, Rank.KING)


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return _build_hand(Rank.EIGHT, Rank.EIGHT)


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return _build_hand(Rank.TEN, Rank.SIX, Rank.KING)


@pytest.fixture
def strategy(rng):
    """A randomized strategy."""
    s = Strategy(rng=rng)
    s.randomize()
    return s


@pytest.fixture
def evaluator():
    """A seeded single-deck evaluator playing a short session."""
    return StrategyEvaluator(
        rules=RuleSet(num_decks=1),
        hands_per_evaluation=200,
        rng=RandomSource(7),
    )
