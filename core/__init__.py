"""Blackjack hand engine and evolvable strategies - UI-agnostic core."""

from core.cards import (
    Card,
    Rank,
    RankNotFoundError,
    Shoe,
    ShoeExhaustedError,
    Suit,
    generate_random_sample,
    generate_shuffled_deck,
)
from core.hand import Hand
from core.random_source import RandomSource, Randomizer

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Shoe",
    "ShoeExhaustedError",
    "RankNotFoundError",
    "generate_shuffled_deck",
    "generate_random_sample",
    "Hand",
    "RandomSource",
    "Randomizer",
]
