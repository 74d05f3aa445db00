"""Card, deck generation, and multi-deck Shoe."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from core.random_source import RandomSource, Randomizer


class ShoeExhaustedError(IndexError):
    """Raised when dealing past the end of a shoe."""


class RankNotFoundError(LookupError):
    """Raised when no undealt card satisfies a rank-conditioned deal."""


class Suit(Enum):
    """Card suits."""

    HEARTS = "Hearts"
    SPADES = "Spades"
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return "A23456789TJQK"[self.value - 1]

    @property
    def value_high(self) -> int:
        """Blackjack value counting an Ace as 11."""
        if self is Rank.ACE:
            return 11
        return min(self.value, 10)

    @property
    def value_low(self) -> int:
        """Blackjack value counting an Ace as 1."""
        return min(self.value, 10)

    @property
    def is_face(self) -> bool:
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    @classmethod
    def from_code(cls, code: str) -> "Rank":
        """Parse a single-character rank code ('A', '2'-'9', 'T', 'J', 'Q', 'K')."""
        code = code.strip().upper()
        if code == "10":
            return cls.TEN
        for rank in cls:
            if str(rank) == code:
                return rank
        raise ValueError(f"Invalid rank: {code}")


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def rank_value_high(self) -> int:
        return self.rank.value_high

    @property
    def rank_value_low(self) -> int:
        return self.rank.value_low

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a code like 'AS', 'Th', '10d' or 'KHearts'."""
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = (s[:2], s[2:]) if s.startswith("10") else (s[:1], s[1:])
        suit_str = suit_str.upper()

        for suit in Suit:
            if suit_str in (suit.value.upper(), suit.value[0].upper()):
                return cls(Rank.from_code(rank_str), suit)
        raise ValueError(f"Invalid suit: {suit_str}")


def ordered_deck() -> list[Card]:
    """Return the 52-card catalog in rank-major order."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


def generate_shuffled_deck(rng: Randomizer | None = None) -> list[Card]:
    """
    Return a freshly shuffled 52-card deck.

    Fisher-Yates pass from the last index down to index 2; index 1 and 0
    are never chosen as the swap source, only as targets.
    """
    rng = rng or RandomSource()
    deck = ordered_deck()
    for i in range(len(deck) - 1, 1, -1):
        swap_with = rng.int_between(0, i)
        deck[i], deck[swap_with] = deck[swap_with], deck[i]
    return deck


def generate_random_sample(num_cards: int, rng: Randomizer | None = None) -> list[Card]:
    """
    Return num_cards distinct random cards.

    Uses rejection sampling, so the cost grows as num_cards approaches 52;
    a full deck is produced by shuffling instead.
    """
    if not 0 <= num_cards <= 52:
        raise ValueError("num_cards must be between 0 and 52")

    rng = rng or RandomSource()
    if num_cards == 52:
        return generate_shuffled_deck(rng)

    ranks = list(Rank)
    suits = list(Suit)
    cards: list[Card] = []
    seen: set[Card] = set()
    while len(cards) < num_cards:
        card = Card(ranks[rng.int_less_than(13)], suits[rng.int_less_than(4)])
        if card in seen:
            continue
        seen.add(card)
        cards.append(card)
    return cards


class Shoe:
    """
    A multi-deck shoe.

    Each deck is shuffled on its own and the decks are stacked in
    generation order. Cards are held in fixed slots; a dealt slot is
    tombstoned rather than removed, so rank-conditioned deals ahead of the
    cursor do not shift anything.
    """

    def __init__(self, num_decks: int = 6, rng: Randomizer | None = None) -> None:
        """
        Initialize a shoe.

        Args:
            num_decks: Number of 52-card decks to stack
            rng: Randomizer used to shuffle each deck
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        rng = rng or RandomSource()
        self._cards: list[Card] = []
        for _ in range(num_decks):
            self._cards.extend(generate_shuffled_deck(rng))
        self._dealt = [False] * len(self._cards)
        self._cursor = 0
        self._remaining = len(self._cards)

    def _advance_cursor(self) -> None:
        while self._cursor < len(self._cards) and self._dealt[self._cursor]:
            self._cursor += 1

    def _take(self, index: int) -> Card:
        self._dealt[index] = True
        self._remaining -= 1
        return self._cards[index]

    def deal_next(self) -> Card:
        """Deal the next undealt card."""
        self._advance_cursor()
        if self._cursor >= len(self._cards):
            raise ShoeExhaustedError("Ran out of cards to deal")
        card = self._take(self._cursor)
        self._cursor += 1
        return card

    def _deal_first_matching(self, rank: Rank, match: bool) -> Card:
        for index in range(self._cursor, len(self._cards)):
            if not self._dealt[index] and (self._cards[index].rank is rank) == match:
                return self._take(index)
        qualifier = "" if match else "not "
        raise RankNotFoundError(f"No undealt card {qualifier}of rank {rank.name} left in shoe")

    def deal_next_of_rank(self, rank: Rank) -> Card:
        """Deal the next undealt card of the given rank, leaving the cursor in place."""
        return self._deal_first_matching(rank, match=True)

    def deal_next_not_of_rank(self, rank: Rank) -> Card:
        """Deal the next undealt card of any other rank, leaving the cursor in place."""
        return self._deal_first_matching(rank, match=False)

    @property
    def cards_remaining(self) -> int:
        return self._remaining

    @property
    def cards_dealt(self) -> int:
        return self.total_cards - self._remaining

    @property
    def total_cards(self) -> int:
        return len(self._cards)

    @property
    def num_decks(self) -> int:
        return self._num_decks

    def __len__(self) -> int:
        return self._remaining

    def __iter__(self) -> Iterator[Card]:
        """Iterate over the undealt cards in dealing order."""
        return (
            card
            for index, card in enumerate(self._cards)
            if index >= self._cursor and not self._dealt[index]
        )

    def __str__(self) -> str:
        upcoming = [str(card) for _, card in zip(range(3), self)]
        return f"{self.cards_remaining} remaining, first cards are {' '.join(upcoming)}"
