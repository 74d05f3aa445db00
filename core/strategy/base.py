"""Decision tables for evolvable strategies."""

from enum import Enum
from typing import Iterator

from core.cards import Rank
from core.hand import Hand


class Action(Enum):
    """Possible player actions. SPLIT is only valid in the pair table."""

    STAND = "stand"
    HIT = "hit"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.name

    @property
    def code(self) -> str:
        """Single-letter chart code."""
        return "P" if self is Action.SPLIT else self.name[0]


ACTIONS_WITH_SPLIT: tuple[Action, ...] = (Action.STAND, Action.HIT, Action.DOUBLE, Action.SPLIT)
ACTIONS_NO_SPLIT: tuple[Action, ...] = ACTIONS_WITH_SPLIT[:3]

# Table column for each rank; ten-valued ranks share one column.
RANK_INDEX: dict[Rank, int] = {
    Rank.ACE: 0,
    Rank.TWO: 1,
    Rank.THREE: 2,
    Rank.FOUR: 3,
    Rank.FIVE: 4,
    Rank.SIX: 5,
    Rank.SEVEN: 6,
    Rank.EIGHT: 7,
    Rank.NINE: 8,
    Rank.TEN: 9,
    Rank.JACK: 9,
    Rank.QUEEN: 9,
    Rank.KING: 9,
}

# One representative rank per column, in column order.
UPCARD_RANKS: tuple[Rank, ...] = (
    Rank.ACE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
)

LOWEST_SOFT_REMAINDER = 2
HIGHEST_SOFT_REMAINDER = 9
LOWEST_HARD_VALUE = 5
HIGHEST_HARD_VALUE = 20


class ActionTable:
    """
    Fixed-shape grid of actions, one row per holding and one column per upcard.

    Holdings are either ranks (the pair table) or integer totals. Cells are
    stored row-major in a flat list so copies are plain list copies.
    """

    def __init__(self, holdings: tuple, fill: Action = Action.STAND) -> None:
        self._holdings = tuple(holdings)
        self._rows = {holding: row for row, holding in enumerate(self._holdings)}
        self._width = len(UPCARD_RANKS)
        self._cells = [fill] * (len(self._holdings) * self._width)

    def _index(self, upcard: Rank, holding) -> int:
        if isinstance(holding, Rank):
            holding = UPCARD_RANKS[RANK_INDEX[holding]]
        if holding not in self._rows:
            raise KeyError(f"Holding {holding!r} is outside this table")
        return self._rows[holding] * self._width + RANK_INDEX[upcard]

    def get(self, upcard: Rank, holding) -> Action:
        return self._cells[self._index(upcard, holding)]

    def set(self, upcard: Rank, holding, action: Action) -> None:
        self._cells[self._index(upcard, holding)] = action

    @property
    def holdings(self) -> tuple:
        return self._holdings

    def copy(self) -> "ActionTable":
        table = ActionTable.__new__(ActionTable)
        table._holdings = self._holdings
        table._rows = self._rows
        table._width = self._width
        table._cells = list(self._cells)
        return table

    def cells(self) -> Iterator[tuple[Rank, object, Action]]:
        """Iterate over (upcard, holding, action) for every cell."""
        for holding in self._holdings:
            for upcard in UPCARD_RANKS:
                yield upcard, holding, self.get(upcard, holding)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActionTable):
            return NotImplemented
        return self._holdings == other._holdings and self._cells == other._cells

    def count_differences(self, other: "ActionTable") -> int:
        return sum(1 for mine, theirs in zip(self._cells, other._cells) if mine is not theirs)


class StrategyBase:
    """
    Three decision tables plus a fitness score.

    Pair table rows are pair ranks, soft table rows are the non-Ace
    remainder of a soft total (A+2 .. A+9), hard table rows are hard
    totals 5..20.
    """

    def __init__(self) -> None:
        self.pairs = ActionTable(UPCARD_RANKS)
        self.soft = ActionTable(tuple(range(LOWEST_SOFT_REMAINDER, HIGHEST_SOFT_REMAINDER + 1)))
        self.hard = ActionTable(tuple(range(LOWEST_HARD_VALUE, HIGHEST_HARD_VALUE + 1)))
        self.fitness: float = 0.0

    def get_action_for_pair(self, upcard: Rank, pair_rank: Rank) -> Action:
        return self.pairs.get(upcard, pair_rank)

    def set_action_for_pair(self, upcard: Rank, pair_rank: Rank, action: Action) -> None:
        self.pairs.set(upcard, pair_rank, action)

    def get_action_for_soft_hand(self, upcard: Rank, remainder: int) -> Action:
        return self.soft.get(upcard, remainder)

    def set_action_for_soft_hand(self, upcard: Rank, remainder: int, action: Action) -> None:
        if action is Action.SPLIT:
            raise ValueError("SPLIT is only valid for pairs")
        self.soft.set(upcard, remainder, action)

    def get_action_for_hard_hand(self, upcard: Rank, total: int) -> Action:
        return self.hard.get(upcard, total)

    def set_action_for_hard_hand(self, upcard: Rank, total: int, action: Action) -> None:
        if action is Action.SPLIT:
            raise ValueError("SPLIT is only valid for pairs")
        self.hard.set(upcard, total, action)

    def get_action_for(self, hand: Hand, upcard: Rank, can_split: bool = True) -> Action:
        """
        Look up the action for a hand against a dealer upcard.

        Args:
            hand: The player's hand
            upcard: The dealer's exposed card rank
            can_split: Whether the pair table may be consulted

        Returns:
            The table action, or the conventional default for holdings
            outside the tables (stand on 21 or more, hit below 5)
        """
        if can_split and hand.is_pair:
            return self.get_action_for_pair(upcard, hand.cards[0].rank)

        value = hand.value
        if hand.has_soft_ace:
            remainder = value - 11
            if remainder > HIGHEST_SOFT_REMAINDER:
                return Action.STAND
            if remainder >= LOWEST_SOFT_REMAINDER:
                return self.get_action_for_soft_hand(upcard, remainder)

        if value > HIGHEST_HARD_VALUE:
            return Action.STAND
        if value < LOWEST_HARD_VALUE:
            return Action.HIT
        return self.get_action_for_hard_hand(upcard, value)

    def deep_copy(self, other: "StrategyBase") -> None:
        """Replace this strategy's tables and fitness with copies of other's."""
        self.pairs = other.pairs.copy()
        self.soft = other.soft.copy()
        self.hard = other.hard.copy()
        self.fitness = other.fitness

    def tables(self) -> dict[str, ActionTable]:
        return {"pairs": self.pairs, "soft": self.soft, "hard": self.hard}

    def count_differences(self, other: "StrategyBase") -> int:
        """Count cells that differ from other across all three tables."""
        return (
            self.pairs.count_differences(other.pairs)
            + self.soft.count_differences(other.soft)
            + self.hard.count_differences(other.hard)
        )

    def same_tables(self, other: "StrategyBase") -> bool:
        return self.pairs == other.pairs and self.soft == other.soft and self.hard == other.hard
