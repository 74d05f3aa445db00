"""Evolvable blackjack strategy with genetic operators."""

from core.cards import Rank
from core.random_source import RandomSource, Randomizer
from core.strategy.base import (
    ACTIONS_NO_SPLIT,
    ACTIONS_WITH_SPLIT,
    HIGHEST_HARD_VALUE,
    HIGHEST_SOFT_REMAINDER,
    LOWEST_HARD_VALUE,
    LOWEST_SOFT_REMAINDER,
    UPCARD_RANKS,
    Action,
    StrategyBase,
)

# Cells touched per unit of impact, proportional to each table's size.
PAIR_MUTATIONS_PER_IMPACT = 100
SOFT_MUTATIONS_PER_IMPACT = 80
HARD_MUTATIONS_PER_IMPACT = 160


def percentage_chance_of_mine(my_score: float, their_score: float) -> float:
    """
    Probability that a child cell comes from the parent scoring my_score.

    Non-negative pairs blend proportionally, mixed signs favor the
    non-negative parent 80/20, and negative pairs favor the one closer
    to zero.
    """
    if my_score >= 0 and their_score >= 0:
        total = my_score + their_score
        if total < 0.001:
            total = 1.0
        return my_score / total
    if my_score >= 0 > their_score:
        return 0.8
    if my_score < 0 <= their_score:
        return 0.2

    my_score = abs(my_score)
    their_score = abs(their_score)
    return 1 - my_score / (my_score + their_score)


class Strategy(StrategyBase):
    """A genetic individual: three decision tables and a fitness score."""

    def __init__(self, rng: Randomizer | None = None) -> None:
        super().__init__()
        self._rng = rng or RandomSource()

    def clone(self) -> "Strategy":
        """Return a deep copy sharing only the randomizer."""
        result = Strategy(rng=self._rng)
        result.deep_copy(self)
        return result

    def randomize(self) -> None:
        """Fill every cell with a uniformly random action."""
        for upcard in UPCARD_RANKS:
            for pair_rank in UPCARD_RANKS:
                self.set_action_for_pair(upcard, pair_rank, self._random_action(include_split=True))

            for remainder in range(LOWEST_SOFT_REMAINDER, HIGHEST_SOFT_REMAINDER + 1):
                self.set_action_for_soft_hand(upcard, remainder, self._random_action(include_split=False))

            for total in range(LOWEST_HARD_VALUE, HIGHEST_HARD_VALUE + 1):
                self.set_action_for_hard_hand(upcard, total, self._random_action(include_split=False))

    def mutate(self, impact: float) -> int:
        """
        Overwrite randomly chosen cells with random actions.

        The same cell may be picked more than once.

        Args:
            impact: Fraction of each table's size to touch, roughly 0..1

        Returns:
            Number of cell overwrites performed
        """
        if impact < 0:
            raise ValueError("impact must be non-negative")

        num_pair = int(PAIR_MUTATIONS_PER_IMPACT * impact)
        num_soft = int(SOFT_MUTATIONS_PER_IMPACT * impact)
        num_hard = int(HARD_MUTATIONS_PER_IMPACT * impact)

        for _ in range(num_pair):
            upcard = self._random_rank_for_mutation()
            pair_rank = self._random_rank_for_mutation()
            self.set_action_for_pair(upcard, pair_rank, self._random_action(include_split=True))

        for _ in range(num_soft):
            upcard = self._random_rank_for_mutation()
            remainder = self._rng.int_between(LOWEST_SOFT_REMAINDER, HIGHEST_SOFT_REMAINDER)
            self.set_action_for_soft_hand(upcard, remainder, self._random_action(include_split=False))

        for _ in range(num_hard):
            upcard = self._random_rank_for_mutation()
            total = self._rng.int_between(LOWEST_HARD_VALUE, HIGHEST_HARD_VALUE)
            self.set_action_for_hard_hand(upcard, total, self._random_action(include_split=False))

        return num_pair + num_soft + num_hard

    def crossover_with(self, other_parent: "Strategy", child: "Strategy") -> float:
        """
        Fill child's tables cell by cell from this strategy or other_parent.

        Each cell independently inherits from this strategy with a
        probability weighted by the two fitness scores.

        Returns:
            The probability used for inheriting from this strategy
        """
        chance_of_mine = percentage_chance_of_mine(self.fitness, other_parent.fitness)

        for upcard in UPCARD_RANKS:
            for pair_rank in UPCARD_RANKS:
                source = self if self._rng.unit_float() < chance_of_mine else other_parent
                child.set_action_for_pair(upcard, pair_rank, source.get_action_for_pair(upcard, pair_rank))

            for remainder in range(LOWEST_SOFT_REMAINDER, HIGHEST_SOFT_REMAINDER + 1):
                source = self if self._rng.unit_float() < chance_of_mine else other_parent
                child.set_action_for_soft_hand(upcard, remainder, source.get_action_for_soft_hand(upcard, remainder))

            for total in range(LOWEST_HARD_VALUE, HIGHEST_HARD_VALUE + 1):
                source = self if self._rng.unit_float() < chance_of_mine else other_parent
                child.set_action_for_hard_hand(upcard, total, source.get_action_for_hard_hand(upcard, total))

        return chance_of_mine

    def _random_rank_for_mutation(self) -> Rank:
        """Uniform rank excluding Jack, Queen and King, which share the Ten column."""
        while True:
            rank = Rank(self._rng.int_between(Rank.ACE.value, Rank.KING.value))
            if not rank.is_face:
                return rank

    def _random_action(self, include_split: bool) -> Action:
        actions = ACTIONS_WITH_SPLIT if include_split else ACTIONS_NO_SPLIT
        return actions[self._rng.int_less_than(len(actions))]
