"""Generational genetic algorithm over blackjack strategies."""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from statistics import fmean
from typing import Callable

from transitions import Machine

from core.game.rules import RuleSet
from core.game.simulator import StrategyEvaluator
from core.evolution.events import EventEmitter, EventType, EvolutionEvent
from core.evolution.state import RunState
from core.random_source import RandomSource, Randomizer
from core.strategy.genetic import Strategy

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvolutionConfig:
    """Parameters of an evolution run."""

    population_size: int = 100
    generations: int = 50
    elite_count: int = 2
    tournament_size: int = 3
    mutation_rate: float = 0.3  # Chance a child is mutated at all
    mutation_impact: float = 0.1  # Fraction of cells touched when it is
    hands_per_evaluation: int = 1000
    workers: int = 1
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate parameter combinations."""
        if self.population_size < 2:
            raise ValueError("population_size must be at least 2")
        if self.generations < 1:
            raise ValueError("generations must be at least 1")
        if not 0 <= self.elite_count < self.population_size:
            raise ValueError("elite_count must be between 0 and population_size - 1")
        if not 1 <= self.tournament_size <= self.population_size:
            raise ValueError("tournament_size must be between 1 and population_size")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be between 0 and 1")
        if self.mutation_impact < 0.0:
            raise ValueError("mutation_impact must be non-negative")
        if self.hands_per_evaluation < 1:
            raise ValueError("hands_per_evaluation must be at least 1")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")


@dataclass(frozen=True)
class GenerationStats:
    """Fitness summary of one evaluated generation."""

    generation: int
    best: float
    mean: float
    worst: float


@dataclass
class EvolutionResult:
    """Outcome of a completed run."""

    best: Strategy
    history: list[GenerationStats] = field(default_factory=list)


def _evaluate_task(task: tuple[Strategy, RuleSet, int, int]) -> float:
    """Score one strategy with its own seeded shoe source."""
    strategy, rules, hands, seed = task
    evaluator = StrategyEvaluator(rules=rules, hands_per_evaluation=hands, rng=RandomSource(seed))
    return evaluator.evaluate(strategy)


class EvolutionEngine:
    """
    Evolution run driven by a state machine.

    Strategies are only read while a generation is evaluated and only
    mutated while the next generation is bred.
    """

    STATES = [s.name.lower() for s in RunState]

    TRANSITIONS = [
        {"trigger": "start", "source": "idle", "dest": "evaluating"},
        {"trigger": "breed", "source": "evaluating", "dest": "breeding"},
        {"trigger": "next_generation", "source": "breeding", "dest": "evaluating"},
        {"trigger": "finish", "source": "evaluating", "dest": "finished"},
    ]

    def __init__(
        self,
        config: EvolutionConfig | None = None,
        rules: RuleSet | None = None,
        rng: Randomizer | None = None,
    ) -> None:
        """
        Initialize an evolution run.

        Args:
            config: Run parameters (uses defaults if not provided)
            rules: Table rules used for fitness evaluation
            rng: Randomizer for breeding and evaluation seeds
        """
        self.config = config or EvolutionConfig()
        self.rules = rules or RuleSet()
        self._rng = rng or RandomSource(self.config.seed)
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RunState:
        """Get current run state as enum."""
        return RunState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[EvolutionEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to run events."""
        self.events.subscribe(handler, event_type)

    def initial_population(self) -> list[Strategy]:
        population = []
        for _ in range(self.config.population_size):
            strategy = Strategy(rng=self._rng)
            strategy.randomize()
            population.append(strategy)
        return population

    def run(self, population: list[Strategy] | None = None) -> EvolutionResult:
        """
        Evolve a population for the configured number of generations.

        Args:
            population: Starting population (random if not provided)

        Returns:
            The best strategy seen and per-generation fitness stats
        """
        if self.state != RunState.IDLE:
            raise RuntimeError(f"Cannot run from state {self.state}")

        population = population or self.initial_population()
        history: list[GenerationStats] = []
        best: Strategy | None = None

        self.start()
        self.events.emit_new(EventType.RUN_STARTED, population_size=len(population))
        LOGGER.info(
            "Starting evolution: %d strategies, %d generations",
            len(population),
            self.config.generations,
        )

        for generation in range(1, self.config.generations + 1):
            self.events.emit_new(EventType.GENERATION_STARTED, generation=generation)
            self.evaluate_population(population)

            ranked = sorted(population, key=lambda s: s.fitness, reverse=True)
            stats = GenerationStats(
                generation=generation,
                best=ranked[0].fitness,
                mean=fmean(s.fitness for s in ranked),
                worst=ranked[-1].fitness,
            )
            history.append(stats)
            self.events.emit_new(
                EventType.GENERATION_EVALUATED,
                generation=generation,
                best=stats.best,
                mean=stats.mean,
                worst=stats.worst,
            )
            LOGGER.info(
                "Generation %d: best=%.1f mean=%.1f worst=%.1f",
                generation,
                stats.best,
                stats.mean,
                stats.worst,
            )

            if best is None or ranked[0].fitness > best.fitness:
                best = ranked[0].clone()
                self.events.emit_new(EventType.NEW_BEST, generation=generation, fitness=best.fitness)

            if generation == self.config.generations:
                break

            self.breed()
            population = self.breed_population(ranked)
            self.next_generation()

        self.finish()
        self.events.emit_new(EventType.RUN_COMPLETED, best=best.fitness)
        LOGGER.info("Evolution finished, best fitness %.1f", best.fitness)
        return EvolutionResult(best=best, history=history)

    def evaluate_population(self, population: list[Strategy]) -> None:
        """Assign a fitness to every strategy, in parallel when workers > 1."""
        tasks = [
            (strategy, self.rules, self.config.hands_per_evaluation, self._rng.int_between(0, 2**32 - 1))
            for strategy in population
        ]

        if self.config.workers > 1:
            with ProcessPoolExecutor(max_workers=self.config.workers) as pool:
                fitnesses = list(pool.map(_evaluate_task, tasks))
        else:
            fitnesses = [_evaluate_task(task) for task in tasks]

        for strategy, fitness in zip(population, fitnesses):
            strategy.fitness = fitness

    def breed_population(self, ranked: list[Strategy]) -> list[Strategy]:
        """
        Build the next generation from a population sorted best first.

        Elites are carried over as clones; every other slot is a crossover
        child of two tournament winners, possibly mutated.
        """
        next_generation = [strategy.clone() for strategy in ranked[: self.config.elite_count]]

        while len(next_generation) < self.config.population_size:
            mother = self.select_parent(ranked)
            father = self.select_parent(ranked)
            child = Strategy(rng=self._rng)
            mother.crossover_with(father, child)
            if self._rng.unit_float() < self.config.mutation_rate:
                child.mutate(self.config.mutation_impact)
            next_generation.append(child)

        return next_generation

    def select_parent(self, population: list[Strategy]) -> Strategy:
        """Tournament selection: fittest of tournament_size random picks."""
        contenders = [
            population[self._rng.int_less_than(len(population))]
            for _ in range(self.config.tournament_size)
        ]
        return max(contenders, key=lambda s: s.fitness)
