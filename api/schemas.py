"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal

ActionName = Literal["STAND", "HIT", "DOUBLE", "SPLIT"]


# Card schemas
class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    value_high: int
    value_low: int
    text: str


class HandRequest(BaseModel):
    """Request to evaluate a hand, cards given as codes like 'AS' or 'TH'."""

    cards: list[str] = Field(..., min_length=1, max_length=21)


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    has_soft_ace: bool
    is_pair: bool
    is_busted: bool
    text: str


class DeckRequest(BaseModel):
    """Request for a shuffled deck or a random sample of cards."""

    num_cards: int = Field(default=52, ge=0, le=52)
    seed: int | None = None


class DeckResponse(BaseModel):
    """A sequence of cards."""

    cards: list[CardResponse]


# Strategy schemas
class StrategyModel(BaseModel):
    """
    A strategy's three decision tables.

    Each table is a list of rows, one per holding, each row holding ten
    actions for dealer upcards A, 2..9, T. Pair rows run A, 2..T; soft
    rows A2..A9; hard rows 5..20.
    """

    pairs: list[list[ActionName]]
    soft: list[list[ActionName]]
    hard: list[list[ActionName]]
    fitness: float = 0.0


class RandomStrategyRequest(BaseModel):
    """Request for a randomized strategy."""

    seed: int | None = None


class MutateRequest(BaseModel):
    """Request to mutate a strategy."""

    strategy: StrategyModel
    impact: float = Field(default=0.1, ge=0.0, le=1.0)
    seed: int | None = None


class MutateResponse(BaseModel):
    """Mutated strategy."""

    strategy: StrategyModel
    mutations: int
    cells_changed: int


class CrossoverRequest(BaseModel):
    """Request to cross two parents into a child."""

    mother: StrategyModel
    father: StrategyModel
    seed: int | None = None


class CrossoverResponse(BaseModel):
    """Crossover child."""

    child: StrategyModel
    percentage_chance_of_mine: float


class EvaluateRequest(BaseModel):
    """Request to score a strategy by simulation."""

    strategy: StrategyModel
    hands: int = Field(default=1000, ge=1, le=20000)
    seed: int | None = None


class EvaluateResponse(BaseModel):
    """Simulation score."""

    fitness: float
    hands: int


class ChartResponse(BaseModel):
    """Text chart of a strategy."""

    chart: str


# Evolution schemas
class EvolutionRequest(BaseModel):
    """Request for an evolution run. Unset fields use configured defaults."""

    population_size: int | None = Field(default=None, ge=2)
    generations: int | None = Field(default=None, ge=1)
    hands_per_evaluation: int | None = Field(default=None, ge=1)
    mutation_rate: float | None = Field(default=None, ge=0.0, le=1.0)
    mutation_impact: float | None = Field(default=None, ge=0.0, le=1.0)
    seed: int | None = None


class GenerationStatsResponse(BaseModel):
    """Fitness summary for one generation."""

    generation: int
    best: float
    mean: float
    worst: float


class EvolutionResponse(BaseModel):
    """Result of an evolution run."""

    best: StrategyModel
    history: list[GenerationStatsResponse]
