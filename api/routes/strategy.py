"""Strategy genetic-operator endpoints."""

from fastapi import APIRouter, HTTPException

from api.schemas import (
    ChartResponse,
    CrossoverRequest,
    CrossoverResponse,
    EvaluateRequest,
    EvaluateResponse,
    MutateRequest,
    MutateResponse,
    RandomStrategyRequest,
    StrategyModel,
)
from config import config
from core.game import RuleSet, StrategyEvaluator
from core.random_source import RandomSource
from core.strategy import Action, ActionTable, Strategy, format_strategy
from core.strategy.base import UPCARD_RANKS

router = APIRouter()


def _table_rows(table: ActionTable) -> list[list[str]]:
    return [[table.get(upcard, holding).name for upcard in UPCARD_RANKS] for holding in table.holdings]


def _fill_table(table: ActionTable, rows: list[list[str]], name: str) -> None:
    if len(rows) != len(table.holdings) or any(len(row) != len(UPCARD_RANKS) for row in rows):
        raise ValueError(
            f"{name} table must be {len(table.holdings)} rows of {len(UPCARD_RANKS)} actions"
        )
    for holding, row in zip(table.holdings, rows):
        for upcard, action_name in zip(UPCARD_RANKS, row):
            action = Action[action_name]
            if action is Action.SPLIT and name != "pairs":
                raise ValueError(f"SPLIT is only valid in the pairs table, found in {name}")
            table.set(upcard, holding, action)


def configured_rules() -> RuleSet:
    """Table rules from the shoe configuration."""
    return RuleSet(
        num_decks=config.shoe.num_decks,
        dealer_hits_soft_17=config.shoe.dealer_hits_soft_17,
        blackjack_payout=config.shoe.blackjack_payout,
    )


def strategy_to_model(strategy: Strategy) -> StrategyModel:
    """Serialize a strategy's tables for a response."""
    return StrategyModel(
        pairs=_table_rows(strategy.pairs),
        soft=_table_rows(strategy.soft),
        hard=_table_rows(strategy.hard),
        fitness=strategy.fitness,
    )


def model_to_strategy(model: StrategyModel, rng: RandomSource) -> Strategy:
    """Rebuild a strategy from request tables, rejecting malformed shapes."""
    strategy = Strategy(rng=rng)
    try:
        _fill_table(strategy.pairs, model.pairs, "pairs")
        _fill_table(strategy.soft, model.soft, "soft")
        _fill_table(strategy.hard, model.hard, "hard")
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    strategy.fitness = model.fitness
    return strategy


@router.post("/random")
async def random_strategy(request: RandomStrategyRequest) -> StrategyModel:
    """Create a randomized strategy."""
    strategy = Strategy(rng=RandomSource(request.seed))
    strategy.randomize()
    return strategy_to_model(strategy)


@router.post("/mutate")
async def mutate_strategy(request: MutateRequest) -> MutateResponse:
    """Mutate a strategy in proportion to impact."""
    original = model_to_strategy(request.strategy, RandomSource(request.seed))
    mutated = original.clone()
    mutations = mutated.mutate(request.impact)
    return MutateResponse(
        strategy=strategy_to_model(mutated),
        mutations=mutations,
        cells_changed=mutated.count_differences(original),
    )


@router.post("/crossover")
async def crossover(request: CrossoverRequest) -> CrossoverResponse:
    """Cross two parents into a child, weighted by their fitness."""
    rng = RandomSource(request.seed)
    mother = model_to_strategy(request.mother, rng)
    father = model_to_strategy(request.father, rng)
    child = Strategy(rng=rng)
    chance = mother.crossover_with(father, child)
    return CrossoverResponse(child=strategy_to_model(child), percentage_chance_of_mine=chance)


@router.post("/evaluate")
def evaluate_strategy(request: EvaluateRequest) -> EvaluateResponse:
    """Score a strategy by simulating hands."""
    strategy = model_to_strategy(request.strategy, RandomSource(request.seed))
    evaluator = StrategyEvaluator(
        rules=configured_rules(),
        hands_per_evaluation=request.hands,
        rng=RandomSource(request.seed),
    )
    return EvaluateResponse(fitness=evaluator.evaluate(strategy), hands=request.hands)


@router.post("/chart")
async def strategy_chart(request: StrategyModel) -> ChartResponse:
    """Render a strategy as text tables."""
    return ChartResponse(chart=format_strategy(model_to_strategy(request, RandomSource())))
