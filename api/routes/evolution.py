"""Evolution run endpoint."""

import logging

from fastapi import APIRouter, HTTPException

from api.routes.strategy import configured_rules, strategy_to_model
from api.schemas import EvolutionRequest, EvolutionResponse, GenerationStatsResponse
from config import config
from core.evolution import EvolutionConfig, EvolutionEngine

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _bounded(value: int | None, default: int, limit: int, name: str) -> int:
    chosen = default if value is None else value
    if chosen > limit:
        raise HTTPException(status_code=400, detail=f"{name} may not exceed {limit}")
    return chosen


@router.post("/run")
def run_evolution(request: EvolutionRequest) -> EvolutionResponse:
    """Run a bounded evolution and return the best strategy found."""
    settings = config.evolution
    population_size = _bounded(
        request.population_size,
        settings.population_size,
        settings.max_population_size,
        "population_size",
    )
    generations = _bounded(
        request.generations, settings.generations, settings.max_generations, "generations"
    )
    hands = _bounded(
        request.hands_per_evaluation,
        settings.hands_per_evaluation,
        settings.max_hands_per_evaluation,
        "hands_per_evaluation",
    )

    try:
        run_config = EvolutionConfig(
            population_size=population_size,
            generations=generations,
            elite_count=min(2, population_size - 1),
            tournament_size=min(3, population_size),
            mutation_rate=settings.mutation_rate if request.mutation_rate is None else request.mutation_rate,
            mutation_impact=(
                settings.mutation_impact if request.mutation_impact is None else request.mutation_impact
            ),
            hands_per_evaluation=hands,
            workers=settings.workers,
            seed=settings.seed if request.seed is None else request.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    LOGGER.info("Evolution requested: %s", run_config)
    result = EvolutionEngine(config=run_config, rules=configured_rules()).run()

    return EvolutionResponse(
        best=strategy_to_model(result.best),
        history=[
            GenerationStatsResponse(
                generation=stats.generation,
                best=stats.best,
                mean=stats.mean,
                worst=stats.worst,
            )
            for stats in result.history
        ],
    )
