"""Evolutionary loop over strategies."""

from core.evolution.events import EventType, EvolutionEvent
from core.evolution.state import RunState
from core.evolution.engine import (
    EvolutionConfig,
    EvolutionEngine,
    EvolutionResult,
    GenerationStats,
)

__all__ = [
    "EventType",
    "EvolutionEvent",
    "RunState",
    "EvolutionConfig",
    "EvolutionEngine",
    "EvolutionResult",
    "GenerationStats",
]
