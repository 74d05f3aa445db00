"""Round simulation and table rules."""

from core.game.rules import RuleSet
from core.game.simulator import StrategyEvaluator, deal_scenario

__all__ = [
    "RuleSet",
    "StrategyEvaluator",
    "deal_scenario",
]
