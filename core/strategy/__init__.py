"""Strategy decision tables and genetic operators."""

from core.strategy.base import Action, ActionTable, StrategyBase
from core.strategy.chart import format_strategy, format_table
from core.strategy.genetic import Strategy, percentage_chance_of_mine

__all__ = [
    "Action",
    "ActionTable",
    "StrategyBase",
    "Strategy",
    "percentage_chance_of_mine",
    "format_strategy",
    "format_table",
]
