"""Text rendering of strategy decision tables."""

from core.strategy.base import UPCARD_RANKS, ActionTable, StrategyBase

_TITLES = {
    "pairs": "Pairs",
    "soft": "Soft hands",
    "hard": "Hard hands",
}


def _row_label(kind: str, holding) -> str:
    if kind == "pairs":
        return f"{holding}{holding}"
    if kind == "soft":
        return f"A{holding}"
    return str(holding)


def format_table(table: ActionTable, kind: str) -> str:
    """Render one table as a grid of action codes, upcards across the top."""
    lines = [_TITLES[kind], "     " + " ".join(str(rank) for rank in UPCARD_RANKS)]
    for holding in table.holdings:
        codes = " ".join(table.get(upcard, holding).code for upcard in UPCARD_RANKS)
        lines.append(f"{_row_label(kind, holding):>4} {codes}")
    return "\n".join(lines)


def format_strategy(strategy: StrategyBase) -> str:
    """Render all three tables, separated by blank lines."""
    parts = [format_table(table, kind) for kind, table in strategy.tables().items()]
    parts.append(f"Fitness: {strategy.fitness:.2f}")
    return "\n\n".join(parts)
