"""
Text reporting for solver results.

Formats a SolveResult for display on the command line.
"""

from .data_models import SolveResult


def format_denomination(value: int) -> str:
    """Render a denomination in minor units as a coin label (100 -> $1, 25 -> 25c)."""
    if value % 100 == 0:
        return f"${value // 100}"
    return f"{value}c"


def format_result(result: SolveResult) -> str:
    """
    Format a solver result as a multi-line report.

    Args:
        result: Result returned by CoinChangeSolver.solve

    Returns:
        Report text
    """
    best = result.best_chromosome
    lines = [
        f"Target amount: {result.target} cents ({result.target / 100:.2f} dollars)",
        "",
        "Best solution found:",
    ]
    for value, count in best.as_dict().items():
        lines.append(f"\t{count} x {format_denomination(value)} coins")

    lines.extend([
        f"Amount represented: {result.represented_amount} cents"
        + ("" if result.is_exact else f" (off by {result.represented_amount - result.target:+d})"),
        f"Total coins used: {result.coin_count}",
        f"Fitness value: {result.best_fitness:.1f}",
        "",
        "Population statistics:",
        f"\tBest fitness: {result.best_fitness:.1f}",
        f"\tWorst fitness: {result.worst_fitness:.1f}",
        f"\tAverage fitness: {result.mean_fitness:.1f}",
        f"\tDiversity: {result.stats.diversity:.4f}",
        "",
        f"Generations: {result.generations_run}" + (" (cancelled)" if result.cancelled else ""),
        f"Execution time: {result.elapsed_seconds * 1000:.0f} ms",
    ])
    return "\n".join(lines)
