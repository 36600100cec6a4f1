"""
Parent selection operators for the coin change GA.

Both schemes are monotone in fitness: a fitter chromosome is strictly more
likely to be picked.
"""

from typing import Tuple

import numpy as np

from .data_models import Chromosome
from .population import Population


SELECTION_METHODS = ("tournament", "roulette")


def tournament_selection(
    population: Population,
    rng: np.random.Generator,
    tournament_size: int = 3
) -> Chromosome:
    """
    Pick the fittest of ``tournament_size`` uniformly drawn members.

    Args:
        population: Population to select from
        rng: Random number generator
        tournament_size: Number of contestants (drawn with replacement)

    Returns:
        Winning chromosome (first contestant wins ties)
    """
    contestants = rng.integers(0, len(population), size=max(1, tournament_size))
    winner = max(contestants, key=lambda i: population[int(i)].fitness)
    return population[int(winner)]


def roulette_selection(population: Population, rng: np.random.Generator) -> Chromosome:
    """
    Fitness-proportional selection.

    Fitness is always >= 1, so the wheel never has zero total weight.
    """
    weights = population.fitness_values()
    index = rng.choice(len(population), p=weights / weights.sum())
    return population[int(index)]


def select_parents(
    population: Population,
    rng: np.random.Generator,
    method: str = "tournament",
    tournament_size: int = 3
) -> Tuple[Chromosome, Chromosome]:
    """
    Select a pair of parents for reproduction.

    Args:
        population: Population to select from
        rng: Random number generator
        method: "tournament" or "roulette"
        tournament_size: Contestants per tournament

    Returns:
        Tuple of (parent_a, parent_b); the two may be the same chromosome

    Raises:
        ValueError: If the method is unknown
    """
    if method == "tournament":
        return (
            tournament_selection(population, rng, tournament_size),
            tournament_selection(population, rng, tournament_size),
        )
    elif method == "roulette":
        return roulette_selection(population, rng), roulette_selection(population, rng)
    else:
        raise ValueError(
            f"Unknown selection method: '{method}'. Must be one of {SELECTION_METHODS}"
        )
