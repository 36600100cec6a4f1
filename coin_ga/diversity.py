"""
Diversity maintenance for the coin change GA.

Measures fitness dispersion and, when the population has converged,
replaces its worst members with freshly generated chromosomes built by
one of four strategies.
"""

import logging
import math
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from .data_models import Chromosome, gene_bounds
from .fitness import FitnessEvaluator
from .mutation import clip_to_bounds
from .population import Population


logger = logging.getLogger(__name__)

Strategy = Callable[[int, Sequence[int], np.random.Generator, int], Tuple[int, ...]]


def population_diversity(population: Population) -> float:
    """std(fitness) / (mean(fitness) + 1) over the whole population."""
    return population.diversity()


def _draw(upper: int, rng: np.random.Generator) -> int:
    return int(rng.integers(0, max(0, upper) + 1))


def random_strategy(
    target: int,
    denominations: Sequence[int],
    rng: np.random.Generator,
    threshold: int = 10
) -> Tuple[int, ...]:
    """Each gene uniform in [0, ceil(target / d * 1.2)]."""
    return tuple(_draw(math.ceil(target / d * 1.2), rng) for d in denominations)


def perturbed_greedy_strategy(
    target: int,
    denominations: Sequence[int],
    rng: np.random.Generator,
    threshold: int = 10
) -> Tuple[int, ...]:
    """
    Greedy fill in list order with each count offset by -1..+2.

    Counts are floored at zero and the remainder (possibly negative after
    an upward offset) carries on to the next denomination.
    """
    remaining = target
    genes = []
    for d in denominations:
        if remaining > 0 and d <= remaining:
            needed = remaining // d + int(rng.integers(-1, 3))
            needed = max(0, needed)
            remaining -= needed * d
            genes.append(needed)
        else:
            genes.append(0)
    return tuple(genes)


def small_coin_strategy(
    target: int,
    denominations: Sequence[int],
    rng: np.random.Generator,
    threshold: int = 10
) -> Tuple[int, ...]:
    """Loose bounds for denominations <= threshold, [0, 4] for the rest."""
    return tuple(
        _draw(math.ceil(target / d * 0.8), rng) if d <= threshold else _draw(4, rng)
        for d in denominations
    )


def large_coin_strategy(
    target: int,
    denominations: Sequence[int],
    rng: np.random.Generator,
    threshold: int = 10
) -> Tuple[int, ...]:
    """Loose bounds for denominations > threshold, [0, 2] for the rest."""
    return tuple(
        _draw(math.ceil(target / d * 0.9), rng) if d > threshold else _draw(2, rng)
        for d in denominations
    )


STRATEGIES: Dict[str, Strategy] = {
    'random': random_strategy,
    'perturbed_greedy': perturbed_greedy_strategy,
    'small_coins': small_coin_strategy,
    'large_coins': large_coin_strategy,
}


def create_diverse_chromosome(
    evaluator: FitnessEvaluator,
    bounds: Sequence[int],
    rng: np.random.Generator,
    small_denomination_threshold: int = 10
) -> Tuple[Chromosome, str]:
    """
    Build one scored chromosome with a uniformly chosen strategy.

    Args:
        evaluator: Fitness evaluator (supplies target and denominations)
        bounds: Gene bounds the result is clipped into
        rng: Random number generator
        small_denomination_threshold: Largest value treated as a small coin

    Returns:
        Tuple of (scored_chromosome, strategy_name)
    """
    names = list(STRATEGIES)
    name = names[int(rng.integers(0, len(names)))]
    genes = STRATEGIES[name](
        evaluator.target, evaluator.denominations, rng, small_denomination_threshold
    )
    return evaluator.new_chromosome(clip_to_bounds(genes, bounds)), name


def inject_diversity(
    population: Population,
    evaluator: FitnessEvaluator,
    rng: np.random.Generator,
    replacement_fraction: float = 0.3,
    safety_multiplier: float = 1.5,
    small_denomination_threshold: int = 10
) -> int:
    """
    Replace the worst fraction of the population with diverse chromosomes.

    The population is sorted best-first in place; slot 0 (the current best)
    is never replaced.

    Args:
        population: Population to modify in place
        evaluator: Fitness evaluator used to score replacements
        rng: Random number generator
        replacement_fraction: Share of slots to replace
        safety_multiplier: Gene-bound multiplier used for clipping
        small_denomination_threshold: Largest value treated as a small coin

    Returns:
        Number of chromosomes replaced
    """
    population.sort()

    size = len(population)
    num_to_replace = min(int(size * replacement_fraction), size - 1)
    if num_to_replace <= 0:
        return 0

    bounds = gene_bounds(evaluator.target, evaluator.denominations, safety_multiplier)
    used = {name: 0 for name in STRATEGIES}

    for index in range(size - num_to_replace, size):
        chromosome, name = create_diverse_chromosome(
            evaluator, bounds, rng, small_denomination_threshold
        )
        population.replace(index, chromosome)
        used[name] += 1

    logger.debug("Injected %d chromosomes %s", num_to_replace, used)
    return num_to_replace
