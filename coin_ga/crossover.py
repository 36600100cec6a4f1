"""
Crossover operators for the coin change GA.

Children are new, unscored chromosomes; parents are never modified.
"""

from typing import Tuple

import numpy as np

from .data_models import Chromosome


CROSSOVER_STRATEGIES = ("single_point", "uniform")


def single_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator
) -> Tuple[Chromosome, Chromosome]:
    """
    Swap gene tails after a random cut point.

    The cut lies strictly inside the gene vector, so each child takes at
    least one gene from each parent. Chromosomes with a single gene cannot
    be cut and come back as unscored copies.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator

    Returns:
        Tuple of (child_a, child_b)
    """
    size = len(parent_a)
    if size < 2:
        return parent_a.with_genes(parent_a.genes), parent_b.with_genes(parent_b.genes)

    cut = int(rng.integers(1, size))
    child_a = parent_a.genes[:cut] + parent_b.genes[cut:]
    child_b = parent_b.genes[:cut] + parent_a.genes[cut:]

    return parent_a.with_genes(child_a), parent_b.with_genes(child_b)


def uniform_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator,
    swap_probability: float = 0.5
) -> Tuple[Chromosome, Chromosome]:
    """
    Swap each gene between the parents independently.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator
        swap_probability: Per-gene swap probability

    Returns:
        Tuple of (child_a, child_b)
    """
    mask = rng.random(len(parent_a)) < swap_probability

    child_a = tuple(b if swap else a for a, b, swap in zip(parent_a.genes, parent_b.genes, mask))
    child_b = tuple(a if swap else b for a, b, swap in zip(parent_a.genes, parent_b.genes, mask))

    return parent_a.with_genes(child_a), parent_b.with_genes(child_b)


def crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator,
    strategy: str = "single_point"
) -> Tuple[Chromosome, Chromosome]:
    """
    Dispatch to the configured crossover operator.

    Raises:
        ValueError: If the parents differ in length or the strategy is unknown
    """
    if len(parent_a) != len(parent_b):
        raise ValueError(
            f"Parents differ in length: {len(parent_a)} vs {len(parent_b)}"
        )

    if strategy == "single_point":
        return single_point_crossover(parent_a, parent_b, rng)
    elif strategy == "uniform":
        return uniform_crossover(parent_a, parent_b, rng)
    else:
        raise ValueError(
            f"Unknown crossover strategy: '{strategy}'. Must be one of {CROSSOVER_STRATEGIES}"
        )
