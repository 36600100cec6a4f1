"""
Mutation operators for the coin change GA.

Implements per-gene random reset within the legal bounds, plus a helper
that clips arbitrary gene vectors into those bounds.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .data_models import Chromosome


def clip_to_bounds(genes: Sequence[int], bounds: Sequence[int]) -> Tuple[int, ...]:
    """Clamp each gene into [0, bound]."""
    return tuple(min(max(0, int(g)), bound) for g, bound in zip(genes, bounds))


def mutate_genes(
    genes: Sequence[int],
    bounds: Sequence[int],
    mutation_rate: float,
    rng: np.random.Generator
) -> Tuple[Tuple[int, ...], List[int]]:
    """
    Resample each gene with probability ``mutation_rate``.

    Args:
        genes: Gene vector to mutate
        bounds: Inclusive upper bound per gene
        mutation_rate: Per-gene mutation probability
        rng: Random number generator

    Returns:
        Tuple of (new_genes, indices_mutated)
    """
    hits = rng.random(len(genes)) < mutation_rate
    mutated = list(genes)
    indices = []

    for i, hit in enumerate(hits):
        if hit:
            mutated[i] = int(rng.integers(0, bounds[i] + 1))
            indices.append(i)

    return tuple(mutated), indices


def mutate(
    chromosome: Chromosome,
    bounds: Sequence[int],
    mutation_rate: float,
    rng: np.random.Generator
) -> Chromosome:
    """
    Apply random-reset mutation to a chromosome.

    Returns the original (still scored) chromosome when no gene was hit,
    otherwise a new unscored one.
    """
    genes, indices = mutate_genes(chromosome.genes, bounds, mutation_rate, rng)
    if not indices:
        return chromosome
    return chromosome.with_genes(genes)
