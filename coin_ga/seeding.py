"""
Initial population seeding for the coin change GA.

Fills the population with uniformly random chromosomes and replaces a
leading fraction with greedy solutions built from every rotation of the
denomination list.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .data_models import Chromosome, gene_bounds
from .fitness import FitnessEvaluator
from .population import Population


logger = logging.getLogger(__name__)


class SeedingDegraded(RuntimeError):
    """Raised when heuristic seed generation fails; handled inside seeding"""
    pass


def greedy_fill(amount: int, denominations: Sequence[int], start: int = 0) -> Tuple[int, ...]:
    """
    Standard greedy coin-making, starting at a given denomination.

    Visits denominations in list order beginning at ``start`` and wrapping
    around, taking as many of each coin as fit in the remaining amount.

    Args:
        amount: Amount to make
        denominations: Ordered denominations
        start: Index of the first denomination to visit

    Returns:
        Gene vector in the original denomination order

    Example:
        >>> greedy_fill(67, (100, 50, 25, 10, 5, 1))
        (0, 1, 0, 1, 1, 2)
        >>> greedy_fill(67, (100, 50, 25, 10, 5, 1), start=2)
        (0, 0, 2, 1, 1, 2)
    """
    size = len(denominations)
    genes = [0] * size
    remaining = amount

    for offset in range(size):
        index = (start + offset) % size
        needed = remaining // denominations[index]
        remaining -= needed * denominations[index]
        genes[index] = needed

    return tuple(genes)


def random_genes(bounds: Sequence[int], rng: np.random.Generator) -> Tuple[int, ...]:
    """Draw each gene uniformly in [0, bound]."""
    return tuple(int(rng.integers(0, bound + 1)) for bound in bounds)


class Seeder:
    """
    Builds the initial population.

    Most slots get uniformly random genes within the gene bounds; the leading
    ``greedy_fraction`` of slots (at most one per denomination) get greedy
    solutions started from successive rotations of the denomination list, so
    every denomination leads at least one greedy seed when room allows.
    """

    def __init__(self,
                 evaluator: FitnessEvaluator,
                 rng: np.random.Generator,
                 safety_multiplier: float = 1.5,
                 greedy_fraction: float = 0.25):
        self.evaluator = evaluator
        self.rng = rng
        self.safety_multiplier = safety_multiplier
        self.greedy_fraction = greedy_fraction
        self.bounds = gene_bounds(evaluator.target, evaluator.denominations, safety_multiplier)

    def greedy_solutions(self) -> List[Chromosome]:
        """
        Generate one scored greedy chromosome per denomination rotation.

        Returns:
            List of scored chromosomes

        Raises:
            SeedingDegraded: If a greedy solution cannot be produced
        """
        denominations = self.evaluator.denominations
        solutions = []
        try:
            for start in range(len(denominations)):
                genes = greedy_fill(self.evaluator.target, denominations, start)
                if any(g > bound for g, bound in zip(genes, self.bounds)):
                    raise SeedingDegraded(
                        f"Greedy rotation {start} exceeds gene bounds: {genes}"
                    )
                solutions.append(self.evaluator.new_chromosome(genes))
        except (ArithmeticError, ValueError) as e:
            raise SeedingDegraded(f"Greedy seeding failed: {e}") from e
        return solutions

    def seed(self, population_size: int) -> Population:
        """
        Create a scored population of the requested size.

        Args:
            population_size: Number of chromosomes (N)

        Returns:
            Population of exactly population_size scored chromosomes
        """
        if population_size < 1:
            raise ValueError(f"Population size must be positive, got {population_size}")

        chromosomes = [
            self.evaluator.new_chromosome(random_genes(self.bounds, self.rng))
            for _ in range(population_size)
        ]

        greedy_slots = int(population_size * self.greedy_fraction)
        if greedy_slots > 0:
            try:
                greedy = self.greedy_solutions()
            except SeedingDegraded as e:
                logger.debug("Falling back to random seeds: %s", e)
                greedy = []

            for i, chromosome in enumerate(greedy[:greedy_slots]):
                chromosomes[i] = chromosome

            logger.debug(
                "Seeded %d chromosomes (%d greedy)",
                population_size, min(len(greedy), greedy_slots)
            )

        return Population(chromosomes)
