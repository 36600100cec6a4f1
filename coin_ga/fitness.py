"""
Fitness evaluation for the coin change GA.

Each chromosome represents a distribution of coins. The goal is to reach the
target amount exactly with the minimum number of coins.
"""

import numbers
from typing import Sequence

from .data_models import (
    Chromosome,
    DEFAULT_DENOMINATIONS,
    calculate_amount,
    calculate_total_coins,
)


MAX_AMOUNT = 10_000
MIN_FITNESS = 1.0


class InvalidAmount(ValueError):
    """Raised when the target amount lies outside (0, max_amount)"""
    pass


def validate_amount(amount, max_amount: int = MAX_AMOUNT) -> int:
    """
    Check that a target amount is an integer in the open range (0, max_amount).

    Args:
        amount: Candidate target amount in minor currency units
        max_amount: Exclusive upper limit

    Returns:
        The amount as int

    Raises:
        InvalidAmount: If the amount is not an integer or out of range
    """
    if isinstance(amount, bool) or not isinstance(amount, numbers.Integral):
        raise InvalidAmount(f"Amount must be an integer, got {amount!r}")
    amount = int(amount)
    if amount < 1 or amount >= max_amount:
        raise InvalidAmount(
            f"Amount must be between 1 and {max_amount - 1} (got {amount})"
        )
    return amount


class FitnessEvaluator:
    """
    Multi-objective fitness function for a fixed target amount.

    It considers:
    - How close the represented amount is to the target (heavy penalty)
    - Whether the target is overshot (extra penalty, bounded by one unit
      of amount difference so closeness always dominates)
    - Total number of coins on exact matches (minor penalty)

    Scores are clamped to MIN_FITNESS so they stay strictly positive.
    """

    def __init__(self,
                 target: int,
                 denominations: Sequence[int] = DEFAULT_DENOMINATIONS,
                 max_amount: int = MAX_AMOUNT,
                 base_fitness: float = 10_000.0,
                 amount_penalty_weight: float = 1_000.0,
                 coin_count_weight: float = 1.0,
                 overshoot_penalty_multiplier: float = 0.5):
        self.target = validate_amount(target, max_amount)
        self.denominations = tuple(int(d) for d in denominations)
        self.max_amount = max_amount
        self.base_fitness = base_fitness
        self.amount_penalty_weight = amount_penalty_weight
        self.coin_count_weight = coin_count_weight
        self.overshoot_penalty_multiplier = overshoot_penalty_multiplier

    @classmethod
    def from_config(cls, target: int, denominations: Sequence[int], config) -> "FitnessEvaluator":
        """Build an evaluator from a SolverConfig."""
        return cls(
            target,
            denominations,
            max_amount=config.max_amount,
            base_fitness=config.base_fitness,
            amount_penalty_weight=config.amount_penalty_weight,
            coin_count_weight=config.coin_count_weight,
            overshoot_penalty_multiplier=config.overshoot_penalty_multiplier,
        )

    def score_genes(self, genes: Sequence[int]) -> float:
        """
        Score a raw gene vector.

        Args:
            genes: Coin count per denomination

        Returns:
            Fitness value >= MIN_FITNESS (higher is better)
        """
        amount = calculate_amount(genes, self.denominations)
        difference = abs(self.target - amount)

        fitness = self.base_fitness
        fitness -= difference * self.amount_penalty_weight

        if difference == 0:
            fitness -= calculate_total_coins(genes) * self.coin_count_weight
        elif amount > self.target:
            # Overshoot can never be fixed by adding coins
            fitness -= self.amount_penalty_weight * self.overshoot_penalty_multiplier

        return max(MIN_FITNESS, fitness)

    def score(self, chromosome: Chromosome) -> float:
        return self.score_genes(chromosome.genes)

    def scored(self, chromosome: Chromosome) -> Chromosome:
        """
        Return the chromosome with its fitness attached.

        Args:
            chromosome: Chromosome to score (scored or not)

        Returns:
            New Chromosome carrying a freshly computed fitness
        """
        return chromosome.with_fitness(self.score(chromosome))

    def new_chromosome(self, genes: Sequence[int]) -> Chromosome:
        """Create and score a chromosome over this evaluator's denominations."""
        genes = tuple(int(g) for g in genes)
        return Chromosome(genes, self.denominations, self.score_genes(genes))

    def is_exact(self, chromosome: Chromosome) -> bool:
        return chromosome.represented_amount == self.target
