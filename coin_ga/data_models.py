"""
Data models for the coin change GA.

Core data structures representing chromosomes, per-generation records and
solver results.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Any, Sequence


DEFAULT_DENOMINATIONS = (100, 50, 25, 10, 5, 1)


def calculate_amount(genes: Sequence[int], denominations: Sequence[int]) -> int:
    """Total value represented by a gene vector."""
    return sum(count * value for count, value in zip(genes, denominations))


def calculate_total_coins(genes: Sequence[int]) -> int:
    """Total number of coins in a gene vector."""
    return sum(genes)


def gene_bounds(
    target: int,
    denominations: Sequence[int],
    safety_multiplier: float = 1.5
) -> tuple[int, ...]:
    """
    Calculate the maximum coin count for each denomination.

    The multiplier keeps the optimum comfortably inside the search space;
    every bound is at least 10.

    Args:
        target: Target amount in minor currency units
        denominations: Ordered denominations
        safety_multiplier: Head-room factor over target / denomination

    Returns:
        Tuple of upper bounds (inclusive), one per denomination
    """
    return tuple(
        max(10, math.ceil(target / value * safety_multiplier))
        for value in denominations
    )


@dataclass(frozen=True)
class Chromosome:
    """
    Candidate coin multiset (individual in the GA population).

    Attributes:
        genes: Coin count per denomination
        denominations: Denominations the genes are counted against
        fitness: Cached fitness score, None until scored
    """
    genes: tuple[int, ...]
    denominations: tuple[int, ...]
    fitness: Optional[float] = None

    def __post_init__(self):
        """Normalize sequences to tuples and validate the gene vector."""
        object.__setattr__(self, "genes", tuple(int(g) for g in self.genes))
        object.__setattr__(self, "denominations", tuple(self.denominations))

        if len(self.genes) != len(self.denominations):
            raise ValueError(
                f"Chromosome has {len(self.genes)} genes for "
                f"{len(self.denominations)} denominations"
            )
        if any(g < 0 for g in self.genes):
            raise ValueError(f"Gene counts must be non-negative: {self.genes}")

    @property
    def represented_amount(self) -> int:
        return calculate_amount(self.genes, self.denominations)

    @property
    def coin_count(self) -> int:
        return calculate_total_coins(self.genes)

    @property
    def is_scored(self) -> bool:
        return self.fitness is not None

    def with_genes(self, genes: Sequence[int]) -> "Chromosome":
        """
        Create an unscored chromosome over the same denominations.

        Args:
            genes: New gene vector

        Returns:
            New Chromosome with fitness cleared
        """
        return Chromosome(genes=tuple(genes), denominations=self.denominations)

    def with_fitness(self, fitness: float) -> "Chromosome":
        return replace(self, fitness=float(fitness))

    def as_dict(self) -> dict[int, int]:
        """Map each denomination to its coin count."""
        return dict(zip(self.denominations, self.genes))

    def __len__(self) -> int:
        return len(self.genes)


@dataclass
class PopulationStats:
    """Fitness summary of a population at one point in time."""
    best_fitness: float
    worst_fitness: float
    mean_fitness: float
    diversity: float


@dataclass
class GenerationRecord:
    """
    Snapshot of one generation, kept for reporting and plotting.

    Attributes:
        generation: Zero-based generation index
        best_fitness: Best fitness after the generation
        mean_fitness: Mean population fitness
        worst_fitness: Worst population fitness
        diversity: std(fitness) / (mean(fitness) + 1)
        injected: Number of chromosomes replaced by diversity injection
    """
    generation: int
    best_fitness: float
    mean_fitness: float
    worst_fitness: float
    diversity: float
    injected: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "mean_fitness": self.mean_fitness,
            "worst_fitness": self.worst_fitness,
            "diversity": self.diversity,
            "injected": self.injected,
        }


@dataclass
class SolveResult:
    """
    Outcome of one solving session.

    Attributes:
        target: Target amount the session solved for
        best_chromosome: Fittest chromosome found
        population: Final population (list of scored chromosomes)
        stats: Fitness statistics of the final population
        generations_run: Generations evolved, refinement included
        cancelled: True if the run stopped on a cancellation signal
        history: One GenerationRecord per generation
        elapsed_seconds: Wall-clock duration of the run
    """
    target: int
    best_chromosome: Chromosome
    population: list[Chromosome]
    stats: PopulationStats
    generations_run: int
    cancelled: bool = False
    history: list[GenerationRecord] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def best_fitness(self) -> float:
        return self.best_chromosome.fitness

    @property
    def worst_fitness(self) -> float:
        return self.stats.worst_fitness

    @property
    def mean_fitness(self) -> float:
        return self.stats.mean_fitness

    @property
    def represented_amount(self) -> int:
        return self.best_chromosome.represented_amount

    @property
    def coin_count(self) -> int:
        return self.best_chromosome.coin_count

    @property
    def coins(self) -> dict[int, int]:
        return self.best_chromosome.as_dict()

    @property
    def is_exact(self) -> bool:
        return self.represented_amount == self.target
