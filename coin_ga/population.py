"""
Population container for the coin change GA.

A fixed-size, ordered collection of scored chromosomes with sorting,
replacement and statistics helpers.
"""

from typing import Iterable, Iterator, List

import numpy as np

from .data_models import Chromosome, PopulationStats


class Population:
    """
    Fixed-size collection of scored chromosomes.

    The size is set at construction and never changes; slots are only ever
    replaced. Every member must carry a fitness value.
    """

    def __init__(self, chromosomes: Iterable[Chromosome]):
        self._chromosomes: List[Chromosome] = list(chromosomes)
        if not self._chromosomes:
            raise ValueError("Population must contain at least one chromosome")
        for chromosome in self._chromosomes:
            self._check_scored(chromosome)

    @staticmethod
    def _check_scored(chromosome: Chromosome) -> None:
        if not chromosome.is_scored:
            raise ValueError(f"Chromosome {chromosome.genes} has not been scored")

    def __len__(self) -> int:
        return len(self._chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self._chromosomes)

    def __getitem__(self, index: int) -> Chromosome:
        return self._chromosomes[index]

    @property
    def size(self) -> int:
        return len(self._chromosomes)

    @property
    def chromosomes(self) -> List[Chromosome]:
        """Shallow copy of the members in slot order."""
        return list(self._chromosomes)

    def replace(self, index: int, chromosome: Chromosome) -> None:
        """
        Put a scored chromosome into an existing slot.

        Args:
            index: Slot to overwrite
            chromosome: Scored replacement

        Raises:
            ValueError: If the chromosome is unscored
            IndexError: If the slot does not exist
        """
        self._check_scored(chromosome)
        self._chromosomes[index] = chromosome

    def sort(self) -> None:
        """Sort in place, best fitness first (stable for ties)."""
        self._chromosomes.sort(key=lambda c: c.fitness, reverse=True)

    def fitness_values(self) -> np.ndarray:
        return np.array([c.fitness for c in self._chromosomes], dtype=float)

    def best(self) -> Chromosome:
        """Fittest chromosome; the lowest slot wins ties."""
        return self._chromosomes[int(np.argmax(self.fitness_values()))]

    def worst(self) -> Chromosome:
        return self._chromosomes[int(np.argmin(self.fitness_values()))]

    def best_fitness(self) -> float:
        return float(self.fitness_values().max())

    def worst_fitness(self) -> float:
        return float(self.fitness_values().min())

    def mean_fitness(self) -> float:
        return float(self.fitness_values().mean())

    def diversity(self) -> float:
        """
        Fitness dispersion normalized by the mean.

        Returns:
            std(fitness) / (mean(fitness) + 1), 0.0 for fewer than two members
        """
        if len(self._chromosomes) < 2:
            return 0.0
        values = self.fitness_values()
        return float(np.std(values) / (values.mean() + 1.0))

    def statistics(self) -> PopulationStats:
        values = self.fitness_values()
        return PopulationStats(
            best_fitness=float(values.max()),
            worst_fitness=float(values.min()),
            mean_fitness=float(values.mean()),
            diversity=self.diversity(),
        )
