"""
Evolution engine for the coin change GA.

Drives the generational loop: selection, crossover, mutation and elitism,
with stagnation tracking, periodic diversity injection, early stopping
once the target is hit exactly, and cooperative cancellation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from .config_loader import SolverConfig
from .crossover import crossover
from .data_models import Chromosome, GenerationRecord, gene_bounds
from .diversity import inject_diversity
from .fitness import FitnessEvaluator
from .mutation import mutate
from .population import Population
from .selection import select_parents


logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle states of an evolution run"""
    RUNNING = "running"
    STAGNATING = "stagnating"
    TERMINATED = "terminated"


@dataclass
class EvolutionOutcome:
    """
    What a finished run hands back to the solver.

    Attributes:
        population: Final population
        best: Best chromosome observed during the run
        generations_run: Number of generations evolved
        cancelled: True if the cancellation signal stopped the run
        exact_match_generation: Generation where the target was first hit, if any
        history: Per-generation records
    """
    population: Population
    best: Chromosome
    generations_run: int
    cancelled: bool = False
    exact_match_generation: Optional[int] = None
    history: List[GenerationRecord] = field(default_factory=list)


class EvolutionEngine:
    """
    Generational GA over coin-count chromosomes.

    Each generation keeps the best chromosome seen so far in slot 0 and
    breeds the other N-1 slots from selected parents. Every
    ``diversity_check_interval`` generations the population is checked for
    convergence and, if needed, its worst members are replaced. Diversity
    injection runs before the exact-match check of the same generation.

    Args:
        evaluator: Fitness evaluator for the session's target
        config: Session configuration
        rng: Session random number generator
        cancel_event: Optional object with ``is_set()`` checked every generation
    """

    def __init__(self,
                 evaluator: FitnessEvaluator,
                 config: SolverConfig,
                 rng: np.random.Generator,
                 cancel_event=None):
        self.evaluator = evaluator
        self.config = config
        self.rng = rng
        self.cancel_event = cancel_event
        self.bounds = gene_bounds(
            evaluator.target, evaluator.denominations, config.safety_multiplier
        )

        self.state = EngineState.RUNNING
        self.best: Optional[Chromosome] = None
        self.stagnation_count = 0
        self.generation = 0
        self.history: List[GenerationRecord] = []

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _update_best(self, population: Population) -> None:
        candidate = population.best()
        if self.best is None or candidate.fitness > self.best.fitness:
            self.best = candidate

    def _breed(self, population: Population) -> List[Chromosome]:
        """Produce one or two scored offspring from a selected parent pair."""
        parent_a, parent_b = select_parents(
            population, self.rng, self.config.selection, self.config.tournament_size
        )

        if self.rng.random() < self.config.crossover_rate:
            children = crossover(parent_a, parent_b, self.rng, self.config.crossover_strategy)
        else:
            children = (parent_a, parent_b)

        offspring = []
        for child in children:
            child = mutate(child, self.bounds, self.config.mutation_rate, self.rng)
            if not child.is_scored:
                child = self.evaluator.scored(child)
            offspring.append(child)
        return offspring

    def step(self, population: Population) -> Population:
        """
        Evolve one generation.

        Args:
            population: Current population (not modified)

        Returns:
            Next population of the same size, best-so-far in slot 0
        """
        self._update_best(population)

        next_generation = [self.best]
        while len(next_generation) < len(population):
            next_generation.extend(self._breed(population))

        new_population = Population(next_generation[:len(population)])
        self._update_best(new_population)
        self.generation += 1
        return new_population

    def _track_stagnation(self, previous_best: Optional[float]) -> None:
        if previous_best is not None and abs(self.best.fitness - previous_best) < self.config.stagnation_epsilon:
            self.stagnation_count += 1
            self.state = EngineState.STAGNATING
        else:
            self.stagnation_count = 0
            self.state = EngineState.RUNNING

    def _maybe_inject(self, population: Population, generation: int) -> int:
        """Run the periodic diversity check; return the number replaced."""
        if generation % self.config.diversity_check_interval != 0:
            return 0

        diversity = population.diversity()
        if diversity >= self.config.diversity_threshold and self.stagnation_count <= self.config.stagnation_limit:
            return 0

        logger.debug(
            "Generation %d: diversity %.4f, stagnation %d, injecting",
            generation, diversity, self.stagnation_count
        )
        replaced = inject_diversity(
            population,
            self.evaluator,
            self.rng,
            replacement_fraction=self.config.replacement_fraction,
            safety_multiplier=self.config.safety_multiplier,
            small_denomination_threshold=self.config.small_denomination_threshold,
        )
        self.stagnation_count = 0
        self.state = EngineState.RUNNING
        self._update_best(population)
        return replaced

    def _record(self, population: Population, injected: int = 0) -> None:
        stats = population.statistics()
        self.history.append(GenerationRecord(
            generation=self.generation - 1,
            best_fitness=stats.best_fitness,
            mean_fitness=stats.mean_fitness,
            worst_fitness=stats.worst_fitness,
            diversity=stats.diversity,
            injected=injected,
        ))

    def run(self, population: Population) -> EvolutionOutcome:
        """
        Evolve until the budget is exhausted, the target is refined, or cancelled.

        Args:
            population: Seeded initial population

        Returns:
            EvolutionOutcome with the final population and best chromosome
        """
        max_generations = self.config.max_generations
        self._update_best(population)
        previous_best = None
        cancelled = False
        exact_generation = None

        for i in range(max_generations):
            if self._cancelled():
                cancelled = True
                break

            population = self.step(population)
            self._track_stagnation(previous_best)
            previous_best = self.best.fitness

            injected = self._maybe_inject(population, i)
            self._record(population, injected)

            if self.evaluator.is_exact(self.best):
                exact_generation = i
                extra = min(self.config.refinement_generations, max_generations - i - 1)
                logger.info(
                    "Exact match at generation %d (%d coins), refining for %d more",
                    i, self.best.coin_count, extra
                )
                for _ in range(extra):
                    if self._cancelled():
                        cancelled = True
                        break
                    population = self.step(population)
                    self._record(population)
                break

        self.state = EngineState.TERMINATED
        if cancelled:
            logger.info("Run cancelled after %d generations", self.generation)

        return EvolutionOutcome(
            population=population,
            best=self.best,
            generations_run=self.generation,
            cancelled=cancelled,
            exact_match_generation=exact_generation,
            history=list(self.history),
        )
