"""
Solver façade for the coin change GA.

Validates input, wires the evaluator, seeder and engine together for one
session, and packages the outcome as a SolveResult.
"""

import logging
import time
from typing import Optional, Sequence

import numpy as np

from .config_loader import ConfigurationError, SolverConfig, validate_denominations
from .data_models import SolveResult
from .engine import EvolutionEngine
from .fitness import FitnessEvaluator
from .seeding import Seeder


logger = logging.getLogger(__name__)


class CoinChangeSolver:
    """
    Solves the coin change problem with a genetic algorithm.

    A solver holds only its configuration; every call to ``solve`` builds a
    fresh evaluator, population and random generator, so one solver (or
    several) can serve concurrent threads.

    Example:
        >>> solver = CoinChangeSolver(SolverConfig(random_seed=7))
        >>> result = solver.solve(41, denominations=[25, 10, 5, 1])
        >>> result.coins
        {25: 1, 10: 1, 5: 1, 1: 1}
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()
        self.config.validate()

    def solve(self,
              target_amount: int,
              denominations: Optional[Sequence[int]] = None,
              cancel_event=None,
              rng: Optional[np.random.Generator] = None) -> SolveResult:
        """
        Run one solving session.

        Args:
            target_amount: Target in minor currency units, 0 < target < max_amount
            denominations: Ordered denominations (defaults to the config's)
            cancel_event: Optional cancellation signal with ``is_set()``
            rng: Optional generator; defaults to one seeded from config.random_seed

        Returns:
            SolveResult with the best chromosome and final population statistics

        Raises:
            InvalidAmount: If the target is outside the valid range
            ConfigurationError: If the denominations are invalid
        """
        denominations = tuple(denominations) if denominations is not None else self.config.denominations
        issues = validate_denominations(denominations)
        if issues:
            raise ConfigurationError("; ".join(issues))

        evaluator = FitnessEvaluator.from_config(target_amount, denominations, self.config)

        if rng is None:
            rng = np.random.default_rng(self.config.random_seed)

        logger.info(
            "Solving for %d over %s (population %d, %d generations max)",
            target_amount, list(denominations),
            self.config.population_size, self.config.max_generations
        )
        start_time = time.perf_counter()

        seeder = Seeder(
            evaluator,
            rng,
            safety_multiplier=self.config.safety_multiplier,
            greedy_fraction=self.config.greedy_fraction,
        )
        population = seeder.seed(self.config.population_size)

        engine = EvolutionEngine(evaluator, self.config, rng, cancel_event=cancel_event)
        outcome = engine.run(population)

        elapsed = time.perf_counter() - start_time
        result = SolveResult(
            target=evaluator.target,
            best_chromosome=outcome.best,
            population=outcome.population.chromosomes,
            stats=outcome.population.statistics(),
            generations_run=outcome.generations_run,
            cancelled=outcome.cancelled,
            history=outcome.history,
            elapsed_seconds=elapsed,
        )

        logger.info(
            "Finished after %d generations in %.3fs: amount %d, %d coins, fitness %.1f",
            result.generations_run, elapsed,
            result.represented_amount, result.coin_count, result.best_fitness
        )
        return result


def solve(target_amount: int,
          denominations: Optional[Sequence[int]] = None,
          config: Optional[SolverConfig] = None,
          cancel_event=None,
          **overrides) -> SolveResult:
    """
    Convenience wrapper: solve with an optional config and field overrides.

    Example:
        >>> solve(100, population_size=50, random_seed=1).coins[100]
        1
    """
    config = config or SolverConfig()
    if overrides:
        config = config.with_overrides(**overrides)
    return CoinChangeSolver(config).solve(target_amount, denominations, cancel_event=cancel_event)
