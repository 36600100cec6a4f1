"""
Coin Change GA

Finds a combination of coins that reaches a target amount with the fewest
coins using a genetic algorithm with greedy seeding and diversity injection.

Modules:
- data_models: Chromosome, generation records and solver results
- fitness: FitnessEvaluator and amount validation
- population: Fixed-size scored population
- seeding: Random and greedy-rotation initial population
- selection, crossover, mutation: Genetic operators
- diversity: Diversity metric and injection strategies
- engine: Generational loop with elitism and early stopping
- solver: CoinChangeSolver façade
- config_loader: SolverConfig and YAML loading
- reporting, visualization: Text report and convergence plots
"""

__version__ = "0.1.0"

from .data_models import Chromosome, GenerationRecord, SolveResult, DEFAULT_DENOMINATIONS
from .fitness import FitnessEvaluator, InvalidAmount, MAX_AMOUNT
from .population import Population
from .seeding import Seeder, SeedingDegraded
from .engine import EvolutionEngine
from .config_loader import SolverConfig, ConfigurationError, load_solver_config
from .solver import CoinChangeSolver, solve

__all__ = [
    "Chromosome",
    "GenerationRecord",
    "SolveResult",
    "DEFAULT_DENOMINATIONS",
    "FitnessEvaluator",
    "InvalidAmount",
    "MAX_AMOUNT",
    "Population",
    "Seeder",
    "SeedingDegraded",
    "EvolutionEngine",
    "SolverConfig",
    "ConfigurationError",
    "load_solver_config",
    "CoinChangeSolver",
    "solve",
]
