"""
Configuration Loading System

Loads YAML configuration files and converts them to the per-session
SolverConfig used by the coin change GA.
"""

import numbers
from dataclasses import dataclass, field, fields, asdict, replace
from typing import Dict, List, Any, Optional, Sequence

import yaml

from .crossover import CROSSOVER_STRATEGIES
from .data_models import DEFAULT_DENOMINATIONS
from .selection import SELECTION_METHODS


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


@dataclass(frozen=True)
class SolverConfig:
    """
    Tuning parameters for one solving session.

    Every solver, seeder and engine receives its own instance; nothing is
    shared between sessions.
    """
    # Population and budget
    population_size: int = 300
    max_generations: int = 1000
    refinement_generations: int = 100

    # Genetic operators
    mutation_rate: float = 0.12
    crossover_rate: float = 0.35
    selection: str = "tournament"
    tournament_size: int = 3
    crossover_strategy: str = "single_point"

    # Seeding
    safety_multiplier: float = 1.5
    greedy_fraction: float = 0.25

    # Diversity management
    diversity_check_interval: int = 50
    diversity_threshold: float = 0.1
    stagnation_limit: int = 30
    stagnation_epsilon: float = 0.001
    replacement_fraction: float = 0.3
    small_denomination_threshold: int = 10

    # Fitness
    max_amount: int = 10_000
    base_fitness: float = 10_000.0
    amount_penalty_weight: float = 1_000.0
    coin_count_weight: float = 1.0
    overshoot_penalty_multiplier: float = 0.5

    denominations: tuple = field(default=DEFAULT_DENOMINATIONS)
    random_seed: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.denominations, tuple):
            object.__setattr__(self, "denominations", tuple(self.denominations))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SolverConfig":
        """
        Create a config from a plain dictionary (e.g. the YAML ``solver`` section).

        Args:
            data: Mapping of field names to values; missing keys keep defaults

        Returns:
            Validated SolverConfig

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown solver settings: {', '.join(unknown)}")

        seed = data.get("random_seed")
        if seed == "random":
            data["random_seed"] = None
        elif isinstance(seed, str) and seed.isdigit():
            data["random_seed"] = int(seed)

        try:
            config = cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid solver settings: {e}")
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["denominations"] = list(self.denominations)
        return data

    def with_overrides(self, **overrides) -> "SolverConfig":
        """Copy with some fields replaced, ignoring overrides set to None."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **overrides)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError listing every issue found."""
        issues = validate_config(self)
        if issues:
            raise ConfigurationError(
                "Invalid solver configuration:\n" + "\n".join(f"  - {i}" for i in issues)
            )


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_denominations(denominations: Sequence[int]) -> List[str]:
    """Return issues with a denomination list (empty if valid)."""
    issues = []
    if not denominations:
        issues.append("No denominations defined")
        return issues

    for value in denominations:
        if not _is_integer(value):
            issues.append(f"Denomination {value!r} must be an integer")
        elif value <= 0:
            issues.append(f"Denomination {value} must be positive")

    if len(set(denominations)) != len(denominations):
        issues.append(f"Duplicate denominations in {list(denominations)}")

    return issues


def validate_config(config: SolverConfig) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    for name in ("population_size", "max_generations", "diversity_check_interval",
                 "tournament_size", "max_amount"):
        value = getattr(config, name)
        if not _is_integer(value) or value <= 0:
            issues.append(f"{name} must be a positive integer, got {value!r}")

    for name in ("refinement_generations", "stagnation_limit"):
        value = getattr(config, name)
        if not _is_integer(value) or value < 0:
            issues.append(f"{name} must be a non-negative integer, got {value!r}")

    seed = config.random_seed
    if seed is not None and (not _is_integer(seed) or seed < 0):
        issues.append(f"random_seed must be a non-negative integer or 'random', got {seed!r}")

    for name in ("mutation_rate", "crossover_rate", "greedy_fraction",
                 "replacement_fraction", "overshoot_penalty_multiplier"):
        value = getattr(config, name)
        if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            issues.append(f"{name} must be in [0, 1], got {value!r}")

    if config.safety_multiplier < 1.0:
        issues.append(f"safety_multiplier must be >= 1, got {config.safety_multiplier}")

    if config.diversity_threshold < 0 or config.stagnation_epsilon < 0:
        issues.append("diversity_threshold and stagnation_epsilon must be non-negative")

    if config.amount_penalty_weight <= 0 or config.coin_count_weight < 0:
        issues.append("Fitness weights must be positive")

    if config.base_fitness <= 1.0:
        issues.append(f"base_fitness must exceed 1, got {config.base_fitness}")

    if config.selection not in SELECTION_METHODS:
        issues.append(f"Unknown selection method: {config.selection}")

    if config.crossover_strategy not in CROSSOVER_STRATEGIES:
        issues.append(f"Unknown crossover strategy: {config.crossover_strategy}")

    issues.extend(validate_denominations(config.denominations))

    return issues


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
    return config


def load_solver_config(config_path: str = "config.yaml") -> SolverConfig:
    """
    Create a validated SolverConfig from the ``solver`` section of a YAML file

    Args:
        config_path: Path to the configuration file

    Returns:
        SolverConfig instance
    """
    config = load_config(config_path)
    return SolverConfig.from_dict(config.get("solver", {}))


def print_config_summary(config: SolverConfig):
    """Print a summary of the configuration"""
    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)
    print(f"Denominations: {', '.join(str(d) for d in config.denominations)}")
    print(f"Population: {config.population_size} x {config.max_generations} generations")
    print(f"Selection: {config.selection} (size {config.tournament_size})")
    print(f"Crossover: {config.crossover_strategy} @ {config.crossover_rate:.0%}")
    print(f"Mutation rate: {config.mutation_rate:.0%} per gene")
    print(f"Diversity check: every {config.diversity_check_interval} generations, "
          f"threshold {config.diversity_threshold}")
    print(f"Random seed: {config.random_seed if config.random_seed is not None else 'random'}")

    issues = validate_config(config)
    if issues:
        print(f"\nValidation Issues ({len(issues)}):")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("\nConfiguration is valid")

    print("=" * 50)
