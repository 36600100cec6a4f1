#!/usr/bin/env python3
"""
Coin Change GA

Main entry point for the genetic coin change solver.

Usage:
    python3 main.py 67
    python3 main.py 41 --denominations 25,10,5,1 --seed 42
    python3 main.py 1234 --config config.yaml --plot output/fitness.png
    python3 main.py --show-config
"""

import sys
import argparse
import logging
import time
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from coin_ga.config_loader import (
    ConfigurationError,
    SolverConfig,
    load_solver_config,
    print_config_summary,
)
from coin_ga.fitness import InvalidAmount
from coin_ga.reporting import format_result
from coin_ga.solver import CoinChangeSolver


def parse_denominations(value: str):
    """Parse a comma separated denomination list such as '100,50,25'."""
    try:
        return tuple(int(x) for x in value.split(",") if x.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            "Denominations must be integers separated by commas, e.g. 25,10,5,1"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Coin change solver using a genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("amount", type=int, nargs="?",
                        help="Target amount in cents")
    parser.add_argument("--denominations", type=parse_denominations,
                        help="Comma separated denominations in cents (default from config)")
    parser.add_argument("--config", default=None,
                        help="YAML configuration file (default: built-in defaults)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible run")
    parser.add_argument("--population-size", type=int, default=None)
    parser.add_argument("--max-generations", type=int, default=None)
    parser.add_argument("--plot", default=None,
                        help="Save a fitness-by-generation plot to this path")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the configuration summary")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def run_solver(args) -> int:
    """Run one solving session from parsed arguments and print the report."""
    config = load_solver_config(args.config) if args.config else SolverConfig()
    config = config.with_overrides(
        random_seed=args.seed,
        population_size=args.population_size,
        max_generations=args.max_generations,
        denominations=args.denominations,
    )

    if args.show_config:
        print_config_summary(config)
        if args.amount is None:
            return 0

    if args.amount is None:
        print("Error: an amount is required")
        return 1

    print(f"\nRunning genetic solver for {args.amount} cents...")
    start_time = time.time()
    result = CoinChangeSolver(config).solve(args.amount)
    print(f"Solver completed in {time.time() - start_time:.3f} seconds\n")

    print(format_result(result))

    if args.plot:
        print(f"\nGenerating fitness plot...")
        import matplotlib
        matplotlib.use('Agg')
        from coin_ga.visualization import plot_fitness_history

        plot_fitness_history(result.history, save_path=args.plot,
                             title=f"Fitness by generation (target {args.amount})")
        print(f"  Saved plot: {args.plot}")

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return run_solver(args)
    except (InvalidAmount, ConfigurationError) as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
