"""
Convergence plots for the coin change GA.

Draws per-generation fitness and diversity curves from a run's history.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .data_models import GenerationRecord


def plot_fitness_history(history: List[GenerationRecord],
                         save_path: Optional[str] = None,
                         figsize: Tuple[int, int] = (12, 8),
                         title: str = "Fitness by generation"):
    """
    Plot best/mean/worst fitness and diversity per generation

    Generations where diversity was injected are marked on both panels.

    Args:
        history: Generation records from a SolveResult
        save_path: Optional path to save the figure
        figsize: Figure size (width, height)
        title: Title of the fitness panel

    Returns:
        The matplotlib Figure
    """
    if not history:
        raise ValueError("Cannot plot an empty generation history")

    generations = np.array([r.generation for r in history])
    best = np.array([r.best_fitness for r in history])
    mean = np.array([r.mean_fitness for r in history])
    worst = np.array([r.worst_fitness for r in history])
    diversity = np.array([r.diversity for r in history])
    injections = [r.generation for r in history if r.injected]

    fig, (ax_fit, ax_div) = plt.subplots(2, 1, figsize=figsize, sharex=True,
                                         gridspec_kw={'height_ratios': [2, 1]})

    ax_fit.plot(generations, best, color="green", label="Best")
    ax_fit.plot(generations, mean, color="blue", label="Mean")
    ax_fit.fill_between(generations, worst, best, color="blue", alpha=0.1, label="Worst-best range")
    ax_fit.set_ylabel("Fitness")
    ax_fit.set_title(title)
    ax_fit.grid(True, alpha=0.3)

    ax_div.plot(generations, diversity, color="purple")
    ax_div.set_xlabel("Generation")
    ax_div.set_ylabel("Diversity")
    ax_div.grid(True, alpha=0.3)

    for generation in injections:
        ax_fit.axvline(generation, color="red", linestyle="--", alpha=0.4)
        ax_div.axvline(generation, color="red", linestyle="--", alpha=0.4)

    ax_fit.legend(loc="lower right")
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
