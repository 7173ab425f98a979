"""
Visualization tools for triage scheduler comparison.

Creates plots comparing waiting-time behavior across schedulers.
"""

from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np

from patient_triage import SchedulerResult

COLORS = {
    "Triage": "#2ca02c",  # Green
    "Strict": "#ff7f0e",  # Orange
    "FIFO": "#1f77b4",  # Blue
}


def _output_path(output_dir: str, scenario_name: str, filename: str) -> Path:
    scenario_dir = Path(output_dir) / scenario_name
    scenario_dir.mkdir(parents=True, exist_ok=True)
    return scenario_dir / filename


def plot_wait_cdf(
    results_dict: Dict[str, SchedulerResult],
    scenario_name: str,
    output_dir: str = "results",
    max_wait: Optional[float] = None,
) -> str:
    """
    Empirical CDF of waiting times for each scheduler.

    Args:
        results_dict: {"Triage": result, "Strict": result, "FIFO": result}
        scenario_name: Scenario name for plot title and directory
        output_dir: Base directory for output
        max_wait: If given, drawn as a vertical threshold line

    Returns:
        Path to created plot file
    """
    fig, ax = plt.subplots(figsize=(8, 6))

    for scheduler_name, result in results_dict.items():
        waits = np.sort(result.waiting_times)
        cdf = np.arange(1, len(waits) + 1) / len(waits)
        ax.step(waits, cdf, where="post", label=scheduler_name,
                color=COLORS.get(scheduler_name), linewidth=2)

    if max_wait is not None:
        ax.axvline(max_wait, color="k", linestyle="--", alpha=0.4, label="max_wait")

    ax.set_xlabel("Waiting time (s)", fontsize=12)
    ax.set_ylabel("Fraction of patients", fontsize=12)
    ax.set_title(f"Waiting Time CDF: {scenario_name}", fontsize=14, fontweight="bold")
    ax.legend(loc="lower right", fontsize=10)
    ax.grid(True, alpha=0.2)

    plot_path = _output_path(output_dir, scenario_name, "wait_cdf.png")
    plt.tight_layout()
    plt.savefig(plot_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return str(plot_path)


def plot_priority_wait_bars(
    results_dict: Dict[str, SchedulerResult],
    scenario_name: str,
    output_dir: str = "results",
) -> str:
    """
    Grouped bars of mean waiting time per priority level.

    Args:
        results_dict: {"Triage": result, "Strict": result, "FIFO": result}
        scenario_name: Scenario name for plot title and directory
        output_dir: Base directory for output

    Returns:
        Path to created plot file
    """
    levels = sorted({p for r in results_dict.values() for p in (r.priorities or [])})
    if not levels:
        raise ValueError("Cannot plot per-priority waits: priorities not recorded")

    fig, ax = plt.subplots(figsize=(10, 6))
    width = 0.8 / len(results_dict)
    x = np.arange(len(levels))

    for offset, (scheduler_name, result) in enumerate(results_dict.items()):
        means = [result.avg_waiting_time(level) for level in levels]
        ax.bar(x + offset * width, means, width, label=scheduler_name,
               color=COLORS.get(scheduler_name), alpha=0.85)

    ax.set_xticks(x + width * (len(results_dict) - 1) / 2)
    ax.set_xticklabels([f"P{level}" for level in levels])
    ax.set_xlabel("Priority (1 = most urgent)", fontsize=12)
    ax.set_ylabel("Mean waiting time (s)", fontsize=12)
    ax.set_title(f"Wait by Priority: {scenario_name}", fontsize=14, fontweight="bold")
    ax.legend(fontsize=10)
    ax.grid(True, axis="y", alpha=0.2)

    plot_path = _output_path(output_dir, scenario_name, "priority_wait_bars.png")
    plt.tight_layout()
    plt.savefig(plot_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return str(plot_path)
