"""
Triage Comparison Benchmark.

Runs the dual-heap triage scheduler, Strict Priority and FIFO on the
evaluation scenarios over several seeds, then reports mean/CI per metric
and Welch's t-tests of triage against each baseline.

Usage:
    # Quick test (5 runs)
    python assessment/benchmarks/comparison_benchmark.py --n-runs 5

    # Single scenario with plots
    python assessment/benchmarks/comparison_benchmark.py --scenario urgent_surge --plots

    # All scenarios
    python assessment/benchmarks/comparison_benchmark.py --all --n-runs 30
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from tqdm import tqdm

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from assessment.baselines import FIFOScheduler, StrictPriorityScheduler
from assessment.metrics import (
    compare_schedulers,
    compute_all_metrics,
    export_service_order,
    format_comparison_table,
    plot_priority_wait_bars,
    plot_wait_cdf,
    summarize_runs,
)
from assessment.workloads import (
    Workload,
    generate_mass_casualty,
    generate_steady_arrivals,
    generate_urgent_surge,
)
from patient_triage import SchedulerResult, TriageConfig, TriageSimulator

logger = logging.getLogger(__name__)

SCENARIOS: Dict[str, Tuple[Callable[..., Workload], str]] = {
    "steady_arrivals": (generate_steady_arrivals, "Steady Arrivals"),
    "urgent_surge": (generate_urgent_surge, "Urgent Surge"),
    "mass_casualty": (generate_mass_casualty, "Mass Casualty"),
}

KEY_METRICS = [
    "avg_wait",
    "p95_wait",
    "urgent_avg_wait",
    "routine_max_wait",
    "overdue_fraction",
    "priority_inversions",
]


def run_once(
    workload: Workload, config: TriageConfig, seed: int
) -> Dict[str, Tuple[Dict[str, float], SchedulerResult]]:
    """
    Run all three schedulers on one workload with a shared service seed.

    Returns:
        {scheduler_name: (metrics, result)}
    """
    schedulers = [
        TriageSimulator(config, scheduler_seed=seed),
        StrictPriorityScheduler(
            service_rate=config.service_rate,
            service_variance=config.service_variance,
            scheduler_seed=seed,
        ),
        FIFOScheduler(
            service_rate=config.service_rate,
            service_variance=config.service_variance,
            scheduler_seed=seed,
        ),
    ]

    outcome = {}
    for scheduler in schedulers:
        result = scheduler.schedule(workload.arrival_times, workload.priorities)
        metrics = compute_all_metrics(result, workload.arrival_times, config.max_wait)
        outcome[scheduler.name] = (metrics, result)
    return outcome


def run_scenario(
    scenario_key: str,
    config: TriageConfig,
    n_runs: int,
    base_seed: int,
    output_dir: str,
    plots: bool,
) -> None:
    """Run one scenario over n_runs seeds and write its summary."""
    generator, label = SCENARIOS[scenario_key]
    runs: Dict[str, List[Dict[str, float]]] = {"Triage": [], "Strict": [], "FIFO": []}
    last_outcome = None
    last_workload = None

    for run_idx in tqdm(range(n_runs), desc=label, unit="run", ncols=80):
        seed = base_seed + run_idx
        workload = generator(seed=seed)
        outcome = run_once(workload, config, seed)
        for name, (metrics, _) in outcome.items():
            runs[name].append(metrics)
        last_outcome, last_workload = outcome, workload

    logger.info(f"{label}: {n_runs} runs, {last_workload.n_patients} patients per run")

    summary = summarize_runs(runs)
    csv_path = Path(output_dir) / f"{scenario_key}_summary.csv"
    summary.to_csv(csv_path, index=False)
    print(f"\nSummary written to {csv_path}")

    comparisons = []
    for baseline in ("Strict", "FIFO"):
        for metric in KEY_METRICS:
            values_a = [m[metric] for m in runs[baseline] if metric in m]
            values_b = [m[metric] for m in runs["Triage"] if metric in m]
            if values_a and values_b:
                comparisons.append(
                    compare_schedulers(baseline, "Triage", metric, values_a, values_b)
                )
    print(format_comparison_table(comparisons, title=f"SCENARIO: {label}"))

    if plots:
        results = {name: result for name, (_, result) in last_outcome.items()}
        for name, result in results.items():
            export_service_order(
                result, last_workload.arrival_times, name, scenario_key, output_dir
            )
        print(plot_wait_cdf(results, scenario_key, output_dir, max_wait=config.max_wait))
        print(plot_priority_wait_bars(results, scenario_key, output_dir))


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Triage vs Strict Priority vs FIFO comparison benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scenario",
        type=str,
        choices=sorted(SCENARIOS),
        default="urgent_surge",
        help="Scenario to run (default: urgent_surge)",
    )
    parser.add_argument("--all", action="store_true", help="Run all scenarios")
    parser.add_argument(
        "--n-runs", type=int, default=20, help="Number of seeds per scenario (default: 20)"
    )
    parser.add_argument(
        "--base-seed", type=int, default=999, help="First seed (default: 999)"
    )
    parser.add_argument(
        "--max-wait", type=float, default=10.0, help="Triage wait threshold in seconds"
    )
    parser.add_argument(
        "--service-rate", type=float, default=1.0, help="Patients served per second"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="results/comparison",
        help="Output directory for results (default: results/comparison)",
    )
    parser.add_argument("--plots", action="store_true", help="Write CSV orders and plots")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = TriageConfig(max_wait=args.max_wait, service_rate=args.service_rate)
    os.makedirs(args.output_dir, exist_ok=True)

    scenario_keys = sorted(SCENARIOS) if args.all else [args.scenario]
    for key in scenario_keys:
        run_scenario(key, config, args.n_runs, args.base_seed, args.output_dir, args.plots)


if __name__ == "__main__":
    main()
