"""
Metrics computation for triage evaluation.

Implements the metrics used to compare triage against the baselines:
- Waiting time (avg, P95, max), overall and for the most/least urgent level
- Starvation (share of patients waiting past the threshold, worst overrun)
- Multi-run statistics (mean, std, 95% CI) and Welch's t-test comparisons
"""

from dataclasses import asdict, dataclass
from typing import Dict, List

import numpy as np
import pandas as pd
from scipy import stats

from patient_triage import SchedulerResult

from .order_analysis import compute_order_metrics


def compute_wait_metrics(result: SchedulerResult) -> Dict[str, float]:
    """
    Compute waiting-time metrics.

    Metrics:
        - avg_wait / p95_wait / max_wait: over all patients
        - urgent_avg_wait: mean wait of the most urgent level present
        - routine_avg_wait: mean wait of the least urgent level present
        - routine_max_wait: worst wait of the least urgent level present

    Args:
        result: Scheduler simulation result

    Returns:
        Dictionary with wait metrics
    """
    metrics = {
        "avg_wait": result.avg_waiting_time(),
        "p95_wait": result.percentile_waiting_time(95),
        "max_wait": result.max_waiting_time(),
    }

    if result.priorities:
        most_urgent = min(result.priorities)
        least_urgent = max(result.priorities)
        metrics["urgent_avg_wait"] = result.avg_waiting_time(most_urgent)
        metrics["routine_avg_wait"] = result.avg_waiting_time(least_urgent)
        metrics["routine_max_wait"] = result.max_waiting_time(least_urgent)

    return metrics


def compute_starvation_metrics(
    result: SchedulerResult, max_wait: float
) -> Dict[str, float]:
    """
    Compute starvation metrics against a wait threshold.

    Metrics:
        - overdue_fraction: Share of patients that waited longer than max_wait
          (a wait of exactly max_wait is on time, see
          SchedulerResult.overdue_fraction)
        - overdue_count: Number of such patients
        - worst_overrun: Largest wait beyond max_wait (0 if nobody overran)

    Args:
        result: Scheduler simulation result
        max_wait: Threshold the triage policy enforces

    Returns:
        Dictionary with starvation metrics
    """
    if max_wait < 0:
        raise ValueError(f"max_wait must be non-negative, got {max_wait}")

    overrun = result.waiting_times - max_wait
    return {
        "overdue_fraction": result.overdue_fraction(max_wait),
        "overdue_count": int(np.sum(overrun > 0)),
        "worst_overrun": float(max(0.0, np.max(overrun))) if result.n_jobs else 0.0,
    }


def compute_all_metrics(
    result: SchedulerResult,
    arrival_times: List[float],
    max_wait: float,
) -> Dict[str, float]:
    """
    Compute every metric for one run.

    Args:
        result: Scheduler simulation result
        arrival_times: Patient arrival times
        max_wait: Starvation threshold

    Returns:
        Combined metrics dictionary
    """
    return {
        **compute_wait_metrics(result),
        **compute_starvation_metrics(result, max_wait),
        **compute_order_metrics(result, arrival_times),
    }


# === Multi-run statistics ===

CONFIDENCE = 0.95

# (p-value upper bound, marker), tightest first
SIGNIFICANCE_LEVELS = ((0.001, "***"), (0.01, "**"), (0.05, "*"))


@dataclass
class StatisticsSummary:
    """
    One metric aggregated over repeated runs.

    Attributes:
        mean: Sample mean
        std: Sample standard deviation (ddof=1, 0 for a single run)
        ci_lower / ci_upper: Student-t confidence interval for the mean
        n_samples: Number of runs
    """

    mean: float
    std: float
    ci_lower: float
    ci_upper: float
    n_samples: int

    @property
    def half_width(self) -> float:
        return (self.ci_upper - self.ci_lower) / 2

    def __str__(self) -> str:
        return f"{self.mean:.3f} ± {self.half_width:.3f} (n={self.n_samples})"


@dataclass
class ComparisonResult:
    """
    Welch's t-test of scheduler B against baseline A on one metric.

    delta_pct is (B - A) / A in percent, 0 when A's mean is 0.
    """

    scheduler_a: str
    scheduler_b: str
    metric_name: str
    mean_a: float
    mean_b: float
    delta_pct: float
    t_statistic: float
    p_value: float
    is_significant: bool

    def significance_marker(self) -> str:
        for bound, marker in SIGNIFICANCE_LEVELS:
            if self.p_value < bound:
                return marker
        return "n.s."


def compute_statistics(values: List[float]) -> StatisticsSummary:
    """
    Mean, standard deviation and 95% Student-t interval of a sample.

    The interval collapses onto the mean for a single run or a constant
    sample.

    Raises:
        ValueError: If values is empty

    Example:
        >>> print(compute_statistics([4.0, 5.0, 6.0]))
        5.000 ± 2.484 (n=3)
    """
    sample = np.asarray(values, dtype=float)
    if sample.size == 0:
        raise ValueError("Cannot compute statistics for an empty sample")

    n = int(sample.size)
    mean = float(sample.mean())
    std = float(sample.std(ddof=1)) if n > 1 else 0.0

    half_width = 0.0
    if std > 0:
        half_width = float(stats.t.ppf((1 + CONFIDENCE) / 2, n - 1) * std / np.sqrt(n))

    return StatisticsSummary(
        mean=mean,
        std=std,
        ci_lower=mean - half_width,
        ci_upper=mean + half_width,
        n_samples=n,
    )


def compare_schedulers(
    scheduler_a_name: str,
    scheduler_b_name: str,
    metric_name: str,
    values_a: List[float],
    values_b: List[float],
) -> ComparisonResult:
    """
    Welch's t-test between two schedulers' per-run values of one metric.

    If either sample is constant the t-test is undefined; the difference is
    then reported as significant exactly when the means differ.

    Raises:
        ValueError: If either sample is empty
    """
    if len(values_a) == 0 or len(values_b) == 0:
        raise ValueError("Cannot compare schedulers on an empty sample")

    summary_a = compute_statistics(values_a)
    summary_b = compute_statistics(values_b)

    if summary_a.std == 0.0 or summary_b.std == 0.0:
        differ = summary_a.mean != summary_b.mean
        t_stat, p_val = (float("inf"), 0.0) if differ else (0.0, 1.0)
    else:
        test = stats.ttest_ind(values_a, values_b, equal_var=False)
        t_stat, p_val = float(test.statistic), float(test.pvalue)

    delta_pct = 0.0
    if summary_a.mean != 0:
        delta_pct = (summary_b.mean - summary_a.mean) / summary_a.mean * 100.0

    return ComparisonResult(
        scheduler_a=scheduler_a_name,
        scheduler_b=scheduler_b_name,
        metric_name=metric_name,
        mean_a=summary_a.mean,
        mean_b=summary_b.mean,
        delta_pct=delta_pct,
        t_statistic=t_stat,
        p_value=p_val,
        is_significant=p_val < 0.05,
    )


def format_comparison_table(
    comparisons: List[ComparisonResult], title: str = "SCHEDULER COMPARISON"
) -> str:
    """Render comparisons as a fixed-width text table under a title banner."""
    frame = pd.DataFrame(
        [
            {
                "metric": c.metric_name,
                "comparison": f"{c.scheduler_a} vs {c.scheduler_b}",
                "mean_a": f"{c.mean_a:.4f}",
                "mean_b": f"{c.mean_b:.4f}",
                "delta_%": f"{c.delta_pct:+.1f}",
                "t": f"{c.t_statistic:.2f}",
                "p": f"{c.p_value:.4f}" if c.p_value >= 1e-4 else "<1e-4",
                "sig": c.significance_marker(),
            }
            for c in comparisons
        ]
    )
    body = frame.to_string(index=False) if len(frame) else "(no comparisons)"
    rule = "=" * max(len(title), max(len(line) for line in body.splitlines()))
    return "\n".join([rule, title, rule, body])


def summarize_runs(runs: Dict[str, List[Dict[str, float]]]) -> pd.DataFrame:
    """
    Aggregate per-run metrics into one row per (scheduler, metric).

    Args:
        runs: {scheduler_name: [metrics dict for each run]}

    Returns:
        DataFrame with columns scheduler, metric, mean, std, ci_lower,
        ci_upper, n_samples
    """
    columns = ["scheduler", "metric", "mean", "std", "ci_lower", "ci_upper", "n_samples"]
    rows = []
    for scheduler_name, run_metrics in runs.items():
        if not run_metrics:
            continue
        frame = pd.DataFrame(run_metrics)
        for metric in frame.columns:
            summary = compute_statistics(frame[metric].dropna().astype(float).tolist())
            rows.append({"scheduler": scheduler_name, "metric": metric, **asdict(summary)})

    return pd.DataFrame(rows, columns=columns)
