"""
Metrics and evaluation tools for triage scheduling.
"""

from patient_triage import SchedulerResult

from .compute import (
    ComparisonResult,
    StatisticsSummary,
    compare_schedulers,
    compute_all_metrics,
    compute_starvation_metrics,
    compute_statistics,
    compute_wait_metrics,
    format_comparison_table,
    summarize_runs,
)
from .order_analysis import (
    compute_order_metrics,
    compute_service_order,
    count_priority_inversions,
    export_service_order,
)
from .visualization import plot_priority_wait_bars, plot_wait_cdf

__all__ = [
    # Core data structures
    "SchedulerResult",
    # Time-based metrics
    "compute_wait_metrics",
    "compute_starvation_metrics",
    "compute_all_metrics",
    # Statistical analysis
    "StatisticsSummary",
    "ComparisonResult",
    "compute_statistics",
    "compare_schedulers",
    "format_comparison_table",
    "summarize_runs",
    # Order-based metrics
    "compute_service_order",
    "count_priority_inversions",
    "compute_order_metrics",
    "export_service_order",
    # Visualization
    "plot_wait_cdf",
    "plot_priority_wait_bars",
]
