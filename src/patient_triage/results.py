"""
Data structures for triage simulation results.

Per-patient arrays are indexed by arrival order.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np


@dataclass
class SchedulerResult:
    """
    Container for discrete-event simulation results.

    Attributes:
        waiting_times: Per-patient wait (arrival to start of service)
        e2e_times: Per-patient time in system (arrival to completion)
        priorities: Medical priority of each patient (1 = most urgent)
        service_order: Patient indices in the order they were served
        metadata: Scheduler-specific data (serve path counters, parameters)
    """

    waiting_times: np.ndarray
    e2e_times: np.ndarray
    priorities: Optional[List[int]] = None
    service_order: List[int] = field(default_factory=list)
    metadata: Optional[Dict] = None

    def __post_init__(self):
        """Convert lists to numpy arrays if needed."""
        if not isinstance(self.waiting_times, np.ndarray):
            self.waiting_times = np.array(self.waiting_times, dtype=float)
        if not isinstance(self.e2e_times, np.ndarray):
            self.e2e_times = np.array(self.e2e_times, dtype=float)

    @property
    def n_jobs(self) -> int:
        """Total number of patients simulated."""
        return len(self.waiting_times)

    def _select(self, values: np.ndarray, priority: Optional[int]) -> np.ndarray:
        if priority is None:
            return values
        if self.priorities is None:
            raise ValueError("Cannot filter by priority: priorities not recorded")
        mask = np.array([p == priority for p in self.priorities], dtype=bool)
        return values[mask]

    def avg_waiting_time(self, priority: Optional[int] = None) -> float:
        """Mean wait, optionally restricted to one priority level."""
        selected = self._select(self.waiting_times, priority)
        return float(np.mean(selected)) if selected.size else 0.0

    def avg_e2e_time(self, priority: Optional[int] = None) -> float:
        """Mean time in system, optionally restricted to one priority level."""
        selected = self._select(self.e2e_times, priority)
        return float(np.mean(selected)) if selected.size else 0.0

    def max_waiting_time(self, priority: Optional[int] = None) -> float:
        selected = self._select(self.waiting_times, priority)
        return float(np.max(selected)) if selected.size else 0.0

    def percentile_waiting_time(
        self, percentile: float, priority: Optional[int] = None
    ) -> float:
        """
        Percentile of waiting times.

        Args:
            percentile: Percentile to compute (0-100)
            priority: If specified, compute only for this priority level

        Raises:
            ValueError: If percentile is outside [0, 100]
        """
        if not 0 <= percentile <= 100:
            raise ValueError(f"Percentile must be in [0, 100], got {percentile}")

        selected = self._select(self.waiting_times, priority)
        if not selected.size:
            return 0.0
        return float(np.percentile(selected, percentile))

    def per_priority_waiting_times(self) -> Dict[int, float]:
        """Mean wait for each priority level present."""
        if self.priorities is None:
            raise ValueError(
                "Cannot compute per-priority metrics: priorities not recorded"
            )
        return {p: self.avg_waiting_time(p) for p in sorted(set(self.priorities))}

    def overdue_fraction(self, max_wait: float) -> float:
        """
        Fraction of patients whose wait strictly exceeded max_wait.

        A patient seen after exactly max_wait is on time: the triage policy
        switches to arrival order once a wait reaches the threshold, so that
        is the latest a starving patient is meant to be seen.
        """
        if not self.n_jobs:
            return 0.0
        return float(np.mean(self.waiting_times > max_wait))
