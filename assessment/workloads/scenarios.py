"""
Evaluation scenarios for triage benchmarking.

Three scenarios:
1. Steady Arrivals - Mixed priorities below capacity (sanity baseline)
2. Urgent Surge - Routine patients under a sustained urgent stream (starvation)
3. Mass Casualty - A burst of critical arrivals on top of background load
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

DEFAULT_PRIORITY_WEIGHTS = (0.05, 0.15, 0.35, 0.30, 0.15)  # Priorities 1..5


@dataclass
class Workload:
    """
    Workload specification for triage schedulers.

    Attributes:
        arrival_times: Sorted list of patient arrival times (seconds)
        priorities: Medical priority per patient (1 = most urgent)
        description: Human-readable scenario description
    """

    arrival_times: List[float]
    priorities: List[int]
    description: str = ""

    def __post_init__(self):
        """Validate workload consistency."""
        n = len(self.arrival_times)
        if len(self.priorities) != n:
            raise ValueError(f"priorities length ({len(self.priorities)}) != n ({n})")

        if self.arrival_times != sorted(self.arrival_times):
            raise ValueError("arrival_times must be sorted")

        if any(p < 1 for p in self.priorities):
            raise ValueError("priorities must be >= 1")

    @property
    def n_patients(self) -> int:
        """Total number of patients."""
        return len(self.arrival_times)

    @property
    def duration(self) -> float:
        """Workload duration (last arrival time)."""
        return max(self.arrival_times) if self.arrival_times else 0.0

    def count_priority(self, priority: int) -> int:
        """Number of patients with the given priority."""
        return sum(1 for p in self.priorities if p == priority)


def _sorted_workload(
    arrival_times: Sequence[float], priorities: Sequence[int], description: str
) -> Workload:
    order = sorted(range(len(arrival_times)), key=lambda i: arrival_times[i])
    return Workload(
        arrival_times=[float(arrival_times[i]) for i in order],
        priorities=[int(priorities[i]) for i in order],
        description=description,
    )


def generate_steady_arrivals(
    n_patients: int = 200,
    arrival_rate: float = 0.8,
    priority_weights: Sequence[float] = DEFAULT_PRIORITY_WEIGHTS,
    seed: Optional[int] = None,
) -> Workload:
    """
    Scenario 1: Steady Arrivals.

    Poisson arrivals with a fixed priority mix, below service capacity.
    All schedulers should keep waits short; differences stay small.

    Args:
        n_patients: Number of patients
        arrival_rate: Mean arrivals per second (λ)
        priority_weights: Probability of priorities 1..len(weights)
        seed: RNG seed

    Returns:
        Workload with n_patients Poisson arrivals

    Example:
        >>> workload = generate_steady_arrivals(n_patients=50, seed=1)
        >>> workload.n_patients
        50
    """
    if n_patients <= 0:
        raise ValueError(f"n_patients must be positive, got {n_patients}")
    if arrival_rate <= 0:
        raise ValueError(f"arrival_rate must be positive, got {arrival_rate}")

    rng = np.random.default_rng(seed)
    weights = np.asarray(priority_weights, dtype=float)
    weights = weights / weights.sum()

    gaps = rng.exponential(1 / arrival_rate, size=n_patients)
    arrival_times = np.cumsum(gaps) - gaps[0]  # First arrival at t=0
    priorities = rng.choice(np.arange(1, len(weights) + 1), size=n_patients, p=weights)

    return _sorted_workload(
        arrival_times,
        priorities,
        f"Steady Arrivals: {n_patients} patients @ λ={arrival_rate}/s",
    )


def generate_urgent_surge(
    n_routine: int = 5,
    routine_priority: int = 5,
    n_urgent: int = 60,
    urgent_rate: float = 1.2,
    urgent_priorities: Sequence[int] = (1, 2),
    seed: Optional[int] = None,
) -> Workload:
    """
    Scenario 2: Urgent Surge.

    Tests the wait threshold: routine patients already waiting at t=0 must
    not starve while urgent patients keep arriving faster than they can be
    seen.

    Scenario:
        - n_routine routine patients arrive at t=0
        - n_urgent urgent patients arrive at urgent_rate from t=0.5
        - Strict priority serves every urgent patient before any routine one
        - Triage serves routine patients once they waited max_wait

    Args:
        n_routine: Routine patients present at the start
        routine_priority: Priority of routine patients
        n_urgent: Number of urgent arrivals
        urgent_rate: Urgent arrivals per second
        urgent_priorities: Priorities drawn uniformly for urgent patients
        seed: RNG seed

    Returns:
        Workload with n_routine + n_urgent patients
    """
    if n_routine <= 0 or n_urgent <= 0:
        raise ValueError("n_routine and n_urgent must be positive")
    if urgent_rate <= 0:
        raise ValueError(f"urgent_rate must be positive, got {urgent_rate}")
    if any(p >= routine_priority for p in urgent_priorities):
        raise ValueError("urgent_priorities must be more urgent than routine_priority")

    rng = np.random.default_rng(seed)

    arrival_times = [0.0] * n_routine
    priorities = [routine_priority] * n_routine

    gaps = rng.exponential(1 / urgent_rate, size=n_urgent)
    arrival_times.extend(0.5 + np.cumsum(gaps) - gaps[0])
    priorities.extend(rng.choice(np.asarray(urgent_priorities), size=n_urgent))

    return _sorted_workload(
        arrival_times,
        priorities,
        f"Urgent Surge: {n_routine} routine + {n_urgent} urgent @ {urgent_rate}/s",
    )


def generate_mass_casualty(
    n_background: int = 80,
    background_rate: float = 0.5,
    casualty_time: float = 40.0,
    n_casualties: int = 25,
    casualty_window: float = 5.0,
    seed: Optional[int] = None,
) -> Workload:
    """
    Scenario 3: Mass Casualty.

    A burst of priority-1/2 casualties lands on top of steady background
    traffic. Casualties should be seen quickly; background patients queued
    before the burst should still be bounded by the wait threshold.

    Args:
        n_background: Background patients (priorities 3-5)
        background_rate: Background arrivals per second
        casualty_time: Start of the casualty burst (seconds)
        n_casualties: Patients in the burst
        casualty_window: Burst duration (seconds)
        seed: RNG seed

    Returns:
        Workload with n_background + n_casualties patients
    """
    if n_background <= 0 or n_casualties <= 0:
        raise ValueError("n_background and n_casualties must be positive")
    if casualty_window <= 0:
        raise ValueError(f"casualty_window must be positive, got {casualty_window}")

    rng = np.random.default_rng(seed)

    gaps = rng.exponential(1 / background_rate, size=n_background)
    background_times = np.cumsum(gaps) - gaps[0]
    background_priorities = rng.integers(3, 6, size=n_background)

    casualty_times = casualty_time + rng.uniform(0.0, casualty_window, size=n_casualties)
    casualty_priorities = rng.choice([1, 2], size=n_casualties, p=[0.6, 0.4])

    return _sorted_workload(
        np.concatenate([background_times, casualty_times]),
        np.concatenate([background_priorities, casualty_priorities]),
        f"Mass Casualty: {n_casualties} casualties @ t≈{casualty_time}s "
        f"over {n_background} background patients",
    )
