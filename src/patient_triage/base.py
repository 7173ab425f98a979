"""
Abstract base class for single-server patient schedulers.

Runs the discrete-event loop shared by the triage simulator and the
evaluation baselines; subclasses only decide which waiting patient is seen
next.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import numpy as np

from .results import SchedulerResult

# Floating-point tolerance for time comparisons
TIME_TOLERANCE = 1e-12


class Scheduler(ABC):
    """
    Single-clinician discrete-event loop with a pluggable selection rule.

    Every scheduler sees the same workload (sorted arrival times plus a
    priority per patient, 1 = most urgent) and draws service times from its
    own RNG, so two schedulers seeded alike face identical service demand.

    Subclasses implement:
        - _reset: prepare empty queues for a run
        - _admit: queue one arrived patient
        - _pick: remove and return the index of the next patient to see
    """

    name = "base"

    def __init__(
        self,
        service_rate: float = 1.0,
        service_variance: bool = True,
        scheduler_seed: Optional[int] = None,
    ):
        """
        Args:
            service_rate: Patients seen per unit time (μ)
            service_variance: Exponential service with mean 1/μ when True,
                exactly 1/μ per patient when False
            scheduler_seed: Seed for the service-time RNG (None draws fresh
                entropy)
        """
        if service_rate <= 0:
            raise ValueError(f"service_rate must be positive, got {service_rate}")

        self.service_rate = service_rate
        self.service_variance = service_variance
        self.service_rng = np.random.default_rng(scheduler_seed)

    def schedule(
        self, arrival_times: List[float], priorities: List[int]
    ) -> SchedulerResult:
        """
        Run discrete-event simulation with given workload.

        Args:
            arrival_times: Sorted list of patient arrival times
            priorities: Medical priority for each patient (1 = most urgent)

        Returns:
            SchedulerResult with per-patient waiting and end-to-end times

        Raises:
            ValueError: If inputs are invalid
        """
        self._validate_inputs(arrival_times, priorities)
        self._reset(arrival_times, priorities)

        n = len(arrival_times)
        waiting_times = np.zeros(n)
        e2e_times = np.zeros(n)
        service_order: List[int] = []

        arrival_idx = 0  # Next arrival to process
        completed = 0
        current_end = float("inf")  # Completion time of the patient in service
        busy = False

        while completed < n:
            next_arrival = arrival_times[arrival_idx] if arrival_idx < n else float("inf")
            now = min(next_arrival, current_end)

            # Admit everyone arriving now
            while arrival_idx < n and arrival_times[arrival_idx] <= now + TIME_TOLERANCE:
                self._admit(arrival_idx, arrival_times[arrival_idx])
                arrival_idx += 1

            # Completion frees the server
            if busy and current_end <= now + TIME_TOLERANCE:
                completed += 1
                busy = False
                current_end = float("inf")

            # Start the next patient if anyone is waiting
            if not busy and len(service_order) < arrival_idx:
                idx = self._pick(now)
                service_order.append(idx)

                waiting_times[idx] = now - arrival_times[idx]
                service_time = self._generate_service_time()
                e2e_times[idx] = waiting_times[idx] + service_time

                busy = True
                current_end = now + service_time

        return SchedulerResult(
            waiting_times=waiting_times,
            e2e_times=e2e_times,
            priorities=list(priorities),
            service_order=service_order,
            metadata={
                "scheduler": self.name,
                "service_rate": self.service_rate,
                "service_variance": self.service_variance,
                **self._metadata(),
            },
        )

    @abstractmethod
    def _reset(self, arrival_times: List[float], priorities: List[int]) -> None:
        """Prepare empty queues for a new run."""
        ...

    @abstractmethod
    def _admit(self, idx: int, arrival_time: float) -> None:
        """Queue the patient with index idx."""
        ...

    @abstractmethod
    def _pick(self, now: float) -> int:
        """Remove and return the index of the next patient to see."""
        ...

    def _metadata(self) -> Dict:
        """Scheduler-specific result metadata."""
        return {}

    def _generate_service_time(self) -> float:
        """Draw one service time from this scheduler's RNG stream."""
        mean = 1 / self.service_rate
        if not self.service_variance:
            return mean
        return float(self.service_rng.exponential(mean))

    @staticmethod
    def _validate_inputs(arrival_times: List[float], priorities: List[int]) -> None:
        """
        Raises:
            ValueError: On mismatched lengths, an empty workload, unsorted
                arrivals or a priority below 1
        """
        n = len(arrival_times)
        if n != len(priorities):
            raise ValueError(
                f"{n} arrival times and {len(priorities)} priorities: "
                f"inputs must have same length"
            )
        if n == 0:
            raise ValueError("Must have at least one patient")
        if any(later < earlier for earlier, later in zip(arrival_times, arrival_times[1:])):
            raise ValueError("arrival_times must be sorted")
        if min(priorities) < 1:
            raise ValueError(f"All priorities must be >= 1, got {min(priorities)}")
