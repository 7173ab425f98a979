"""
Strict Priority Scheduler (baseline for triage evaluation).

Medical priority only - demonstrates the starvation problem that the
triage wait threshold solves.
"""

import heapq
from typing import List, Optional, Tuple

from patient_triage import Scheduler


class StrictPriorityScheduler(Scheduler):
    """
    Strict priority queueing on medical priority.

    Scheduling policy:
        - Always serve the most urgent patient (1 > 2 > ...)
        - FIFO among equal priorities
        - Low-priority patients starve under sustained urgent load

    Example:
        >>> scheduler = StrictPriorityScheduler(service_rate=1.0)
        >>> result = scheduler.schedule(
        ...     arrival_times=[0.0, 0.0],
        ...     priorities=[5, 1],
        ... )
        >>> result.service_order
        [1, 0]
    """

    name = "Strict"

    def __init__(
        self,
        service_rate: float = 1.0,
        service_variance: bool = True,
        scheduler_seed: Optional[int] = None,
    ):
        super().__init__(service_rate, service_variance, scheduler_seed)
        self._heap: List[Tuple[int, int]] = []  # (priority, idx)
        self._priorities: List[int] = []

    def _reset(self, arrival_times: List[float], priorities: List[int]) -> None:
        self._heap = []
        self._priorities = list(priorities)

    def _admit(self, idx: int, arrival_time: float) -> None:
        # idx grows with arrival order, so it doubles as the FIFO tie-breaker
        heapq.heappush(self._heap, (self._priorities[idx], idx))

    def _pick(self, now: float) -> int:
        _, idx = heapq.heappop(self._heap)
        return idx

    def _metadata(self):
        return {"note": "Medical priority only (no wait threshold)"}

    def __repr__(self) -> str:
        return f"StrictPriorityScheduler(service_rate={self.service_rate})"
