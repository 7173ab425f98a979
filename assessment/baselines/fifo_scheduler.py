"""
FIFO Scheduler (lower bound baseline for triage evaluation).

Pure first-come-first-served with no priority - demonstrates what happens
when a critical patient queues behind routine ones.
"""

from collections import deque
from typing import Deque, List, Optional

from patient_triage import Scheduler


class FIFOScheduler(Scheduler):
    """
    First-In-First-Out scheduler.

    Scheduling policy:
        - Serve patients in strict arrival order
        - Ignores medical priority
        - Nobody starves, but urgency is never honoured

    Example:
        >>> scheduler = FIFOScheduler(service_rate=1.0)
        >>> result = scheduler.schedule(
        ...     arrival_times=[0.0, 0.1, 0.2],
        ...     priorities=[5, 1, 2],  # All ignored
        ... )
        >>> result.service_order
        [0, 1, 2]
    """

    name = "FIFO"

    def __init__(
        self,
        service_rate: float = 1.0,
        service_variance: bool = True,
        scheduler_seed: Optional[int] = None,
    ):
        super().__init__(service_rate, service_variance, scheduler_seed)
        self._queue: Deque[int] = deque()

    def _reset(self, arrival_times: List[float], priorities: List[int]) -> None:
        self._queue = deque()

    def _admit(self, idx: int, arrival_time: float) -> None:
        self._queue.append(idx)

    def _pick(self, now: float) -> int:
        return self._queue.popleft()

    def _metadata(self):
        return {"note": "Pure arrival order (priorities ignored)"}

    def __repr__(self) -> str:
        return f"FIFOScheduler(service_rate={self.service_rate})"
