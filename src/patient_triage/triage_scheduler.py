"""
Dual-heap triage scheduler.

Patients are normally seen in priority order. Once the longest-waiting
patient has waited at least ``max_wait``, patients are seen in arrival
order instead until nobody is over the threshold.
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from .apq import AdaptablePriorityQueue
from .exceptions import (
    BoundaryViolationError,
    EmptyQueueError,
    InternalInconsistencyError,
    InvalidArgumentError,
)
from .ordering import Comparator
from .patient import (
    PRIORITY_LOCATOR,
    TIME_LOCATOR,
    Ticket,
    priority_order,
    ticket_arrival_order,
    ticket_priority_order,
)
from .triage_config import TriageConfig

logger = logging.getLogger(__name__)

# Serve paths
PATH_PRIORITY = "priority"
PATH_WAIT = "wait"


class PatientTriage:
    """
    Triage scheduler over two synchronized adaptable priority queues.

    Architecture:
        - priority heap: tickets ordered by the entry comparator, then admission
        - time heap: the same tickets ordered by (arrival_time, admission)
        - each ticket carries one position slot per heap, so an entry
          served from one heap is removed from the other in O(log n)

    Serve policy:
        1. Peek the longest-waiting entry
        2. If it waited >= max_wait → serve it (wait path)
        3. Otherwise → serve the most urgent entry (priority path)

    Times are duck-typed: ``current_time - arrival_time`` must yield a value
    comparable with ``max_wait`` (numbers in seconds, or datetimes with a
    timedelta threshold).

    Not thread-safe; callers sharing an instance must serialize access.

    Example:
        >>> triage = PatientTriage(max_wait=10)
        >>> triage.add(Patient("P1", priority=5), arrival_time=0)
        >>> triage.add(Patient("P2", priority=1), arrival_time=1)
        >>> triage.serve_next(current_time=11).patient_id
        'P1'
    """

    def __init__(
        self,
        max_wait: Any,
        priority_comparator: Optional[Comparator] = None,
        check_invariants: bool = False,
    ):
        """
        Args:
            max_wait: Wait after which arrival order overrides priority
            priority_comparator: Ordering over entries (default: by
                ``entry.priority``, lower first)
            check_invariants: Verify both heaps after every mutation
        """
        entry_order = priority_comparator if priority_comparator is not None else priority_order
        self._priority_heap: AdaptablePriorityQueue[Ticket] = AdaptablePriorityQueue(
            ticket_priority_order(entry_order), PRIORITY_LOCATOR
        )
        self._time_heap: AdaptablePriorityQueue[Ticket] = AdaptablePriorityQueue(
            ticket_arrival_order, TIME_LOCATOR
        )
        self._sequence = 0
        self.check_invariants = check_invariants

        self.priority_serves = 0
        self.wait_serves = 0
        self.last_path: Optional[str] = None

        self._max_wait = None
        self.set_max_wait(max_wait)

    @classmethod
    def from_config(
        cls, config: TriageConfig, priority_comparator: Optional[Comparator] = None
    ) -> "PatientTriage":
        """Build a scheduler from a TriageConfig."""
        return cls(
            max_wait=config.max_wait,
            priority_comparator=priority_comparator,
            check_invariants=config.check_invariants,
        )

    # === Public contract ===

    def add(self, entry: Any, arrival_time: Any) -> None:
        """
        Admit an entry into both heaps.

        Either both inserts take effect or neither does.

        Raises:
            InvalidArgumentError: If entry or arrival_time is None
        """
        if entry is None:
            raise InvalidArgumentError("entry must not be None")
        if arrival_time is None:
            raise InvalidArgumentError("arrival_time must not be None")

        ticket = Ticket(entry=entry, arrival_time=arrival_time, sequence=self._sequence)
        self._priority_heap.insert(ticket)
        try:
            self._time_heap.insert(ticket)
        except Exception:
            logger.warning(f"Rolling back admission of {entry!r}: time heap insert failed")
            self._priority_heap.remove_at(PRIORITY_LOCATOR.get_position(ticket))
            raise

        self._sequence += 1
        if self.check_invariants:
            self.check_consistency()

    def serve_next(self, current_time: Any) -> Any:
        """
        Remove and return the next entry to be seen.

        Raises:
            InvalidArgumentError: If current_time is None
            EmptyQueueError: If no entry is waiting
            InternalInconsistencyError: If the two heaps disagree
        """
        if current_time is None:
            raise InvalidArgumentError("current_time must not be None")
        if self._priority_heap.is_empty() or self._time_heap.is_empty():
            raise EmptyQueueError("no patients waiting")

        oldest = self._time_heap.peek_min()
        elapsed = current_time - oldest.arrival_time

        if elapsed >= self._max_wait:
            served = self._time_heap.extract_min()
            self._remove_mirror(self._priority_heap, served)
            self.wait_serves += 1
            self.last_path = PATH_WAIT
        else:
            served = self._priority_heap.extract_min()
            self._remove_mirror(self._time_heap, served)
            self.priority_serves += 1
            self.last_path = PATH_PRIORITY

        logger.debug(
            f"Served {served.entry!r} via {self.last_path} path "
            f"(oldest waited {elapsed}, max_wait {self._max_wait})"
        )

        if self.check_invariants:
            self.check_consistency()
        return served.entry

    def peek_next(self, current_time: Any) -> Optional[Any]:
        """Return the entry serve_next would return, without removing it."""
        if current_time is None:
            raise InvalidArgumentError("current_time must not be None")
        if self.is_empty():
            return None

        oldest = self._time_heap.peek_min()
        if current_time - oldest.arrival_time >= self._max_wait:
            return oldest.entry
        return self._priority_heap.peek_min().entry

    def get_max_wait(self) -> Any:
        return self._max_wait

    def set_max_wait(self, max_wait: Any) -> None:
        """
        Set the starvation threshold.

        Raises:
            InvalidArgumentError: If max_wait is None or negative
        """
        if max_wait is None:
            raise InvalidArgumentError("max_wait must not be None")
        zero = timedelta(0) if isinstance(max_wait, timedelta) else 0
        if max_wait < zero:
            raise InvalidArgumentError(f"max_wait must be non-negative, got {max_wait}")
        self._max_wait = max_wait

    max_wait = property(get_max_wait, set_max_wait)

    def size(self) -> int:
        return self._priority_heap.size()

    def is_empty(self) -> bool:
        return self._priority_heap.is_empty()

    def check_consistency(self) -> None:
        """
        Verify both heaps and that they hold the same tickets.

        Raises:
            InternalInconsistencyError: If any check fails
        """
        self._priority_heap.verify()
        self._time_heap.verify()

        if self._priority_heap.size() != self._time_heap.size():
            raise InternalInconsistencyError(
                f"priority heap holds {self._priority_heap.size()} entries, "
                f"time heap holds {self._time_heap.size()}"
            )
        if {id(t) for t in self._priority_heap} != {id(t) for t in self._time_heap}:
            raise InternalInconsistencyError("priority and time heaps hold different entries")

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return (
            f"PatientTriage(waiting={self.size()}, max_wait={self._max_wait}, "
            f"priority_serves={self.priority_serves}, wait_serves={self.wait_serves})"
        )

    # === Internals ===

    @staticmethod
    def _remove_mirror(heap: AdaptablePriorityQueue, ticket: Ticket) -> None:
        """Remove from ``heap`` the ticket just served from the other heap."""
        position = heap.locator.get_position(ticket)
        try:
            removed = heap.remove_at(position)
        except BoundaryViolationError as exc:
            raise InternalInconsistencyError(
                f"{ticket.entry!r} has stale position {position} in mirror heap"
            ) from exc

        if removed is not ticket:
            raise InternalInconsistencyError(
                f"mirror heap returned {removed.entry!r} instead of {ticket.entry!r}"
            )
