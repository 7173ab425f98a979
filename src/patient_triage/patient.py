"""
Entries handled by the triage scheduler.

Priorities are positive integers; 1 is the most urgent.
"""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Optional

from .locator import AttributeLocator
from .ordering import Comparator, by_key, compare_values


@dataclass(eq=False)
class Patient:
    """
    Patient waiting to be seen.

    Attributes:
        patient_id: Identifier shown in logs and results
        priority: Medical priority (1 = most urgent)
    """

    patient_id: str
    priority: int

    def __post_init__(self):
        if self.priority < 1:
            raise ValueError(f"priority must be >= 1, got {self.priority}")


@dataclass(eq=False)
class Ticket:
    """
    Scheduler-side wrapper around one admitted entry.

    Holds one position slot per heap so that the priority heap and the
    arrival heap never overwrite each other's bookkeeping.
    """

    entry: Any
    arrival_time: Any
    sequence: int
    priority_position: Optional[int] = field(default=None, repr=False)
    time_position: Optional[int] = field(default=None, repr=False)


priority_order: Comparator = by_key(attrgetter("priority"))

PRIORITY_LOCATOR = AttributeLocator("priority_position")
TIME_LOCATOR = AttributeLocator("time_position")


def ticket_priority_order(entry_order: Comparator) -> Comparator:
    """
    Lift a comparator over entries to one over tickets.

    Entries the comparator considers equal are ordered by admission, so
    equal-priority patients are seen first come, first served.
    """

    def compare(a: Ticket, b: Ticket) -> int:
        return entry_order(a.entry, b.entry) or compare_values(a.sequence, b.sequence)

    return compare


def ticket_arrival_order(a: Ticket, b: Ticket) -> int:
    """Earlier arrival first; admission sequence breaks ties (FIFO)."""
    return compare_values((a.arrival_time, a.sequence), (b.arrival_time, b.sequence))
