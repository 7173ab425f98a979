"""
Patient triage over location-aware priority queues.

Dual-heap scheduler that serves patients by medical priority, switching to
arrival order for anyone who has waited longer than a threshold.

Main components:
    - AdaptablePriorityQueue: Min-heap with O(log n) removal at a known position
    - PatientTriage: Two synchronized heaps (priority, arrival) over shared entries
    - TriageConfig: Configuration dataclass with threshold and service parameters
    - TriageSimulator: Discrete-event single-server simulation of the policy
    - SortedIntegerArray: Two-pointer pair-sum check

Serve policy:
    1. Longest-waiting patient waited >= max_wait → served first
    2. Otherwise → most urgent patient (priority 1 = most urgent)

Example:
    >>> from patient_triage import Patient, PatientTriage
    >>> triage = PatientTriage(max_wait=10)
    >>> triage.add(Patient("P1", priority=5), arrival_time=0)
    >>> triage.add(Patient("P2", priority=1), arrival_time=1)
    >>> triage.serve_next(current_time=5).patient_id
    'P2'
"""

from .apq import AdaptablePriorityQueue
from .base import Scheduler
from .exceptions import (
    BoundaryViolationError,
    EmptyQueueError,
    InternalInconsistencyError,
    InvalidArgumentError,
    TriageError,
)
from .locator import AttributeLocator, Locator
from .ordering import Comparator, by_key, compare_values
from .pair_sum import SortedIntegerArray
from .patient import Patient, Ticket, priority_order
from .results import SchedulerResult
from .simulation import TriageSimulator
from .triage_config import TriageConfig, create_triage_custom, create_triage_default
from .triage_scheduler import PATH_PRIORITY, PATH_WAIT, PatientTriage

__all__ = [
    # Heap engine
    "AdaptablePriorityQueue",
    "AttributeLocator",
    "Locator",
    "Comparator",
    "by_key",
    "compare_values",
    # Scheduler
    "PatientTriage",
    "Patient",
    "Ticket",
    "priority_order",
    "PATH_PRIORITY",
    "PATH_WAIT",
    # Configuration
    "TriageConfig",
    "create_triage_default",
    "create_triage_custom",
    # Simulation
    "Scheduler",
    "TriageSimulator",
    "SchedulerResult",
    # Utilities
    "SortedIntegerArray",
    # Errors
    "TriageError",
    "InvalidArgumentError",
    "BoundaryViolationError",
    "EmptyQueueError",
    "InternalInconsistencyError",
]

__version__ = "1.0.0"
