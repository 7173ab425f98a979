"""
Baseline schedulers for triage evaluation.

Provides comparison schedulers to demonstrate the dual-heap triage policy:
- StrictPriorityScheduler: Medical priority only (shows starvation)
- FIFOScheduler: No priority (lower bound baseline)
"""

from .fifo_scheduler import FIFOScheduler
from .strict_priority_scheduler import StrictPriorityScheduler

__all__ = [
    "StrictPriorityScheduler",
    "FIFOScheduler",
]
