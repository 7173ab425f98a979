"""
Workload generators for triage evaluation.

Provides scenarios for testing triage performance characteristics:
- Steady Arrivals: Mixed priorities below capacity
- Urgent Surge: Starvation of routine patients under urgent load
- Mass Casualty: Critical burst over background traffic
"""

from .scenarios import (
    Workload,
    generate_mass_casualty,
    generate_steady_arrivals,
    generate_urgent_surge,
)

__all__ = [
    "Workload",
    "generate_steady_arrivals",
    "generate_urgent_surge",
    "generate_mass_casualty",
]
