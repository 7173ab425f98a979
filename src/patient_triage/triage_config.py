"""
Configuration for the patient triage scheduler.

Defines the starvation threshold and the service parameters used when the
scheduler is driven by the discrete-event simulator.
"""

from dataclasses import dataclass


@dataclass
class TriageConfig:
    """
    Configuration for the dual-heap triage scheduler.

    Serve policy:
        - Longest-waiting patient has waited >= max_wait → served first
          (starvation path, arrival order)
        - Otherwise → most urgent patient (priority path)

    Service (simulation only):
        Exponential service times with mean 1/service_rate when
        service_variance is True, deterministic 1/service_rate otherwise.
    """

    # === Serve Policy ===
    max_wait: float = 10.0  # Wait (seconds) after which arrival order wins

    # === Service Configuration ===
    service_rate: float = 1.0  # μ: mean service rate (patients/second)
    service_variance: bool = True  # Exponential (True) or deterministic service

    # === Debugging ===
    check_invariants: bool = False  # Verify both heaps after every serve

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.max_wait is None:
            raise ValueError("max_wait must not be None")
        if self.max_wait < 0:
            raise ValueError(f"max_wait must be non-negative, got {self.max_wait}")

        if self.service_rate <= 0:
            raise ValueError(f"service_rate must be positive, got {self.service_rate}")


# Convenience factory functions


def create_triage_default() -> TriageConfig:
    """
    Create a triage configuration with default parameters.

    Defaults:
        - max_wait: 10 seconds
        - service_rate: 1 patient/second, exponential service

    Returns:
        TriageConfig with default parameters
    """
    return TriageConfig()


def create_triage_custom(
    max_wait: float = 10.0,
    service_rate: float = 1.0,
    service_variance: bool = True,
) -> TriageConfig:
    """
    Create a triage configuration with custom parameters.

    Args:
        max_wait: Wait after which the longest-waiting patient is served first
        service_rate: Mean service rate (patients/second)
        service_variance: Exponential (True) or deterministic service times

    Returns:
        TriageConfig with custom parameters
    """
    return TriageConfig(
        max_wait=max_wait,
        service_rate=service_rate,
        service_variance=service_variance,
    )
