"""
Tests for baseline schedulers (Strict Priority and FIFO).

Verifies that baselines behave correctly and demonstrate the problems
that the triage wait threshold solves.
"""

import numpy as np
import pytest

from assessment.baselines import FIFOScheduler, StrictPriorityScheduler
from assessment.workloads import generate_urgent_surge
from patient_triage import TriageConfig, TriageSimulator


# === Strict Priority Scheduler Tests ===


def test_strict_priority_basic():
    """Strict priority serves the most urgent patient first."""
    scheduler = StrictPriorityScheduler(service_variance=False)

    result = scheduler.schedule(arrival_times=[0.0, 0.0, 0.0], priorities=[2, 3, 1])

    assert result.service_order == [2, 0, 1]
    np.testing.assert_allclose(result.waiting_times, [1.0, 2.0, 0.0])
    assert result.metadata["scheduler"] == "Strict"


def test_strict_priority_fifo_within_level():
    """Equal priorities are served in arrival order."""
    scheduler = StrictPriorityScheduler(service_variance=False)

    result = scheduler.schedule(
        arrival_times=[0.0, 0.1, 0.2, 0.3], priorities=[1, 2, 2, 2]
    )

    assert result.service_order == [0, 1, 2, 3]


def test_strict_priority_starves_routine_patients():
    """Sustained urgent arrivals push routine patients back indefinitely."""
    arrival_times = [0.0, 0.0] + [0.5 * k for k in range(1, 21)]
    priorities = [5, 1] + [1] * 20
    scheduler = StrictPriorityScheduler(service_variance=False)

    result = scheduler.schedule(arrival_times, priorities)

    # Routine patient is served last, after every urgent one
    assert result.service_order[-1] == 0
    assert result.waiting_times[0] > 10.0


# === FIFO Scheduler Tests ===


def test_fifo_ignores_priority():
    """FIFO serves in arrival order regardless of priority."""
    scheduler = FIFOScheduler(service_variance=False)

    result = scheduler.schedule(arrival_times=[0.0, 0.1, 0.2], priorities=[5, 1, 2])

    assert result.service_order == [0, 1, 2]
    assert result.metadata["scheduler"] == "FIFO"


def test_fifo_deterministic_waits():
    scheduler = FIFOScheduler(service_rate=2.0, service_variance=False)

    result = scheduler.schedule(arrival_times=[0.0, 0.0, 0.0], priorities=[1, 1, 1])

    np.testing.assert_allclose(result.waiting_times, [0.0, 0.5, 1.0])
    np.testing.assert_allclose(result.e2e_times, [0.5, 1.0, 1.5])


# === Shared Behavior ===


@pytest.mark.parametrize("scheduler_cls", [FIFOScheduler, StrictPriorityScheduler])
def test_baseline_rejects_invalid_service_rate(scheduler_cls):
    with pytest.raises(ValueError, match="service_rate must be positive"):
        scheduler_cls(service_rate=0.0)


@pytest.mark.parametrize("scheduler_cls", [FIFOScheduler, StrictPriorityScheduler])
def test_baseline_reproducible_with_seed(scheduler_cls):
    arrival_times = [0.0, 0.3, 0.6, 0.9, 1.2]
    priorities = [2, 1, 3, 1, 2]

    first = scheduler_cls(scheduler_seed=5).schedule(arrival_times, priorities)
    second = scheduler_cls(scheduler_seed=5).schedule(arrival_times, priorities)

    np.testing.assert_array_equal(first.waiting_times, second.waiting_times)
    assert repr(scheduler_cls())


def test_triage_bounds_routine_wait_that_strict_does_not():
    """
    Urgent surge: triage serves routine patients once they hit max_wait.

    With deterministic unit service and the server never idle, every routine
    patient is served by t = max_wait + n_routine - 1.
    """
    workload = generate_urgent_surge(n_routine=5, n_urgent=60, urgent_rate=3.0, seed=3)
    config = TriageConfig(max_wait=10.0, service_variance=False)

    triage = TriageSimulator(config).schedule(workload.arrival_times, workload.priorities)
    strict = StrictPriorityScheduler(service_variance=False).schedule(
        workload.arrival_times, workload.priorities
    )

    triage_routine = triage.max_waiting_time(priority=5)
    strict_routine = strict.max_waiting_time(priority=5)

    assert triage_routine <= 13.0 + 1e-9
    assert strict_routine > triage_routine
    assert triage.metadata["wait_serves"] >= 1
