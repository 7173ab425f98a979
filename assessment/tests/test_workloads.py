"""
Tests for workload generators.

Verifies that generated workloads have the shape each evaluation scenario
describes.
"""

import pytest

from assessment.workloads import (
    Workload,
    generate_mass_casualty,
    generate_steady_arrivals,
    generate_urgent_surge,
)


# === Workload Data Structure Tests ===


def test_workload_creation():
    """Workload can be created with valid data."""
    workload = Workload(
        arrival_times=[0.0, 0.1, 0.2],
        priorities=[1, 3, 3],
        description="Test workload",
    )

    assert workload.n_patients == 3
    assert workload.count_priority(3) == 2
    assert workload.duration == 0.2


def test_workload_validation():
    """Workload validates input consistency."""
    with pytest.raises(ValueError, match="priorities length"):
        Workload(arrival_times=[0.0, 0.1], priorities=[1])

    with pytest.raises(ValueError, match="arrival_times must be sorted"):
        Workload(arrival_times=[0.2, 0.1], priorities=[1, 1])

    with pytest.raises(ValueError, match="priorities must be >= 1"):
        Workload(arrival_times=[0.0], priorities=[0])


def test_empty_workload_duration():
    assert Workload(arrival_times=[], priorities=[]).duration == 0.0


# === Scenario 1: Steady Arrivals ===


def test_steady_arrivals_shape():
    workload = generate_steady_arrivals(n_patients=50, seed=1)

    assert workload.n_patients == 50
    assert workload.arrival_times[0] == 0.0
    assert workload.arrival_times == sorted(workload.arrival_times)
    assert set(workload.priorities) <= {1, 2, 3, 4, 5}
    assert "Steady Arrivals" in workload.description


def test_steady_arrivals_reproducible():
    first = generate_steady_arrivals(n_patients=30, seed=42)
    second = generate_steady_arrivals(n_patients=30, seed=42)

    assert first.arrival_times == second.arrival_times
    assert first.priorities == second.priorities


def test_steady_arrivals_custom_weights():
    """All weight on one level yields a single-priority workload."""
    workload = generate_steady_arrivals(n_patients=20, priority_weights=(0, 0, 1), seed=0)

    assert workload.count_priority(3) == 20


def test_steady_arrivals_validation():
    with pytest.raises(ValueError, match="n_patients must be positive"):
        generate_steady_arrivals(n_patients=0)
    with pytest.raises(ValueError, match="arrival_rate must be positive"):
        generate_steady_arrivals(arrival_rate=0.0)


# === Scenario 2: Urgent Surge ===


def test_urgent_surge_shape():
    """Routine patients wait at t=0; urgent ones start arriving at t=0.5."""
    workload = generate_urgent_surge(n_routine=4, n_urgent=30, seed=7)

    assert workload.n_patients == 34
    assert workload.count_priority(5) == 4
    assert workload.arrival_times[:4] == [0.0] * 4
    assert workload.priorities[:4] == [5] * 4
    assert workload.arrival_times[4] == pytest.approx(0.5)
    assert set(workload.priorities[4:]) <= {1, 2}


def test_urgent_surge_validation():
    with pytest.raises(ValueError, match="more urgent than routine_priority"):
        generate_urgent_surge(routine_priority=2, urgent_priorities=(1, 2))
    with pytest.raises(ValueError, match="must be positive"):
        generate_urgent_surge(n_urgent=0)


# === Scenario 3: Mass Casualty ===


def test_mass_casualty_shape():
    workload = generate_mass_casualty(
        n_background=40, casualty_time=20.0, n_casualties=10, casualty_window=2.0, seed=3
    )

    assert workload.n_patients == 50
    casualties = [
        t for t, p in zip(workload.arrival_times, workload.priorities) if p <= 2
    ]
    assert len(casualties) == 10
    assert all(20.0 <= t < 22.0 for t in casualties)
    assert all(3 <= p <= 5 for p in workload.priorities if p > 2)
    assert workload.arrival_times == sorted(workload.arrival_times)


def test_mass_casualty_validation():
    with pytest.raises(ValueError, match="casualty_window must be positive"):
        generate_mass_casualty(casualty_window=0.0)
