"""
Order-based analysis for scheduler evaluation.

Compares arrival order with service order to show how each scheduler
reorders patients, independent of the service-time draw.
"""

import csv
from pathlib import Path
from typing import Dict, List

import numpy as np

from patient_triage import SchedulerResult


def compute_service_order(
    result: SchedulerResult,
    arrival_times: List[float]
) -> List[int]:
    """
    Service order of a run.

    Uses the order recorded by the scheduler when present, otherwise
    reconstructs it by sorting patients on service start time.

    Returns:
        List of patient indices in service order
        - service_order[0] = patient index served first
        - service_order[1] = patient index served second
    """
    if result.service_order:
        return list(result.service_order)

    n = len(arrival_times)
    service_start_times = [arrival_times[i] + result.waiting_times[i] for i in range(n)]
    return sorted(range(n), key=lambda i: service_start_times[i])


def count_priority_inversions(
    service_order: List[int],
    arrival_times: List[float],
    priorities: List[int],
    waiting_times: np.ndarray,
) -> int:
    """
    Count serves that skipped a more urgent waiting patient.

    An inversion occurs when a patient starts service while a strictly more
    urgent patient has already arrived and is still waiting. Strict priority
    scores 0; the triage policy inverts only on its wait path.

    Returns:
        Number of inversions
    """
    inversions = 0
    pending = set(range(len(service_order)))

    for job_idx in service_order:
        pending.discard(job_idx)
        start = arrival_times[job_idx] + waiting_times[job_idx]
        if any(
            priorities[other] < priorities[job_idx] and arrival_times[other] <= start
            for other in pending
        ):
            inversions += 1

    return inversions


def compute_order_metrics(
    result: SchedulerResult,
    arrival_times: List[float],
) -> Dict[str, float]:
    """
    Compute order-based metrics.

    Metrics:
        - mean_rank_displacement: Mean |service rank - arrival rank|
        - max_rank_displacement: Largest |service rank - arrival rank|
        - priority_inversions: See count_priority_inversions (needs priorities)

    Returns:
        Dictionary with order metrics
    """
    service_order = compute_service_order(result, arrival_times)
    if not service_order:
        return {"mean_rank_displacement": 0.0, "max_rank_displacement": 0.0}

    displacement = np.abs(np.arange(len(service_order)) - np.asarray(service_order))
    metrics = {
        "mean_rank_displacement": float(np.mean(displacement)),
        "max_rank_displacement": float(np.max(displacement)),
    }

    if result.priorities is not None:
        metrics["priority_inversions"] = count_priority_inversions(
            service_order, arrival_times, result.priorities, result.waiting_times
        )

    return metrics


def export_service_order(
    result: SchedulerResult,
    arrival_times: List[float],
    scheduler_name: str,
    scenario_name: str,
    output_dir: str = "results"
) -> str:
    """
    Export service order to CSV.

    Creates: {output_dir}/{scenario_name}/{scheduler_name}_service_order.csv

    CSV format:
        service_rank,patient_id,priority,arrival_time,start_time,waiting_time,position_jump
        0,patient_0,3,0.000000,0.000000,0.000000,0

    Returns:
        Path to created CSV file
    """
    service_order = compute_service_order(result, arrival_times)

    rows = []
    for service_rank, job_idx in enumerate(service_order):
        wait = float(result.waiting_times[job_idx])
        rows.append({
            "service_rank": service_rank,
            "patient_id": f"patient_{job_idx}",
            "priority": result.priorities[job_idx] if result.priorities else -1,
            "arrival_time": f"{arrival_times[job_idx]:.6f}",
            "start_time": f"{arrival_times[job_idx] + wait:.6f}",
            "waiting_time": f"{wait:.6f}",
            "position_jump": service_rank - job_idx,
        })

    scenario_dir = Path(output_dir) / scenario_name
    scenario_dir.mkdir(parents=True, exist_ok=True)

    csv_path = scenario_dir / f"{scheduler_name.lower()}_service_order.csv"
    with open(csv_path, "w", newline="") as f:
        fieldnames = [
            "service_rank", "patient_id", "priority", "arrival_time",
            "start_time", "waiting_time", "position_jump",
        ]
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    return str(csv_path)
