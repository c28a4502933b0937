from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence

from taskplanner.core.domain.task import TaskInput
from taskplanner.core.services.scheduling.models import SchedulingResult

MAX_REDUCTION_RATIO = 0.2
MAX_REDUCTION_HOURS = 4.0


@dataclass(frozen=True)
class RelaxationPlan:
    adjusted_tasks: tuple[TaskInput, ...]
    new_end_date: Optional[date]
    adjustments: tuple[str, ...]


def relax_tight_schedule(
    tasks: Sequence[TaskInput],
    result: SchedulingResult,
    additional_days: int = 0,
) -> RelaxationPlan:
    """
    Trim each non-critical estimate by min(20%, 4h) and propose an end date
    ``additional_days`` calendar days after the latest scheduled due date.
    The input tasks are left untouched.
    """
    critical = set(result.critical_path)
    adjusted: List[TaskInput] = []
    adjustments: List[str] = []

    for task in tasks:
        if task.id in critical:
            adjusted.append(task)
            continue
        reduction = min(task.estimated_hours * MAX_REDUCTION_RATIO, MAX_REDUCTION_HOURS)
        if reduction > 0:
            task = dataclasses.replace(task, estimated_hours=task.estimated_hours - reduction)
            adjustments.append(f"Reduced the estimate of '{task.title}' by {reduction:.1f} hours")
        adjusted.append(task)

    latest_due = max((s.due_date for s in result.schedules), default=None)
    new_end = latest_due + timedelta(days=additional_days) if latest_due is not None else None

    return RelaxationPlan(
        adjusted_tasks=tuple(adjusted),
        new_end_date=new_end,
        adjustments=tuple(adjustments),
    )


__all__ = ["MAX_REDUCTION_RATIO", "MAX_REDUCTION_HOURS", "RelaxationPlan", "relax_tight_schedule"]
