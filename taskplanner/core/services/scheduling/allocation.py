from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from taskplanner.core.domain.enums import WarningSeverity, WarningType
from taskplanner.core.domain.task import TaskSchedule
from taskplanner.core.services.scheduling.models import (
    SchedulingOptions,
    SchedulingWarning,
    TaskNode,
)
from taskplanner.core.services.scheduling.passes import duration_in_work_days
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)

CRITICAL_BUFFER_FACTOR = 0.5


def buffer_days_for(work_days: int, buffer_ratio: float, is_critical: bool) -> int:
    factor = CRITICAL_BUFFER_FACTOR if is_critical else 1.0
    return math.ceil(work_days * buffer_ratio * factor)


def occupied_work_days(
    schedules: Iterable[TaskSchedule],
    calendar: WorkCalendarEngine,
) -> set[date]:
    occupied: set[date] = set()
    for schedule in schedules:
        occupied.update(calendar.iter_work_days(schedule.start_date, schedule.due_date))
    return occupied


def find_earlier_start_date(
    existing_schedules: Sequence[TaskSchedule],
    required_days: int,
    options: SchedulingOptions,
    calendar: WorkCalendarEngine,
) -> Optional[date]:
    """
    First run of ``required_days`` consecutive free work days, scanning from
    the project start up to (not including) the project end. Returns the
    run's first day, or None when no such run exists.
    """
    occupied = occupied_work_days(existing_schedules, calendar)
    consecutive = 0
    run_start: Optional[date] = None
    current = options.project_start_date

    while current < options.project_end_date:
        # non-work days neither extend nor break a run
        if calendar.is_work_day(current):
            if current in occupied:
                consecutive = 0
                run_start = None
            else:
                if consecutive == 0:
                    run_start = current
                consecutive += 1
                if consecutive >= required_days:
                    return run_start
        current += timedelta(days=1)

    return None


def _impossible_deadline_message(
    title: str,
    start_date: date,
    due_date: date,
    latest_dep_due: Optional[date],
    options: SchedulingOptions,
) -> str:
    if due_date < options.project_start_date:
        # no work day inside the window; dates fall back before it
        return (
            f"Task '{title}' cannot be scheduled: the project window contains no work days "
            f"(placed on {due_date.isoformat()}, before the project start)."
        )
    if latest_dep_due is not None and start_date <= latest_dep_due:
        return (
            f"Task '{title}' cannot be completed before the project end date; "
            "it was overlapped with its dependencies."
        )
    return f"Task '{title}' cannot be completed before the project end date."


def allocate_tasks(
    topo_order: Sequence[TaskNode],
    critical_path: Iterable[str],
    options: SchedulingOptions,
    calendar: WorkCalendarEngine,
) -> tuple[List[TaskSchedule], List[SchedulingWarning]]:
    """
    Assign concrete dates in topological order.

    Tasks that overflow the project end first lose buffer, then (independent,
    non-critical tasks only) try a free slot, and are finally clamped to the
    last work day of the window with an ``impossible_deadline`` warning.
    """
    critical = set(critical_path)
    schedules: List[TaskSchedule] = []
    warnings: List[SchedulingWarning] = []
    due_by_id: Dict[str, date] = {}
    project_end = options.project_end_date
    first_work_day = calendar.next_work_day(options.project_start_date)

    for node in topo_order:
        task = node.task
        is_critical = task.id in critical

        latest_dep_due: Optional[date] = None
        if task.dependencies:
            latest_dep_due = max(due_by_id[dep_id] for dep_id in task.dependencies)
            start_date = calendar.add_work_days(latest_dep_due, 1)
        else:
            start_date = first_work_day

        work_days = duration_in_work_days(task.estimated_hours, options.working_hours_per_day)
        buffer_days = buffer_days_for(work_days, options.buffer_ratio, is_critical)
        due_date = calendar.add_work_days(start_date, work_days + buffer_days)

        if due_date > project_end:
            overflow = calendar.calculate_work_days(project_end + timedelta(days=1), due_date)
            logger.debug(
                "Task %s overflows project end %s by %s work day(s)",
                task.id,
                project_end,
                overflow,
            )

            if buffer_days > 0:
                reduced_buffer = max(0, buffer_days - overflow)
                due_date = calendar.add_work_days(start_date, work_days + reduced_buffer)
                if reduced_buffer == 0:
                    warnings.append(
                        SchedulingWarning(
                            type=WarningType.TIGHT_SCHEDULE,
                            task_id=task.id,
                            message=f"Buffer for task '{task.title}' was removed entirely.",
                            severity=WarningSeverity.HIGH,
                        )
                    )
                buffer_days = reduced_buffer

            if due_date > project_end and not is_critical and not task.dependencies:
                slot = find_earlier_start_date(schedules, work_days, options, calendar)
                if slot is not None:
                    logger.debug("Task %s re-anchored to free slot starting %s", task.id, slot)
                    start_date = slot
                    buffer_days = 0
                    due_date = calendar.add_work_days(start_date, work_days)

            if due_date > project_end:
                due_date = calendar.previous_work_day(project_end)
                if start_date > due_date:
                    start_date = due_date
                logger.warning(
                    "Task %s cannot finish before %s; due date clamped to %s",
                    task.id,
                    project_end,
                    due_date,
                )
                warnings.append(
                    SchedulingWarning(
                        type=WarningType.IMPOSSIBLE_DEADLINE,
                        task_id=task.id,
                        message=_impossible_deadline_message(
                            task.title, start_date, due_date, latest_dep_due, options
                        ),
                        severity=WarningSeverity.CRITICAL,
                    )
                )

        schedules.append(
            TaskSchedule(
                task_id=task.id,
                title=task.title,
                start_date=start_date,
                due_date=due_date,
                estimated_hours=task.estimated_hours,
                dependencies=task.dependencies,
                assignee=task.assignee,
                buffer_days=buffer_days,
                is_critical_path=is_critical,
            )
        )
        due_by_id[task.id] = due_date

    return schedules, warnings


__all__ = [
    "CRITICAL_BUFFER_FACTOR",
    "buffer_days_for",
    "occupied_work_days",
    "find_earlier_start_date",
    "allocate_tasks",
]
