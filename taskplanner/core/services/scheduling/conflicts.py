from __future__ import annotations

import math
from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence

from taskplanner.core.domain.enums import WarningSeverity, WarningType
from taskplanner.core.domain.task import TaskInput, TaskSchedule
from taskplanner.core.services.scheduling.models import (
    SchedulingOptions,
    SchedulingWarning,
    UtilizationAssessment,
)
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine

# more overallocated days than this escalates the warning to high
OVERALLOCATION_HIGH_DAYS = 5


def build_daily_load(
    schedules: Sequence[TaskSchedule],
    calendar: WorkCalendarEngine,
) -> Dict[date, int]:
    load: Dict[date, int] = defaultdict(int)
    for schedule in schedules:
        for day in calendar.iter_work_days(schedule.start_date, schedule.due_date):
            load[day] += 1
    return dict(sorted(load.items()))


def overallocated_days(
    schedules: Sequence[TaskSchedule],
    parallel_task_limit: int,
    calendar: WorkCalendarEngine,
) -> List[date]:
    return [
        day
        for day, count in build_daily_load(schedules, calendar).items()
        if count > parallel_task_limit
    ]


def check_resource_conflicts(
    schedules: Sequence[TaskSchedule],
    options: SchedulingOptions,
    calendar: WorkCalendarEngine,
) -> List[SchedulingWarning]:
    days = overallocated_days(schedules, options.parallel_task_limit, calendar)
    if not days:
        return []
    severity = WarningSeverity.HIGH if len(days) > OVERALLOCATION_HIGH_DAYS else WarningSeverity.MEDIUM
    return [
        SchedulingWarning(
            type=WarningType.OVERALLOCATION,
            message=(
                f"Parallel task limit ({options.parallel_task_limit}) exceeded "
                f"on {len(days)} day(s), first on {days[0].isoformat()}."
            ),
            severity=severity,
        )
    ]


def assess_utilization(
    tasks: Sequence[TaskInput],
    options: SchedulingOptions,
    calendar: WorkCalendarEngine,
) -> UtilizationAssessment:
    """
    Compare required work days (total hours / hours per day, rounded up)
    against the work days available in the project window.
    """
    available = calendar.calculate_work_days(options.project_start_date, options.project_end_date)
    total_hours = sum(task.estimated_hours for task in tasks)
    required = math.ceil(total_hours / options.working_hours_per_day)

    if available > 0:
        raw_rate = required / available * 100
    else:
        raw_rate = math.inf if required > 0 else 0.0

    warnings: List[SchedulingWarning] = []
    if raw_rate > options.tight_schedule_threshold * 100:
        if available > 0:
            message = f"Schedule is very tight (utilization: {raw_rate:.1f}%)."
        else:
            message = "Schedule is very tight: the project window contains no work days."
        warnings.append(
            SchedulingWarning(
                type=WarningType.TIGHT_SCHEDULE,
                message=message,
                severity=WarningSeverity.CRITICAL if raw_rate > 100 else WarningSeverity.HIGH,
            )
        )

    return UtilizationAssessment(
        required_days=required,
        available_work_days=available,
        raw_rate=raw_rate,
        warnings=tuple(warnings),
    )


__all__ = [
    "OVERALLOCATION_HIGH_DAYS",
    "build_daily_load",
    "overallocated_days",
    "check_resource_conflicts",
    "assess_utilization",
]
