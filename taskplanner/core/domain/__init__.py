from taskplanner.core.domain.calendar import Holiday, HolidayCalendar
from taskplanner.core.domain.enums import GanttTaskType, WarningSeverity, WarningType
from taskplanner.core.domain.identifiers import sequential_task_id
from taskplanner.core.domain.task import (
    DEFAULT_ESTIMATED_HOURS,
    TaskInput,
    TaskSchedule,
    task_inputs_from_records,
)

__all__ = [
    "sequential_task_id",
    "WarningType",
    "WarningSeverity",
    "GanttTaskType",
    "Holiday",
    "HolidayCalendar",
    "DEFAULT_ESTIMATED_HOURS",
    "TaskInput",
    "TaskSchedule",
    "task_inputs_from_records",
]
