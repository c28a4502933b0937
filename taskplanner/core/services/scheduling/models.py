from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from taskplanner.core.domain.calendar import HolidayCalendar
from taskplanner.core.domain.enums import WarningSeverity, WarningType
from taskplanner.core.domain.task import TaskInput, TaskSchedule
from taskplanner.core.exceptions import ValidationError


@dataclass(frozen=True)
class SchedulingOptions:
    project_start_date: date
    project_end_date: date
    working_hours_per_day: float = 8.0
    buffer_ratio: float = 0.2
    exclude_weekends: bool = True
    exclude_holidays: bool = True
    parallel_task_limit: int = 3
    tight_schedule_threshold: float = 0.8
    holidays: HolidayCalendar = field(default_factory=HolidayCalendar.empty)

    def validate(self) -> None:
        if self.project_end_date < self.project_start_date:
            raise ValidationError(
                "Project end date must not be before project start date "
                f"({self.project_start_date.isoformat()} > {self.project_end_date.isoformat()}).",
                code="SCHEDULE_INVALID_WINDOW",
            )
        if self.working_hours_per_day <= 0:
            raise ValidationError(
                "working_hours_per_day must be positive.",
                code="SCHEDULE_INVALID_OPTION",
            )
        if self.buffer_ratio < 0:
            raise ValidationError(
                "buffer_ratio must not be negative.",
                code="SCHEDULE_INVALID_OPTION",
            )
        if self.parallel_task_limit < 1:
            raise ValidationError(
                "parallel_task_limit must be at least 1.",
                code="SCHEDULE_INVALID_OPTION",
            )
        if self.tight_schedule_threshold <= 0:
            raise ValidationError(
                "tight_schedule_threshold must be positive.",
                code="SCHEDULE_INVALID_OPTION",
            )


@dataclass
class TaskNode:
    """Graph node: the task plus its declared predecessors and discovered successors."""

    task: TaskInput
    predecessors: list[str]
    successors: list[str] = field(default_factory=list)

    @property
    def task_id(self) -> str:
        return self.task.id


@dataclass(frozen=True)
class CPMTaskInfo:
    task_id: str
    duration_days: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int

    @property
    def slack(self) -> int:
        return self.latest_start - self.earliest_start

    @property
    def is_critical(self) -> bool:
        return self.slack == 0


@dataclass(frozen=True)
class CriticalPathAnalysis:
    project_duration: int
    tasks: dict[str, CPMTaskInfo]
    critical_path: tuple[str, ...]


@dataclass(frozen=True)
class SchedulingWarning:
    type: WarningType
    message: str
    severity: WarningSeverity
    task_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.task_id is not None:
            payload["taskId"] = self.task_id
        return payload


@dataclass(frozen=True)
class UtilizationAssessment:
    required_days: int
    available_work_days: int
    raw_rate: float
    warnings: tuple[SchedulingWarning, ...] = ()

    @property
    def utilization_rate(self) -> float:
        return max(0.0, min(100.0, self.raw_rate))


@dataclass(frozen=True)
class SchedulingResult:
    schedules: tuple[TaskSchedule, ...]
    total_duration: int
    critical_path: tuple[str, ...]
    utilization_rate: float
    warnings: tuple[SchedulingWarning, ...]
    suggestions: tuple[str, ...]

    def schedule_for(self, task_id: str) -> Optional[TaskSchedule]:
        for schedule in self.schedules:
            if schedule.task_id == task_id:
                return schedule
        return None

    def has_severity(self, *severities: WarningSeverity) -> bool:
        return any(w.severity in severities for w in self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schedules": [s.to_dict() for s in self.schedules],
            "totalDuration": self.total_duration,
            "criticalPath": list(self.critical_path),
            "utilizationRate": self.utilization_rate,
            "warnings": [w.to_dict() for w in self.warnings],
            "suggestions": list(self.suggestions),
        }


__all__ = [
    "SchedulingOptions",
    "TaskNode",
    "CPMTaskInfo",
    "CriticalPathAnalysis",
    "SchedulingWarning",
    "UtilizationAssessment",
    "SchedulingResult",
]
