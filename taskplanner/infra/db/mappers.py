from __future__ import annotations

from typing import Iterable

from taskplanner.core.domain.calendar import Holiday
from taskplanner.core.domain.task import TaskInput, TaskSchedule
from taskplanner.infra.db.models import HolidayORM, TaskORM


def task_input_from_orm(obj: TaskORM, dependency_ids: Iterable[str]) -> TaskInput:
    return TaskInput.create(
        id=obj.id,
        title=obj.title,
        estimated_hours=obj.estimated_hours,
        dependencies=dependency_ids,
        assignee=obj.assignee,
    )


def apply_schedule_to_orm(obj: TaskORM, schedule: TaskSchedule) -> TaskORM:
    obj.start_date = schedule.start_date
    obj.due_date = schedule.due_date
    obj.buffer_days = schedule.buffer_days
    obj.is_critical = schedule.is_critical_path
    return obj


def holiday_from_orm(obj: HolidayORM) -> Holiday:
    return Holiday(date=obj.day, name=obj.name or "")


__all__ = ["task_input_from_orm", "apply_schedule_to_orm", "holiday_from_orm"]
