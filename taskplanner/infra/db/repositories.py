# taskplanner/infra/db/repositories.py
from __future__ import annotations
from collections import defaultdict
from datetime import date
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskplanner.core.domain.calendar import HolidayCalendar
from taskplanner.core.domain.task import TaskInput, TaskSchedule
from taskplanner.core.exceptions import NotFoundError
from taskplanner.core.interfaces import HolidayRepository, TaskRepository
from taskplanner.infra.db.mappers import (
    apply_schedule_to_orm,
    holiday_from_orm,
    task_input_from_orm,
)
from taskplanner.infra.db.models import HolidayORM, TaskDependencyORM, TaskORM


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: TaskInput, project_id: str, position: int = 0) -> None:
        self.session.add(
            TaskORM(
                id=task.id,
                project_id=project_id,
                title=task.title,
                estimated_hours=task.estimated_hours,
                assignee=task.assignee,
                position=position,
            )
        )
        for dep_id in task.dependencies:
            self.session.add(
                TaskDependencyORM(predecessor_task_id=dep_id, successor_task_id=task.id)
            )

    def get(self, task_id: str) -> TaskORM | None:
        return self.session.get(TaskORM, task_id)

    def list_by_project(self, project_id: str) -> List[TaskInput]:
        stmt = (
            select(TaskORM)
            .where(TaskORM.project_id == project_id)
            .order_by(TaskORM.position, TaskORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        if not rows:
            return []

        task_ids = [row.id for row in rows]
        dep_stmt = (
            select(TaskDependencyORM)
            .where(TaskDependencyORM.successor_task_id.in_(task_ids))
            .order_by(TaskDependencyORM.id)
        )
        deps_by_successor: dict[str, list[str]] = defaultdict(list)
        for dep in self.session.execute(dep_stmt).scalars().all():
            deps_by_successor[dep.successor_task_id].append(dep.predecessor_task_id)

        return [task_input_from_orm(row, deps_by_successor.get(row.id, [])) for row in rows]

    def apply_schedules(self, schedules: Iterable[TaskSchedule]) -> None:
        for schedule in schedules:
            obj = self.session.get(TaskORM, schedule.task_id)
            if obj is None:
                raise NotFoundError(
                    f"Task '{schedule.task_id}' not found.",
                    code="TASK_NOT_FOUND",
                )
            apply_schedule_to_orm(obj, schedule)


class SqlAlchemyHolidayRepository(HolidayRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, day: date, name: str = "") -> None:
        self.session.add(HolidayORM(day=day, name=name.strip()))

    def calendar_between(self, start: date, end: date) -> HolidayCalendar:
        stmt = (
            select(HolidayORM)
            .where(HolidayORM.day >= start, HolidayORM.day <= end)
            .order_by(HolidayORM.day)
        )
        rows = self.session.execute(stmt).scalars().all()
        return HolidayCalendar.from_dates(holiday_from_orm(row) for row in rows)
