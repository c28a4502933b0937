# taskplanner/core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List

from taskplanner.core.domain.calendar import HolidayCalendar
from taskplanner.core.domain.task import TaskInput, TaskSchedule


class TaskRepository(ABC):
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[TaskInput]: ...

    @abstractmethod
    def apply_schedules(self, schedules: Iterable[TaskSchedule]) -> None: ...


class HolidayRepository(ABC):
    @abstractmethod
    def calendar_between(self, start: date, end: date) -> HolidayCalendar: ...
