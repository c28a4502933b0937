from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from taskplanner.core.events.domain_events import domain_events
from taskplanner.core.interfaces import HolidayRepository, TaskRepository
from taskplanner.core.services.scheduling.config import options_from_env
from taskplanner.core.services.scheduling.engine import SchedulingEngine
from taskplanner.core.services.scheduling.improvements import (
    ScheduleImprovementProvider,
    append_ai_improvements,
)
from taskplanner.core.services.scheduling.models import SchedulingResult

logger = logging.getLogger(__name__)


class ProjectSchedulingService:
    """
    Runs the engine against stored tasks and writes the computed dates back.
    The engine never touches storage; this service owns the transaction.
    """

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        holiday_repo: HolidayRepository | None = None,
        engine: SchedulingEngine | None = None,
        improvement_provider: ScheduleImprovementProvider | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._holiday_repo: HolidayRepository | None = holiday_repo
        self._engine: SchedulingEngine = engine or SchedulingEngine()
        self._improvement_provider: Optional[ScheduleImprovementProvider] = improvement_provider

    def reschedule_project(
        self,
        project_id: str,
        project_start_date: date,
        project_end_date: date,
        **option_overrides: Any,
    ) -> SchedulingResult:
        options = options_from_env(project_start_date, project_end_date, **option_overrides)
        if self._holiday_repo is not None:
            stored = self._holiday_repo.calendar_between(project_start_date, project_end_date)
            options = dataclasses.replace(options, holidays=options.holidays.merge(stored))

        tasks = self._task_repo.list_by_project(project_id)
        result = self._engine.generate_schedule(tasks, options)
        if self._improvement_provider is not None:
            result = append_ai_improvements(result, tasks, self._improvement_provider)

        try:
            self._task_repo.apply_schedules(result.schedules)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "Rescheduled project %s: %s task(s), %s warning(s)",
            project_id,
            len(result.schedules),
            len(result.warnings),
        )
        domain_events.schedule_changed.emit(project_id)
        return result


__all__ = ["ProjectSchedulingService"]
