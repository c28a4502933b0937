# tests/conftest.py
import logging
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from taskplanner.core.domain.task import TaskInput
from taskplanner.core.services.scheduling.engine import SchedulingEngine
from taskplanner.core.services.scheduling.models import SchedulingOptions
from taskplanner.core.services.scheduling.service import ProjectSchedulingService
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine
from taskplanner.infra.db.base import Base
from taskplanner.infra.db.repositories import (
    SqlAlchemyHolidayRepository,
    SqlAlchemyTaskRepository,
)
from taskplanner.core.services.scheduling.config import ENV_PREFIX

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)
FRIDAY = date(2024, 1, 5)
QUARTER_END = date(2024, 3, 29)


@pytest.fixture(autouse=True)
def _clean_scheduler_env(monkeypatch):
    for name in (
        "WORKING_HOURS_PER_DAY",
        "BUFFER_RATIO",
        "EXCLUDE_WEEKENDS",
        "EXCLUDE_HOLIDAYS",
        "PARALLEL_TASK_LIMIT",
        "TIGHT_SCHEDULE_THRESHOLD",
    ):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)


@pytest.fixture
def engine():
    return SchedulingEngine()


@pytest.fixture
def calendar():
    return WorkCalendarEngine()


@pytest.fixture
def make_options():
    def _make(start=MONDAY, end=QUARTER_END, **kwargs):
        return SchedulingOptions(project_start_date=start, project_end_date=end, **kwargs)

    return _make


@pytest.fixture
def make_task():
    def _make(task_id, hours=8, deps=(), title=None, assignee=None):
        return TaskInput.create(
            id=task_id,
            title=title or f"Task {task_id}",
            estimated_hours=hours,
            dependencies=deps,
            assignee=assignee,
        )

    return _make


@pytest.fixture
def session():
    # separate in-memory DB for tests
    db_engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    task_repo = SqlAlchemyTaskRepository(session)
    holiday_repo = SqlAlchemyHolidayRepository(session)
    scheduling_service = ProjectSchedulingService(session, task_repo, holiday_repo)

    return {
        "session": session,
        "task_repo": task_repo,
        "holiday_repo": holiday_repo,
        "scheduling_service": scheduling_service,
    }


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
