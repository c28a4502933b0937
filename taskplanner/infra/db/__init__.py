from taskplanner.infra.db.base import Base, create_session_factory
from taskplanner.infra.db.repositories import SqlAlchemyHolidayRepository, SqlAlchemyTaskRepository

__all__ = [
    "Base",
    "create_session_factory",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyHolidayRepository",
]
