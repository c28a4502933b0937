# taskplanner/core/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class DuplicateTaskError(ValidationError):
    """Raised when two tasks in one scheduling run share an id."""

    def __init__(self, task_id: str):
        super().__init__(
            f"Task id '{task_id}' appears more than once.",
            code="SCHEDULE_DUPLICATE_TASK",
        )
        self.task_id = task_id


class MissingDependencyError(NotFoundError):
    """Raised when a task depends on an id that is not part of the task list."""

    def __init__(self, task_id: str, dependency_id: str):
        super().__init__(
            f"Task '{task_id}' depends on unknown task '{dependency_id}'.",
            code="SCHEDULE_MISSING_DEPENDENCY",
        )
        self.task_id = task_id
        self.dependency_id = dependency_id


class CyclicDependencyError(BusinessRuleError):
    """Raised when the dependency graph contains a cycle."""

    def __init__(self, task_id: str, cycle: list[str] | None = None):
        path = " -> ".join(cycle) if cycle else task_id
        super().__init__(
            f"Cannot schedule project: circular dependency detected at task '{task_id}' ({path}).",
            code="SCHEDULE_CYCLE",
        )
        self.task_id = task_id
        self.cycle = list(cycle or [task_id])
