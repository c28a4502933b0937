from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from taskplanner.core.domain.identifiers import sequential_task_id
from taskplanner.core.exceptions import ValidationError

DEFAULT_ESTIMATED_HOURS = 2.0


@dataclass(frozen=True)
class TaskInput:
    """One task to be scheduled; ``id`` is the only key dependencies may reference."""

    id: str
    title: str
    estimated_hours: float = DEFAULT_ESTIMATED_HOURS
    dependencies: tuple[str, ...] = ()
    assignee: Optional[str] = None

    def __post_init__(self) -> None:
        if self.estimated_hours is None:
            object.__setattr__(self, "estimated_hours", DEFAULT_ESTIMATED_HOURS)

    @staticmethod
    def create(
        id: str,
        title: str,
        estimated_hours: float | None = None,
        dependencies: Iterable[str] | None = None,
        assignee: str | None = None,
    ) -> "TaskInput":
        hours = DEFAULT_ESTIMATED_HOURS if estimated_hours is None else float(estimated_hours)
        if hours <= 0:
            raise ValidationError(
                f"Task '{id}' must have a positive estimate (got {hours}).",
                code="SCHEDULE_INVALID_ESTIMATE",
            )
        deps: list[str] = []
        for dep in dependencies or ():
            if dep not in deps:
                deps.append(dep)
        return TaskInput(
            id=str(id),
            title=title,
            estimated_hours=hours,
            dependencies=tuple(deps),
            assignee=assignee,
        )


@dataclass(frozen=True)
class TaskSchedule:
    task_id: str
    title: str
    start_date: date
    due_date: date
    estimated_hours: float
    dependencies: tuple[str, ...]
    assignee: Optional[str]
    buffer_days: int
    is_critical_path: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "title": self.title,
            "startDate": self.start_date.isoformat(),
            "dueDate": self.due_date.isoformat(),
            "estimatedHours": self.estimated_hours,
            "dependencies": list(self.dependencies),
            "assignee": self.assignee,
            "bufferDays": self.buffer_days,
            "isCriticalPath": self.is_critical_path,
        }


def task_inputs_from_records(records: Iterable[Mapping[str, Any]]) -> list[TaskInput]:
    """
    Build TaskInputs from loose mapping records (API payloads, JSON files).

    - ``estimatedHours`` / ``estimated_hours`` missing -> 2 hours
    - ``dependencies`` missing -> no dependencies
    - ``id`` missing -> positional ``task_<n>``, or the next free ``task_<n>``
      when a record already uses it; titles are never used as ids
    """
    records = list(records)
    taken = {str(r.get("id")) for r in records if r.get("id") not in (None, "")}
    tasks: list[TaskInput] = []
    for index, record in enumerate(records):
        raw_id = record.get("id")
        if raw_id not in (None, ""):
            task_id = str(raw_id)
        else:
            # skip positional ids the caller already uses
            offset = index
            task_id = sequential_task_id(offset)
            while task_id in taken:
                offset += 1
                task_id = sequential_task_id(offset)
            taken.add(task_id)
        hours = record.get("estimatedHours", record.get("estimated_hours"))
        deps = record.get("dependencies") or ()
        if isinstance(deps, str):
            deps = [d.strip() for d in deps.split(",") if d.strip()]
        tasks.append(
            TaskInput.create(
                id=task_id,
                title=str(record.get("title") or task_id),
                estimated_hours=hours,
                dependencies=[str(d) for d in deps],
                assignee=record.get("assignee"),
            )
        )
    return tasks


__all__ = ["DEFAULT_ESTIMATED_HOURS", "TaskInput", "TaskSchedule", "task_inputs_from_records"]
