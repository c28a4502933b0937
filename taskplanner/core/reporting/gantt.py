from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, List, Sequence

from taskplanner.core.domain.enums import GanttTaskType
from taskplanner.core.domain.task import TaskSchedule
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine


@dataclass(frozen=True)
class GanttRow:
    id: str
    text: str
    start_date: str
    end_date: str
    duration: int
    progress: float
    parent: int
    type: str
    buffer: int
    dependencies: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def format_for_gantt_chart(
    schedules: Sequence[TaskSchedule],
    calendar: WorkCalendarEngine | None = None,
) -> List[dict[str, Any]]:
    """
    Rows for an external Gantt widget. ``duration`` counts work days between
    start and due date inclusive; progress is always 0 at generation time.
    """
    calendar = calendar or WorkCalendarEngine()
    return [gantt_row(schedule, calendar).to_dict() for schedule in schedules]


def gantt_row(schedule: TaskSchedule, calendar: WorkCalendarEngine) -> GanttRow:
    task_type = GanttTaskType.CRITICAL if schedule.is_critical_path else GanttTaskType.NORMAL
    return GanttRow(
        id=schedule.task_id,
        text=schedule.title,
        start_date=schedule.start_date.isoformat(),
        end_date=schedule.due_date.isoformat(),
        duration=calendar.calculate_work_days(schedule.start_date, schedule.due_date),
        progress=0,
        parent=0,
        type=task_type.value,
        buffer=schedule.buffer_days,
        dependencies=",".join(schedule.dependencies),
    )


__all__ = ["GanttRow", "format_for_gantt_chart", "gantt_row"]
