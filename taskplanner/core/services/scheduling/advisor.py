from __future__ import annotations

from typing import List, Sequence

from taskplanner.core.domain.enums import WarningSeverity
from taskplanner.core.domain.task import TaskSchedule
from taskplanner.core.services.scheduling.models import (
    SchedulingOptions,
    SchedulingWarning,
    UtilizationAssessment,
)

OVER_CAPACITY_SUGGESTIONS = (
    "Consider extending the project deadline.",
    "Consider running more tasks in parallel.",
    "Consider simplifying some of the tasks.",
)


def capacity_suggestions(utilization: UtilizationAssessment) -> List[str]:
    if utilization.raw_rate > 100:
        return list(OVER_CAPACITY_SUGGESTIONS)
    return []


def generate_optimization_suggestions(
    schedules: Sequence[TaskSchedule],
    options: SchedulingOptions,
) -> List[str]:
    suggestions: List[str] = []

    critical_count = sum(1 for s in schedules if s.is_critical_path)
    if critical_count:
        suggestions.append(
            f"Prioritize the {critical_count} task(s) on the critical path."
        )

    unbuffered = sum(1 for s in schedules if s.buffer_days == 0)
    if unbuffered:
        suggestions.append(
            f"{unbuffered} task(s) have no buffer; strengthen risk management for them."
        )

    independent = sum(1 for s in schedules if not s.dependencies)
    if independent > options.parallel_task_limit:
        suggestions.append(
            f"{independent} tasks have no dependencies; consider splitting them across the team."
        )

    return suggestions


def build_suggestions(
    schedules: Sequence[TaskSchedule],
    warnings: Sequence[SchedulingWarning],
    utilization: UtilizationAssessment,
    options: SchedulingOptions,
) -> List[str]:
    """Templated advice keyed off the accumulated warnings."""
    suggestions = capacity_suggestions(utilization)
    if any(w.severity in (WarningSeverity.HIGH, WarningSeverity.CRITICAL) for w in warnings):
        suggestions.extend(generate_optimization_suggestions(schedules, options))
    return suggestions


__all__ = [
    "OVER_CAPACITY_SUGGESTIONS",
    "capacity_suggestions",
    "generate_optimization_suggestions",
    "build_suggestions",
]
