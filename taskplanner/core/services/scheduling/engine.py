# taskplanner/core/services/scheduling/engine.py
from __future__ import annotations

import logging
from typing import Iterable

from taskplanner.core.domain.task import TaskInput
from taskplanner.core.services.scheduling.advisor import build_suggestions
from taskplanner.core.services.scheduling.allocation import allocate_tasks
from taskplanner.core.services.scheduling.conflicts import (
    assess_utilization,
    check_resource_conflicts,
)
from taskplanner.core.services.scheduling.graph import build_dependency_graph, topological_sort
from taskplanner.core.services.scheduling.models import SchedulingOptions, SchedulingResult
from taskplanner.core.services.scheduling.passes import find_critical_path
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    Deadline-driven task scheduler:
    - utilization check over the project's work days
    - dependency graph + topological order (cycles rejected)
    - CPM forward/backward pass to tag critical tasks
    - date allocation with buffer, overflow recovery and clamping
    - overallocation scan and templated suggestions

    Pure and synchronous: identical inputs give identical results.
    """

    def build_calendar(self, options: SchedulingOptions) -> WorkCalendarEngine:
        return WorkCalendarEngine(
            holidays=options.holidays,
            exclude_weekends=options.exclude_weekends,
            exclude_holidays=options.exclude_holidays,
        )

    def generate_schedule(
        self,
        tasks: Iterable[TaskInput],
        options: SchedulingOptions,
    ) -> SchedulingResult:
        options.validate()
        task_list = list(tasks)
        logger.info(
            "Scheduling %s task(s) between %s and %s",
            len(task_list),
            options.project_start_date,
            options.project_end_date,
        )

        graph = build_dependency_graph(task_list)
        topo_order = topological_sort(graph)

        calendar = self.build_calendar(options)
        utilization = assess_utilization(task_list, options, calendar)
        analysis = find_critical_path(topo_order, options.working_hours_per_day)

        schedules, allocation_warnings = allocate_tasks(
            topo_order,
            analysis.critical_path,
            options,
            calendar,
        )
        conflict_warnings = check_resource_conflicts(schedules, options, calendar)

        warnings = (*utilization.warnings, *allocation_warnings, *conflict_warnings)
        suggestions = build_suggestions(schedules, warnings, utilization, options)

        logger.info(
            "Scheduled %s task(s): %s critical, %s warning(s), utilization %.1f%%",
            len(schedules),
            len(analysis.critical_path),
            len(warnings),
            utilization.utilization_rate,
        )
        return SchedulingResult(
            schedules=tuple(schedules),
            total_duration=utilization.available_work_days,
            critical_path=analysis.critical_path,
            utilization_rate=utilization.utilization_rate,
            warnings=warnings,
            suggestions=tuple(suggestions),
        )


def generate_schedule(tasks: Iterable[TaskInput], options: SchedulingOptions) -> SchedulingResult:
    return SchedulingEngine().generate_schedule(tasks, options)


__all__ = ["SchedulingEngine", "generate_schedule"]
