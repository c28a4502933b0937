from __future__ import annotations

import math
from typing import Dict, List, Sequence

from taskplanner.core.services.scheduling.models import (
    CPMTaskInfo,
    CriticalPathAnalysis,
    TaskNode,
)


def duration_in_work_days(estimated_hours: float, working_hours_per_day: float) -> int:
    return math.ceil(estimated_hours / working_hours_per_day)


def run_forward_pass(
    topo_order: Sequence[TaskNode],
    working_hours_per_day: float,
) -> tuple[Dict[str, int], Dict[str, int], int]:
    es: Dict[str, int] = {}
    ef: Dict[str, int] = {}

    for node in topo_order:
        duration = duration_in_work_days(node.task.estimated_hours, working_hours_per_day)
        start = max((ef[p] for p in node.predecessors), default=0)
        es[node.task_id] = start
        ef[node.task_id] = start + duration

    return es, ef, max(ef.values(), default=0)


def run_backward_pass(
    topo_order: Sequence[TaskNode],
    project_duration: int,
    working_hours_per_day: float,
) -> tuple[Dict[str, int], Dict[str, int]]:
    ls: Dict[str, int] = {}
    lf: Dict[str, int] = {}

    for node in reversed(topo_order):
        duration = duration_in_work_days(node.task.estimated_hours, working_hours_per_day)
        finish = min((ls[s] for s in node.successors), default=project_duration)
        lf[node.task_id] = finish
        ls[node.task_id] = finish - duration

    return ls, lf


def find_critical_path(
    topo_order: Sequence[TaskNode],
    working_hours_per_day: float,
) -> CriticalPathAnalysis:
    """
    Forward pass (ES/EF) then backward pass (LS/LF) in work-day units.
    Zero-slack tasks form the critical path, listed in forward-pass order.
    """
    es, ef, project_duration = run_forward_pass(topo_order, working_hours_per_day)
    ls, lf = run_backward_pass(topo_order, project_duration, working_hours_per_day)

    infos: Dict[str, CPMTaskInfo] = {}
    critical: List[str] = []
    for node in topo_order:
        task_id = node.task_id
        info = CPMTaskInfo(
            task_id=task_id,
            duration_days=ef[task_id] - es[task_id],
            earliest_start=es[task_id],
            earliest_finish=ef[task_id],
            latest_start=ls[task_id],
            latest_finish=lf[task_id],
        )
        infos[task_id] = info
        if info.is_critical:
            critical.append(task_id)

    return CriticalPathAnalysis(
        project_duration=project_duration,
        tasks=infos,
        critical_path=tuple(critical),
    )


__all__ = [
    "duration_in_work_days",
    "run_forward_pass",
    "run_backward_pass",
    "find_critical_path",
]
