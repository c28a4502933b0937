from __future__ import annotations

from typing import Dict, List, Sequence

from taskplanner.core.domain.task import TaskInput
from taskplanner.core.exceptions import (
    CyclicDependencyError,
    DuplicateTaskError,
    MissingDependencyError,
)
from taskplanner.core.services.scheduling.models import TaskNode

# DFS visitation states
_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


def build_dependency_graph(tasks: Sequence[TaskInput]) -> Dict[str, TaskNode]:
    """
    Map task id -> node. Predecessors are the declared dependencies; successors
    are back-references discovered by scanning every task. Insertion order
    follows the input order.
    """
    graph: Dict[str, TaskNode] = {}
    for task in tasks:
        if task.id in graph:
            raise DuplicateTaskError(task.id)
        graph[task.id] = TaskNode(task=task, predecessors=list(task.dependencies))

    for task in tasks:
        for dep_id in task.dependencies:
            node = graph.get(dep_id)
            if node is None:
                raise MissingDependencyError(task.id, dep_id)
            node.successors.append(task.id)

    return graph


def topological_sort(graph: Dict[str, TaskNode]) -> List[TaskNode]:
    """
    Depth-first order where every task follows all of its predecessors.

    Iterative three-state traversal: reaching an in-progress node means the
    graph has a cycle, reported with the path that closes it.
    """
    state: Dict[str, int] = {task_id: _UNVISITED for task_id in graph}
    result: List[TaskNode] = []

    for root_id in graph:
        if state[root_id] != _UNVISITED:
            continue
        state[root_id] = _IN_PROGRESS
        # (task id, index of the next predecessor to visit)
        stack: List[tuple[str, int]] = [(root_id, 0)]
        while stack:
            task_id, next_index = stack[-1]
            predecessors = graph[task_id].predecessors
            if next_index < len(predecessors):
                stack[-1] = (task_id, next_index + 1)
                pred_id = predecessors[next_index]
                if pred_id not in graph:
                    raise MissingDependencyError(task_id, pred_id)
                pred_state = state[pred_id]
                if pred_state == _IN_PROGRESS:
                    path = [entry[0] for entry in stack]
                    cycle = path[path.index(pred_id):] + [pred_id]
                    raise CyclicDependencyError(pred_id, cycle)
                if pred_state == _UNVISITED:
                    state[pred_id] = _IN_PROGRESS
                    stack.append((pred_id, 0))
                continue
            stack.pop()
            state[task_id] = _DONE
            result.append(graph[task_id])

    return result


__all__ = ["build_dependency_graph", "topological_sort"]
