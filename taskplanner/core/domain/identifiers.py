from __future__ import annotations


def sequential_task_id(index: int) -> str:
    """Positional id for the ``index``-th (0-based) task of a generated list."""
    return f"task_{index + 1}"


__all__ = ["sequential_task_id"]
