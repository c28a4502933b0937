from __future__ import annotations

from enum import Enum


class WarningType(str, Enum):
    TIGHT_SCHEDULE = "tight_schedule"
    OVERALLOCATION = "overallocation"
    DEPENDENCY_CONFLICT = "dependency_conflict"
    IMPOSSIBLE_DEADLINE = "impossible_deadline"


class WarningSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class GanttTaskType(str, Enum):
    CRITICAL = "critical"
    NORMAL = "normal"


__all__ = ["WarningType", "WarningSeverity", "GanttTaskType"]
