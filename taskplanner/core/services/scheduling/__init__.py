from .engine import SchedulingEngine, generate_schedule
from .models import (
    CPMTaskInfo,
    CriticalPathAnalysis,
    SchedulingOptions,
    SchedulingResult,
    SchedulingWarning,
    TaskNode,
    UtilizationAssessment,
)
from .service import ProjectSchedulingService

__all__ = [
    "SchedulingEngine",
    "generate_schedule",
    "ProjectSchedulingService",
    "CPMTaskInfo",
    "CriticalPathAnalysis",
    "SchedulingOptions",
    "SchedulingResult",
    "SchedulingWarning",
    "TaskNode",
    "UtilizationAssessment",
]
