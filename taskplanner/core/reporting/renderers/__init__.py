from taskplanner.core.reporting.renderers.gantt import GanttPngRenderer

__all__ = ["GanttPngRenderer"]
