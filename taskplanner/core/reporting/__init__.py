from taskplanner.core.reporting.gantt import GanttRow, format_for_gantt_chart, gantt_row

__all__ = ["GanttRow", "format_for_gantt_chart", "gantt_row"]
