from datetime import timedelta
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib import ticker
from matplotlib.dates import date2num

from taskplanner.core.domain.task import TaskSchedule
from taskplanner.core.exceptions import ValidationError


class GanttPngRenderer:
    def render(self, schedules: Sequence[TaskSchedule], output_path: Path) -> Path:
        if not schedules:
            raise ValidationError("No scheduled tasks available for Gantt chart", code="GANTT_EMPTY")

        ordered = sorted(schedules, key=lambda s: (s.start_date, s.due_date, s.task_id))

        names = [s.title for s in ordered]
        start_nums = [date2num(s.start_date) for s in ordered]
        # bars cover the due date itself
        durations = [(s.due_date - s.start_date + timedelta(days=1)).days for s in ordered]
        critical = [s.is_critical_path for s in ordered]
        buffers = [s.buffer_days for s in ordered]

        fig, ax = plt.subplots(figsize=(12, max(3, 0.4 * len(ordered) + 1)))

        for i, (s, d, c, b) in enumerate(zip(start_nums, durations, critical, buffers)):
            ax.barh(i, d, left=s, height=0.4,
                    color="#ffcccc" if c else "#d0d0ff",
                    edgecolor="black", linewidth=0.6)
            if b > 0:
                # shade the trailing buffer share of the bar
                share = min(d, b)
                ax.barh(i, share, left=s + d - share, height=0.4,
                        color="#ff6666" if c else "#8080ff", alpha=0.5)

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.invert_yaxis()

        locator = mdates.AutoDateLocator(minticks=4, maxticks=10)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        ax.set_title("Project Schedule")
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        output_path = Path(output_path)
        try:
            fig.tight_layout()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path, dpi=150)
        finally:
            plt.close(fig)

        return output_path
