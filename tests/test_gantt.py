from datetime import date

import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from taskplanner.core.domain.calendar import HolidayCalendar
from taskplanner.core.exceptions import ValidationError
from taskplanner.core.reporting.gantt import format_for_gantt_chart
from taskplanner.core.reporting.renderers.gantt import GanttPngRenderer
from taskplanner.core.services.work_calendar.engine import WorkCalendarEngine


@pytest.fixture
def scheduled(engine, make_task, make_options):
    result = engine.generate_schedule(
        [
            make_task("a", hours=16, title="Design"),
            make_task("side", hours=4, title="Setup"),
            make_task("b", hours=8, deps=["a", "side"], title="Build"),
        ],
        make_options(),
    )
    return result.schedules


def test_rows_mirror_schedules(scheduled):
    rows = format_for_gantt_chart(scheduled)
    by_id = {row["id"]: row for row in rows}

    assert [row["id"] for row in rows] == [s.task_id for s in scheduled]
    assert by_id["a"] == {
        "id": "a",
        "text": "Design",
        "start_date": "2024-01-01",
        "end_date": "2024-01-04",
        "duration": 4,
        "progress": 0,
        "parent": 0,
        "type": "critical",
        "buffer": 1,
        "dependencies": "",
    }
    assert by_id["b"]["dependencies"] == "a,side"
    assert by_id["b"]["start_date"] == "2024-01-05"
    assert by_id["b"]["duration"] == 3
    assert by_id["side"]["type"] == "normal"


def test_duration_uses_supplied_calendar(engine, make_task, make_options):
    holidays = HolidayCalendar.from_dates([date(2024, 1, 2)])
    result = engine.generate_schedule(
        [make_task("a", hours=16)],
        make_options(buffer_ratio=0, holidays=holidays),
    )

    (row,) = format_for_gantt_chart(result.schedules, WorkCalendarEngine(holidays))
    assert row["end_date"] == "2024-01-04"
    assert row["duration"] == 3


def test_empty_schedule_gives_no_rows():
    assert format_for_gantt_chart([]) == []


def test_png_renderer_writes_image(tmp_path, scheduled):
    output = GanttPngRenderer().render(scheduled, tmp_path / "charts" / "gantt.png")

    assert output.exists()
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_png_renderer_rejects_empty_schedule(tmp_path):
    with pytest.raises(ValidationError) as exc:
        GanttPngRenderer().render([], tmp_path / "gantt.png")
    assert exc.value.code == "GANTT_EMPTY"


def test_png_renderer_closes_figure_when_save_fails(tmp_path, scheduled, monkeypatch):
    def fail_save(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Figure, "savefig", fail_save)
    open_before = set(plt.get_fignums())

    with pytest.raises(OSError):
        GanttPngRenderer().render(scheduled, tmp_path / "gantt.png")

    assert set(plt.get_fignums()) == open_before
