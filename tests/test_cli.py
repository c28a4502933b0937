import json

import pytest
from typer.testing import CliRunner

from taskplanner.cli import app

runner = CliRunner()


@pytest.fixture
def base_args(tmp_path, restore_logging):
    return ["--log-dir", str(tmp_path / "logs"), "schedule"]


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def project_file(tmp_path):
    return _write(
        tmp_path / "project.json",
        {
            "tasks": [
                {"id": "a", "title": "Design", "estimatedHours": 8},
                {"id": "b", "title": "Build", "estimatedHours": 8, "dependencies": ["a"]},
            ],
            "holidays": ["2024-01-02"],
        },
    )


def test_schedule_written_to_file(base_args, project_file, tmp_path):
    output = tmp_path / "out" / "result.json"
    output.parent.mkdir()

    result = runner.invoke(
        app,
        [*base_args, str(project_file), "--start", "2024-01-01", "--end", "2024-03-29",
         "--buffer-ratio", "0", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert "Schedule written to" in result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    schedules = {s["taskId"]: s for s in data["schedules"]}
    assert schedules["a"]["dueDate"] == "2024-01-03"
    assert schedules["b"]["startDate"] == "2024-01-04"
    assert data["criticalPath"] == ["a", "b"]
    assert data["warnings"] == []
    assert (tmp_path / "logs" / "taskplanner.log").exists()


def test_gantt_output_and_png(base_args, project_file, tmp_path):
    png = tmp_path / "gantt.png"

    result = runner.invoke(
        app,
        [*base_args, str(project_file), "--start", "2024-01-01", "--end", "2024-03-29",
         "--format", "gantt", "--png", str(png)],
    )

    assert result.exit_code == 0, result.output
    text = result.output.split("Gantt chart written to")[0]
    rows = json.loads(text)
    assert [row["id"] for row in rows] == ["a", "b"]
    assert rows[1]["dependencies"] == "a"
    assert png.exists()


def test_plain_task_list_and_holiday_file(base_args, tmp_path):
    tasks = _write(tmp_path / "tasks.json", [{"title": "Only", "estimatedHours": 16}])
    holidays = _write(tmp_path / "holidays.json", {"holidays": [{"date": "2024-01-02", "name": "Day off"}]})

    result = runner.invoke(
        app,
        [*base_args, str(tasks), "--start", "2024-01-01", "--end", "2024-03-29",
         "--buffer-ratio", "0", "--holidays", str(holidays)],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["schedules"][0]["taskId"] == "task_1"
    assert data["schedules"][0]["dueDate"] == "2024-01-04"


def test_cycle_reports_error_code(base_args, tmp_path):
    tasks = _write(
        tmp_path / "cycle.json",
        [
            {"id": "a", "title": "A", "dependencies": ["b"]},
            {"id": "b", "title": "B", "dependencies": ["a"]},
        ],
    )

    result = runner.invoke(app, [*base_args, str(tasks), "--start", "2024-01-01", "--end", "2024-03-29"])

    assert result.exit_code == 1
    assert "SCHEDULE_CYCLE" in result.output


def test_invalid_date_is_a_usage_error(base_args, project_file):
    result = runner.invoke(app, [*base_args, str(project_file), "--start", "01/01/2024", "--end", "2024-03-29"])

    assert result.exit_code == 2


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps("just a string"),
        json.dumps({"tasks": "a,b"}),
        json.dumps([1, 2]),
    ],
)
def test_malformed_task_file_reports_error_code(base_args, tmp_path, content):
    tasks = tmp_path / "broken.json"
    tasks.write_text(content, encoding="utf-8")

    result = runner.invoke(app, [*base_args, str(tasks), "--start", "2024-01-01", "--end", "2024-03-29"])

    assert result.exit_code == 1
    assert "Error [SCHEDULE_INVALID_INPUT]" in result.output


def test_missing_task_file_reports_error_code(base_args, tmp_path):
    result = runner.invoke(
        app,
        [*base_args, str(tmp_path / "absent.json"), "--start", "2024-01-01", "--end", "2024-03-29"],
    )

    assert result.exit_code == 1
    assert "SCHEDULE_INVALID_INPUT" in result.output


def test_unreadable_holiday_file_reports_error_code(base_args, project_file, tmp_path):
    holidays = tmp_path / "holidays.json"
    holidays.write_text("2024-01-01,", encoding="utf-8")

    result = runner.invoke(
        app,
        [*base_args, str(project_file), "--start", "2024-01-01", "--end", "2024-03-29",
         "--holidays", str(holidays)],
    )

    assert result.exit_code == 1
    assert "HOLIDAY_FILE_INVALID" in result.output
