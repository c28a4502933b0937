"""Command-line interface for the task scheduler."""

from __future__ import annotations

import json
import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from taskplanner.core.domain.calendar import HolidayCalendar
from taskplanner.core.domain.task import task_inputs_from_records
from taskplanner.core.exceptions import DomainError, ValidationError
from taskplanner.core.reporting.gantt import format_for_gantt_chart
from taskplanner.core.reporting.renderers.gantt import GanttPngRenderer
from taskplanner.core.services.scheduling.config import options_from_env
from taskplanner.core.services.scheduling.engine import SchedulingEngine
from taskplanner.infra.logging_config import setup_logging
from taskplanner.infra.operational_support import bind_trace_id

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="taskplanner",
    help="Deadline-driven project task scheduler",
    add_completion=False,
)


class OutputFormat(str, Enum):
    RESULT = "result"
    GANTT = "gantt"


def _parse_iso_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{value!r} is not an ISO date (YYYY-MM-DD)", param_hint=option) from exc


def _load_payload(path: Path) -> tuple[list[dict[str, Any]], HolidayCalendar]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        raise ValidationError(f"Cannot read task file {path}: {exc}", code="SCHEDULE_INVALID_INPUT") from exc

    if isinstance(payload, list):
        records, holidays = payload, []
    elif isinstance(payload, dict):
        records, holidays = payload.get("tasks", []), payload.get("holidays", [])
    else:
        raise ValidationError(
            f"Task file {path} must contain a task list or a {{tasks, holidays}} object.",
            code="SCHEDULE_INVALID_INPUT",
        )
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValidationError(f"Tasks in {path} must be a list of objects.", code="SCHEDULE_INVALID_INPUT")
    if not isinstance(holidays, list):
        raise ValidationError(f"Holidays in {path} must be a list of dates.", code="HOLIDAY_FILE_INVALID")
    return records, HolidayCalendar.from_dates(holidays)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Also log to the console")
    ] = False,
    log_dir: Annotated[
        Optional[Path], typer.Option("--log-dir", help="Directory for the rotating log file")
    ] = None,
) -> None:
    """Global options for taskplanner commands."""
    setup_logging(log_dir=log_dir, level=logging.DEBUG if verbose else logging.INFO, console=verbose)


@app.command()
def schedule(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="JSON file: task list or {tasks, holidays}")],
    *,
    start: Annotated[str, typer.Option("--start", help="Project start date (YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--end", help="Project end date (YYYY-MM-DD)")],
    holidays: Annotated[
        Optional[Path], typer.Option("--holidays", help="JSON file with holiday dates")
    ] = None,
    hours_per_day: Annotated[
        Optional[float], typer.Option("--hours-per-day", help="Working hours per day")
    ] = None,
    buffer_ratio: Annotated[
        Optional[float], typer.Option("--buffer-ratio", help="Buffer fraction of each task")
    ] = None,
    parallel_limit: Annotated[
        Optional[int], typer.Option("--parallel-limit", help="Max tasks in flight per day")
    ] = None,
    include_weekends: Annotated[
        bool, typer.Option("--include-weekends", help="Treat Saturday and Sunday as work days")
    ] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output shape")
    ] = OutputFormat.RESULT,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file path")] = None,
    png: Annotated[Optional[Path], typer.Option("--png", help="Also render a Gantt PNG")] = None,
) -> None:
    """Generate a schedule for the tasks in FILE."""
    start_date = _parse_iso_date(start, "--start")
    end_date = _parse_iso_date(end, "--end")

    with bind_trace_id():
        try:
            records, calendar = _load_payload(file)
            if holidays is not None:
                calendar = calendar.merge(HolidayCalendar.from_json_file(holidays))
            tasks = task_inputs_from_records(records)
            options = options_from_env(
                start_date,
                end_date,
                working_hours_per_day=hours_per_day,
                buffer_ratio=buffer_ratio,
                parallel_task_limit=parallel_limit,
                exclude_weekends=False if include_weekends else None,
                holidays=calendar,
            )
            engine = SchedulingEngine()
            result = engine.generate_schedule(tasks, options)
        except DomainError as exc:
            logger.error("Scheduling failed [%s]: %s", exc.code, exc)
            typer.echo(f"Error [{exc.code}]: {exc}", err=True)
            raise typer.Exit(1) from exc

        if output_format == OutputFormat.GANTT:
            data: Any = format_for_gantt_chart(result.schedules, engine.build_calendar(options))
        else:
            data = result.to_dict()
        text = json.dumps(data, indent=2, ensure_ascii=False)

        if output is not None:
            output.write_text(text + "\n", encoding="utf-8")
            typer.echo(f"Schedule written to {output}")
        else:
            typer.echo(text)

        if png is not None:
            GanttPngRenderer().render(result.schedules, png)
            typer.echo(f"Gantt chart written to {png}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
