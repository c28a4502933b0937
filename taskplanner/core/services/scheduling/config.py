from __future__ import annotations

import os
from dataclasses import fields
from datetime import date
from typing import Any, Callable

from taskplanner.core.exceptions import ValidationError
from taskplanner.core.services.scheduling.models import SchedulingOptions

ENV_PREFIX = "TP_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(raw)


_ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "working_hours_per_day": float,
    "buffer_ratio": float,
    "exclude_weekends": _parse_bool,
    "exclude_holidays": _parse_bool,
    "parallel_task_limit": int,
    "tight_schedule_threshold": float,
}


def env_option_overrides() -> dict[str, Any]:
    """Read ``TP_<OPTION>`` variables, e.g. ``TP_BUFFER_RATIO=0.1``."""
    values: dict[str, Any] = {}
    for name, parser in _ENV_PARSERS.items():
        env_name = f"{ENV_PREFIX}{name.upper()}"
        raw = (os.getenv(env_name) or "").strip()
        if not raw:
            continue
        try:
            values[name] = parser(raw)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid value for {env_name}: {raw!r}",
                code="SCHEDULE_INVALID_OPTION",
            ) from exc
    return values


def options_from_env(
    project_start_date: date,
    project_end_date: date,
    **overrides: Any,
) -> SchedulingOptions:
    """Explicit overrides win over environment values, which win over defaults."""
    known = {f.name for f in fields(SchedulingOptions)}
    unknown = set(overrides) - known
    if unknown:
        raise ValidationError(
            f"Unknown scheduling option(s): {', '.join(sorted(unknown))}",
            code="SCHEDULE_INVALID_OPTION",
        )
    values = env_option_overrides()
    values.update({k: v for k, v in overrides.items() if v is not None})
    options = SchedulingOptions(
        project_start_date=project_start_date,
        project_end_date=project_end_date,
        **values,
    )
    options.validate()
    return options


__all__ = ["ENV_PREFIX", "env_option_overrides", "options_from_env"]
