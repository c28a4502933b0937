from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping

from taskplanner.core.exceptions import ValidationError


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str = ""


@dataclass(frozen=True)
class HolidayCalendar:
    """
    Immutable set of non-working dates supplied per scheduling run.
    Holiday lists are yearly and jurisdiction-specific, so nothing is built in.
    """

    holidays: frozenset[Holiday] = field(default_factory=frozenset)
    _dates: frozenset[date] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_dates", frozenset(h.date for h in self.holidays))

    @property
    def dates(self) -> frozenset[date]:
        return self._dates

    def __contains__(self, d: object) -> bool:
        return d in self._dates

    def __len__(self) -> int:
        return len(self.holidays)

    def between(self, start: date, end: date) -> "HolidayCalendar":
        return HolidayCalendar(frozenset(h for h in self.holidays if start <= h.date <= end))

    def merge(self, other: "HolidayCalendar") -> "HolidayCalendar":
        return HolidayCalendar(self.holidays | other.holidays)

    @staticmethod
    def empty() -> "HolidayCalendar":
        return HolidayCalendar()

    @staticmethod
    def from_dates(values: Iterable[Any]) -> "HolidayCalendar":
        """Accepts dates, ISO strings or ``{"date": ..., "name": ...}`` mappings."""
        holidays: set[Holiday] = set()
        for value in values:
            if isinstance(value, Holiday):
                holidays.add(value)
            elif isinstance(value, Mapping):
                holidays.add(Holiday(date=_parse_date(value.get("date")), name=str(value.get("name") or "")))
            else:
                holidays.add(Holiday(date=_parse_date(value)))
        return HolidayCalendar(frozenset(holidays))

    @staticmethod
    def from_json_file(path: str | Path) -> "HolidayCalendar":
        try:
            with Path(path).open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise ValidationError(
                f"Cannot read holiday file {path}: {exc}",
                code="HOLIDAY_FILE_INVALID",
            ) from exc
        if isinstance(payload, Mapping):
            payload = payload.get("holidays", [])
        if not isinstance(payload, list):
            raise ValidationError(
                f"Holiday file {path} must contain a list of dates.",
                code="HOLIDAY_FILE_INVALID",
            )
        return HolidayCalendar.from_dates(payload)


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid holiday date: {value!r}", code="HOLIDAY_INVALID_DATE") from exc
    raise ValidationError(f"Unsupported holiday value: {value!r}", code="HOLIDAY_INVALID_DATE")


__all__ = ["Holiday", "HolidayCalendar"]
