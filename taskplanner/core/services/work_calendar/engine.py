# taskplanner/core/services/work_calendar/engine.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, Optional

from taskplanner.core.domain.calendar import HolidayCalendar


class WorkCalendarEngine:
    """
    Work-day arithmetic over weekends and an injected holiday calendar.

    All operations return new ``date`` values; nothing is mutated in place.
    The per-call ``exclude_weekends`` / ``exclude_holidays`` arguments override
    the filters the engine was built with.
    """

    def __init__(
        self,
        holidays: HolidayCalendar | None = None,
        exclude_weekends: bool = True,
        exclude_holidays: bool = True,
    ):
        self._holidays: HolidayCalendar = holidays or HolidayCalendar.empty()
        self._exclude_weekends: bool = exclude_weekends
        self._exclude_holidays: bool = exclude_holidays

    @property
    def holidays(self) -> HolidayCalendar:
        return self._holidays

    def _filters(
        self,
        exclude_weekends: Optional[bool],
        exclude_holidays: Optional[bool],
    ) -> tuple[bool, bool]:
        return (
            self._exclude_weekends if exclude_weekends is None else exclude_weekends,
            self._exclude_holidays if exclude_holidays is None else exclude_holidays,
        )

    def is_work_day(
        self,
        d: date,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> bool:
        weekends, holidays = self._filters(exclude_weekends, exclude_holidays)
        # Saturday = 5, Sunday = 6
        if weekends and d.weekday() >= 5:
            return False
        if holidays and d in self._holidays:
            return False
        return True

    def calculate_work_days(
        self,
        start: date,
        end: date,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> int:
        """Work days in the inclusive range [start, end]; 0 when end < start."""
        return sum(1 for _ in self.iter_work_days(start, end, exclude_weekends, exclude_holidays))

    def add_work_days(
        self,
        start: date,
        days: int,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> date:
        """
        Step forward one calendar day at a time until ``days`` work days were
        passed. The start date itself is never counted, so ``days == 0``
        returns ``start`` unchanged.
        """
        current = start
        added = 0
        while added < days:
            current += timedelta(days=1)
            if self.is_work_day(current, exclude_weekends, exclude_holidays):
                added += 1
        return current

    def next_work_day(
        self,
        d: date,
        include_today: bool = True,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> date:
        current = d if include_today else d + timedelta(days=1)
        while not self.is_work_day(current, exclude_weekends, exclude_holidays):
            current += timedelta(days=1)
        return current

    def previous_work_day(
        self,
        d: date,
        include_today: bool = True,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> date:
        current = d if include_today else d - timedelta(days=1)
        while not self.is_work_day(current, exclude_weekends, exclude_holidays):
            current -= timedelta(days=1)
        return current

    def iter_work_days(
        self,
        start: date,
        end: date,
        exclude_weekends: Optional[bool] = None,
        exclude_holidays: Optional[bool] = None,
    ) -> Iterator[date]:
        current = start
        while current <= end:
            if self.is_work_day(current, exclude_weekends, exclude_holidays):
                yield current
            current += timedelta(days=1)


__all__ = ["WorkCalendarEngine"]
