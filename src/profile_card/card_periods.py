from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Iterable

from .card_format import date_range_label
from .models import ContributionDay

WINDOW_DAYS = 365


@dataclasses.dataclass(frozen=True)
class Period:
    start: dt.date  # inclusive
    end: dt.date  # exclusive

    @property
    def last_day(self) -> dt.date:
        return self.end - dt.timedelta(days=1)

    def contains(self, d: dt.date) -> bool:
        return self.start <= d < self.end


def trailing_period(today: dt.date, days: int = WINDOW_DAYS) -> Period:
    if days <= 0:
        raise ValueError(f"Invalid window length: {days!r} (expected a positive number of days)")
    end = today + dt.timedelta(days=1)
    return Period(start=end - dt.timedelta(days=days), end=end)


def contribution_window(days: Iterable[ContributionDay] | None, period: Period) -> list[ContributionDay]:
    """Days inside `period`, ascending by date; later duplicates of a date win."""
    if not days:
        return []
    by_date: dict[dt.date, ContributionDay] = {}
    for d in days:
        if period.contains(d.date):
            by_date[d.date] = d
    return [by_date[k] for k in sorted(by_date)]


def window_range_label(window: list[ContributionDay]) -> str:
    if not window:
        return ""
    return date_range_label(window[0].date, window[-1].date, with_year=True)


def month_starts(window: list[ContributionDay]) -> list[dt.date]:
    """First retained day of every calendar month in the window, in order."""
    out: list[dt.date] = []
    prev: tuple[int, int] | None = None
    for d in window:
        key = (d.date.year, d.date.month)
        if key != prev:
            out.append(d.date)
            prev = key
    return out
