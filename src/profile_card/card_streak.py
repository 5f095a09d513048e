from __future__ import annotations

import datetime as dt
from typing import Iterable

from .card_format import date_range_label
from .models import QUALIFYING_EVENT_KINDS, ActivityEvent, Streak


def reference_zone(now: dt.datetime) -> dt.tzinfo:
    """Zone that defines calendar days for a render: `now`'s own zone, naive = UTC."""
    return now.tzinfo if now.tzinfo is not None else dt.timezone.utc


def reference_today(now: dt.datetime) -> dt.date:
    return now.date()


def local_date(ts: dt.datetime, zone: dt.tzinfo) -> dt.date:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts.astimezone(zone).date()


def activity_dates(events: Iterable[ActivityEvent], now: dt.datetime) -> set[dt.date]:
    """Calendar days (in the reference zone) with at least one qualifying event."""
    zone = reference_zone(now)
    return {local_date(e.created_at, zone) for e in events if e.kind in QUALIFYING_EVENT_KINDS}


def longest_run(dates: Iterable[dt.date]) -> int:
    best = 0
    run = 0
    prev: dt.date | None = None
    for d in sorted(set(dates)):
        if prev is not None and (d - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        prev = d
    return best


def compute_streak(dates: set[dt.date], today: dt.date) -> Streak:
    """
    Current streak ending today, or yesterday if today has no activity yet.

    Anything older than yesterday means the streak is broken (length 0).
    """
    longest = longest_run(d for d in dates if d <= today)
    yesterday = today - dt.timedelta(days=1)
    if today in dates:
        anchor = today
    elif yesterday in dates:
        anchor = yesterday
    else:
        return Streak(length=0, start=None, end=None, longest=longest)

    length = 0
    cur = anchor
    while cur in dates:
        length += 1
        cur -= dt.timedelta(days=1)
    start = anchor - dt.timedelta(days=length - 1)
    return Streak(length=length, start=start, end=anchor, longest=longest)


def streak_from_events(events: Iterable[ActivityEvent], now: dt.datetime) -> Streak:
    return compute_streak(activity_dates(events, now), reference_today(now))


def streak_range(streak: Streak) -> str:
    if not streak.active:
        return ""
    return date_range_label(streak.start, streak.end)
