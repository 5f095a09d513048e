from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

from .models import (
    EVENT_ISSUE,
    EVENT_KINDS,
    EVENT_OTHER,
    EVENT_PULL_REQUEST,
    EVENT_PULL_REQUEST_REVIEW,
    EVENT_PUSH,
    ActivityEvent,
    ActivityTotals,
    ContributionDay,
    ProfileSummary,
    RepositoryRecord,
    Snapshot,
)

# Upstream event type names -> event kinds.
EVENT_TYPE_KINDS = {
    "PushEvent": EVENT_PUSH,
    "PullRequestEvent": EVENT_PULL_REQUEST,
    "IssuesEvent": EVENT_ISSUE,
    "PullRequestReviewEvent": EVENT_PULL_REQUEST_REVIEW,
}

CONTRIBUTION_LEVELS = {
    "NONE": 0,
    "FIRST_QUARTILE": 1,
    "SECOND_QUARTILE": 2,
    "THIRD_QUARTILE": 3,
    "FOURTH_QUARTILE": 4,
}


def parse_timestamp(value: object, *, field: str) -> dt.datetime:
    s = str(value or "").strip()
    if not s:
        raise ValueError(f"Missing timestamp: {field}")
    try:
        ts = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid timestamp for {field}: {s!r}") from e
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts


def _optional_timestamp(value: object, *, field: str) -> dt.datetime | None:
    if value in (None, ""):
        return None
    return parse_timestamp(value, field=field)


def _int(value: object) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return 0


def _first(obj: dict, *keys: str) -> object:
    for k in keys:
        if k in obj and obj[k] is not None:
            return obj[k]
    return None


def parse_profile(obj: object) -> ProfileSummary:
    if not isinstance(obj, dict):
        return ProfileSummary()
    return ProfileSummary(
        login=str(obj.get("login") or "").strip(),
        name=str(obj.get("name") or "").strip(),
        followers=_int(obj.get("followers")),
        following=_int(obj.get("following")),
        created_at=_optional_timestamp(obj.get("created_at"), field="profile.created_at"),
    )


def parse_repository(obj: dict, *, index: int) -> RepositoryRecord:
    lang = obj.get("language")
    return RepositoryRecord(
        stars=_int(_first(obj, "stargazers_count", "stars")),
        forks=_int(_first(obj, "forks_count", "forks")),
        language=str(lang).strip() if isinstance(lang, str) and lang.strip() else None,
        updated_at=_optional_timestamp(obj.get("updated_at"), field=f"repositories[{index}].updated_at"),
    )


def event_kind(obj: dict) -> str:
    kind = str(obj.get("kind") or "").strip()
    if kind in EVENT_KINDS:
        return kind
    return EVENT_TYPE_KINDS.get(str(obj.get("type") or "").strip(), EVENT_OTHER)


def parse_event(obj: dict, *, index: int) -> ActivityEvent:
    repo = obj.get("repo")
    if isinstance(repo, dict):
        repo = repo.get("name")
    payload = obj.get("payload") if isinstance(obj.get("payload"), dict) else {}
    commits = payload.get("commits")
    if isinstance(commits, list):
        commit_count = len(commits)
    else:
        commit_count = _int(_first(payload, "size", "distinct_size") or obj.get("commit_count"))
    return ActivityEvent(
        kind=event_kind(obj),
        repo=str(repo or "").strip(),
        created_at=parse_timestamp(obj.get("created_at"), field=f"events[{index}].created_at"),
        commit_count=commit_count,
    )


def _total(value: object) -> int | None:
    # Search endpoints answer with {"total_count": N}.
    if isinstance(value, dict):
        value = value.get("total_count")
    if value is None:
        return None
    return _int(value)


def parse_totals(obj: object) -> ActivityTotals:
    if not isinstance(obj, dict):
        return ActivityTotals()
    return ActivityTotals(
        commits=_total(obj.get("commits")),
        pull_requests=_total(_first(obj, "pull_requests", "prs")),
        issues=_total(obj.get("issues")),
    )


def quartile_levels(counts: list[int]) -> list[int]:
    """Quantize raw counts to levels 0-4 by quartiles of the non-zero counts."""
    non_zero = sorted(c for c in counts if c > 0)
    if not non_zero:
        return [0 for _ in counts]
    n = len(non_zero)
    q1, q2, q3 = non_zero[n // 4], non_zero[n // 2], non_zero[3 * n // 4]
    out: list[int] = []
    for c in counts:
        if c <= 0:
            out.append(0)
        elif c <= q1:
            out.append(1)
        elif c <= q2:
            out.append(2)
        elif c <= q3:
            out.append(3)
        else:
            out.append(4)
    return out


def _level(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().upper() in CONTRIBUTION_LEVELS:
        return CONTRIBUTION_LEVELS[value.strip().upper()]
    return max(0, min(4, _int(value)))


def _list_field(obj: dict, key: str, *, where: str) -> list:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Invalid {where}: {key} must be a list")
    return value


def parse_contributions(obj: object) -> tuple[ContributionDay, ...] | None:
    """
    Accepts a flat list of days or a calendar of `weeks[].contributionDays[]`.

    Returns None when the source supplied no contribution data at all.
    """
    if obj is None:
        return None
    if isinstance(obj, dict):
        rows: list[object] = []
        for week in _list_field(obj, "weeks", where="contributions"):
            if isinstance(week, dict):
                rows.extend(_list_field(week, "contributionDays", where="contributions"))
    elif isinstance(obj, list):
        rows = list(obj)
    else:
        raise ValueError("Invalid contributions: expected a list of days or a calendar object")

    dates: list[dt.date] = []
    counts: list[int] = []
    levels: list[int | None] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            continue
        raw_date = str(row.get("date") or "").strip()
        try:
            dates.append(dt.date.fromisoformat(raw_date[:10]))
        except ValueError as e:
            raise ValueError(f"Invalid date for contributions[{i}]: {raw_date!r}") from e
        counts.append(max(0, _int(_first(row, "count", "contributionCount"))))
        levels.append(_level(_first(row, "level", "contributionLevel")))

    if any(lv is None for lv in levels):
        derived = quartile_levels(counts)
        levels = [lv if lv is not None else derived[i] for i, lv in enumerate(levels)]
    return tuple(ContributionDay(date=d, count=c, level=int(lv or 0)) for d, c, lv in zip(dates, counts, levels))


def parse_snapshot(obj: object) -> Snapshot:
    if not isinstance(obj, dict):
        raise ValueError("Invalid snapshot: expected a JSON object")
    repos = [r for r in _list_field(obj, "repositories", where="snapshot") if isinstance(r, dict)]
    events = [e for e in _list_field(obj, "events", where="snapshot") if isinstance(e, dict)]
    return Snapshot(
        profile=parse_profile(obj.get("profile")),
        repositories=tuple(parse_repository(r, index=i) for i, r in enumerate(repos)),
        events=tuple(parse_event(e, index=i) for i, e in enumerate(events)),
        totals=parse_totals(obj.get("totals")),
        contributions=parse_contributions(obj.get("contributions")),
    )


def load_snapshot(path: Path) -> Snapshot:
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid snapshot {path}: {e}") from e
    return parse_snapshot(obj)
