from __future__ import annotations

import datetime as dt

from profile_card.card_metrics import aggregate_metrics, composite_score, event_counts
from profile_card.models import (
    EVENT_ISSUE,
    EVENT_OTHER,
    EVENT_PULL_REQUEST,
    EVENT_PUSH,
    ActivityEvent,
    ActivityTotals,
    ContributionDay,
    ProfileSummary,
    RepositoryRecord,
)

NOW = dt.datetime(2026, 3, 10, 12, 0, tzinfo=dt.timezone.utc)


def _at(day: int, hour: int = 12) -> dt.datetime:
    return dt.datetime(2026, 3, day, hour, 0, tzinfo=dt.timezone.utc)


def _events() -> list[ActivityEvent]:
    return [
        ActivityEvent(kind=EVENT_PUSH, repo="octo/one", created_at=_at(10), commit_count=3),
        ActivityEvent(kind=EVENT_PULL_REQUEST, repo="octo/two", created_at=_at(9)),
        ActivityEvent(kind=EVENT_ISSUE, repo="octo/two", created_at=_at(8)),
        ActivityEvent(kind=EVENT_OTHER, repo="octo/three", created_at=_at(7)),
    ]


def _repos() -> list[RepositoryRecord]:
    return [
        RepositoryRecord(stars=10, forks=2, language="X"),
        RepositoryRecord(stars=5, forks=1, language="X"),
    ]


def test_end_to_end_score_and_grade() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo", followers=20),
        repos=_repos(),
        events=_events(),
        totals=ActivityTotals(commits=50, pull_requests=2, issues=1),
        contributions=None,
        now=NOW,
    )
    assert m.stars == 15
    assert m.forks == 3
    assert m.contributed_to == 2
    assert m.recent_prs == 1
    assert m.recent_issues == 1
    # stars*2 + commits + recent PRs*3 + recent issues + contributed*2 + followers
    assert m.score == 15 * 2 + 50 + 1 * 3 + 1 + 2 * 2 + 20
    assert m.grade == "B"
    assert m.grade_percent == 50


def test_displayed_totals_are_authoritative_and_recent_counts_kept_separately() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo"),
        repos=[],
        events=_events(),
        totals=ActivityTotals(commits=50, pull_requests=0, issues=0),
        contributions=None,
        now=NOW,
    )
    assert m.prs == 0
    assert m.issues == 0
    assert m.recent_prs == 1
    assert m.recent_issues == 1


def test_missing_totals_fall_back_to_event_window() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo"),
        repos=[],
        events=_events(),
        totals=ActivityTotals(),
        contributions=None,
        now=NOW,
    )
    assert m.commits == 3
    assert m.prs == 1
    assert m.issues == 1


def test_streak_is_part_of_metric_set() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo"),
        repos=[],
        events=_events(),
        totals=ActivityTotals(),
        contributions=None,
        now=NOW,
    )
    # The "other" event on the 7th does not extend the streak.
    assert m.current_streak == 3
    assert m.streak_range == "Mar 8 - Mar 10"
    assert m.longest_streak == 3


def test_total_contributions_use_trailing_window() -> None:
    days = [
        ContributionDay(date=dt.date(2026, 3, 10), count=3, level=2),
        ContributionDay(date=dt.date(2026, 3, 9), count=4, level=3),
        ContributionDay(date=dt.date(2025, 1, 1), count=100, level=4),
    ]
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo"),
        repos=[],
        events=[],
        totals=ActivityTotals(commits=50, pull_requests=2, issues=1),
        contributions=days,
        now=NOW,
    )
    assert m.total_contributions == 7
    assert m.total_range == "Mar 9, 2026 - Mar 10, 2026"


def test_total_contributions_without_calendar() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(login="octo"),
        repos=[],
        events=[],
        totals=ActivityTotals(commits=50, pull_requests=2, issues=1),
        contributions=None,
        now=NOW,
    )
    assert m.total_contributions == 53
    assert m.total_range == ""


def test_empty_inputs_give_zero_metrics() -> None:
    m = aggregate_metrics(
        profile=ProfileSummary(),
        repos=[],
        events=[],
        totals=ActivityTotals(),
        contributions=[],
        now=NOW,
    )
    assert (m.stars, m.forks, m.commits, m.prs, m.issues, m.contributed_to) == (0, 0, 0, 0, 0, 0)
    assert m.score == 0
    assert m.grade == "C"
    assert m.grade_percent == 30
    assert m.current_streak == 0
    assert m.streak_range == ""


def test_event_counts_ignore_blank_repos() -> None:
    counts = event_counts([ActivityEvent(kind=EVENT_PUSH, repo="", created_at=NOW, commit_count=2)])
    assert counts.contributed_to == 0
    assert counts.push_commits == 2


def test_composite_score_weights() -> None:
    assert composite_score(stars=1, commits=0, recent_prs=0, recent_issues=0, contributed_to=0, followers=0) == 2
    assert composite_score(stars=0, commits=0, recent_prs=1, recent_issues=0, contributed_to=0, followers=0) == 3
    assert composite_score(stars=0, commits=0, recent_prs=0, recent_issues=0, contributed_to=1, followers=0) == 2
    assert composite_score(stars=0, commits=7, recent_prs=0, recent_issues=1, contributed_to=0, followers=4) == 12
