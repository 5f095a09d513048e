from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Iterable

from .card_grade import classify_grade
from .card_periods import contribution_window, trailing_period, window_range_label
from .card_streak import reference_today, streak_from_events, streak_range
from .models import (
    EVENT_ISSUE,
    EVENT_PULL_REQUEST,
    EVENT_PUSH,
    QUALIFYING_EVENT_KINDS,
    ActivityEvent,
    ActivityTotals,
    ContributionDay,
    MetricSet,
    ProfileSummary,
    RepositoryRecord,
    Snapshot,
)

STAR_WEIGHT = 2
PR_WEIGHT = 3
ISSUE_WEIGHT = 1
CONTRIBUTED_WEIGHT = 2


@dataclasses.dataclass(frozen=True)
class EventCounts:
    contributed_to: int = 0
    recent_prs: int = 0
    recent_issues: int = 0
    push_commits: int = 0


def repo_totals(repos: Iterable[RepositoryRecord]) -> tuple[int, int]:
    stars = 0
    forks = 0
    for r in repos:
        stars += int(r.stars or 0)
        forks += int(r.forks or 0)
    return stars, forks


def event_counts(events: Iterable[ActivityEvent]) -> EventCounts:
    repos: set[str] = set()
    prs = 0
    issues = 0
    commits = 0
    for e in events:
        if e.kind in QUALIFYING_EVENT_KINDS and e.repo:
            repos.add(e.repo)
        if e.kind == EVENT_PULL_REQUEST:
            prs += 1
        elif e.kind == EVENT_ISSUE:
            issues += 1
        elif e.kind == EVENT_PUSH:
            commits += int(e.commit_count or 0)
    return EventCounts(contributed_to=len(repos), recent_prs=prs, recent_issues=issues, push_commits=commits)


def composite_score(*, stars: int, commits: int, recent_prs: int, recent_issues: int, contributed_to: int, followers: int) -> int:
    return (
        stars * STAR_WEIGHT
        + commits
        + recent_prs * PR_WEIGHT
        + recent_issues * ISSUE_WEIGHT
        + contributed_to * CONTRIBUTED_WEIGHT
        + followers
    )


def aggregate_metrics(
    *,
    profile: ProfileSummary,
    repos: Iterable[RepositoryRecord],
    events: Iterable[ActivityEvent],
    totals: ActivityTotals,
    contributions: Iterable[ContributionDay] | None,
    now: dt.datetime,
) -> MetricSet:
    """
    Reduce one snapshot to the card's metric set.

    Displayed PR/issue totals come from `totals` (all-time, authoritative);
    the recent event window only feeds the score. When a total is missing
    the recent figure stands in for it.
    """
    events = list(events)
    stars, forks = repo_totals(repos)
    counts = event_counts(events)

    commits = totals.commits if totals.commits is not None else counts.push_commits
    prs = totals.pull_requests if totals.pull_requests is not None else counts.recent_prs
    issues = totals.issues if totals.issues is not None else counts.recent_issues
    followers = int(profile.followers or 0)

    score = composite_score(
        stars=stars,
        commits=commits,
        recent_prs=counts.recent_prs,
        recent_issues=counts.recent_issues,
        contributed_to=counts.contributed_to,
        followers=followers,
    )
    grade = classify_grade(score)
    streak = streak_from_events(events, now)

    window = contribution_window(contributions, trailing_period(reference_today(now)))
    if window:
        total_contributions = sum(int(d.count or 0) for d in window)
        total_range = window_range_label(window)
    else:
        total_contributions = commits + prs + issues
        total_range = ""

    return MetricSet(
        stars=stars,
        forks=forks,
        commits=commits,
        prs=prs,
        issues=issues,
        contributed_to=counts.contributed_to,
        followers=followers,
        following=int(profile.following or 0),
        recent_prs=counts.recent_prs,
        recent_issues=counts.recent_issues,
        score=score,
        grade=grade.grade,
        grade_percent=grade.percent,
        current_streak=streak.length,
        longest_streak=streak.longest,
        streak_range=streak_range(streak),
        total_contributions=total_contributions,
        total_range=total_range,
    )


def metrics_from_snapshot(snapshot: Snapshot, now: dt.datetime) -> MetricSet:
    return aggregate_metrics(
        profile=snapshot.profile,
        repos=snapshot.repositories,
        events=snapshot.events,
        totals=snapshot.totals,
        contributions=snapshot.contributions,
        now=now,
    )
