from __future__ import annotations

import dataclasses
import datetime as dt

EVENT_PUSH = "push"
EVENT_PULL_REQUEST = "pull_request"
EVENT_ISSUE = "issue"
EVENT_PULL_REQUEST_REVIEW = "pull_request_review"
EVENT_OTHER = "other"

EVENT_KINDS = (EVENT_PUSH, EVENT_PULL_REQUEST, EVENT_ISSUE, EVENT_PULL_REQUEST_REVIEW, EVENT_OTHER)
# Event kinds that count as "contributing" to a repository on a given day.
QUALIFYING_EVENT_KINDS = frozenset({EVENT_PUSH, EVENT_PULL_REQUEST, EVENT_ISSUE, EVENT_PULL_REQUEST_REVIEW})

MODULE_STATS = "stats"
MODULE_LANGUAGES = "languages"
MODULE_GRADE = "grade"
MODULE_ACTIVITY_SUMMARY = "activity_summary"
MODULE_CONTRIBUTION_GRID = "contribution_grid"

MODULE_IDS = (MODULE_STATS, MODULE_LANGUAGES, MODULE_GRADE, MODULE_ACTIVITY_SUMMARY, MODULE_CONTRIBUTION_GRID)
ROW_MODULE_IDS = (MODULE_STATS, MODULE_LANGUAGES, MODULE_GRADE)


@dataclasses.dataclass(frozen=True)
class ProfileSummary:
    login: str = ""
    name: str = ""
    followers: int = 0
    following: int = 0
    created_at: dt.datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


@dataclasses.dataclass(frozen=True)
class RepositoryRecord:
    stars: int = 0
    forks: int = 0
    language: str | None = None
    updated_at: dt.datetime | None = None


@dataclasses.dataclass(frozen=True)
class ActivityEvent:
    kind: str
    repo: str
    created_at: dt.datetime
    commit_count: int = 0


@dataclasses.dataclass(frozen=True)
class ContributionDay:
    date: dt.date
    count: int = 0
    level: int = 0


@dataclasses.dataclass(frozen=True)
class ActivityTotals:
    """Authoritative all-time counts; None means the source did not supply one."""

    commits: int | None = None
    pull_requests: int | None = None
    issues: int | None = None


@dataclasses.dataclass(frozen=True)
class Streak:
    length: int = 0
    start: dt.date | None = None
    end: dt.date | None = None
    longest: int = 0

    @property
    def active(self) -> bool:
        return self.length > 0


@dataclasses.dataclass(frozen=True)
class MetricSet:
    stars: int = 0
    forks: int = 0
    commits: int = 0
    prs: int = 0
    issues: int = 0
    contributed_to: int = 0
    followers: int = 0
    following: int = 0
    recent_prs: int = 0
    recent_issues: int = 0
    score: int = 0
    grade: str = "C"
    grade_percent: int = 30
    current_streak: int = 0
    longest_streak: int = 0
    streak_range: str = ""
    total_contributions: int = 0
    total_range: str = ""


@dataclasses.dataclass(frozen=True)
class LanguageSlice:
    name: str
    count: int
    percent: int
    color: str


@dataclasses.dataclass(frozen=True)
class ModuleSpec:
    id: str
    visible: bool = True
    width: int | None = None  # None = full canvas width band

    @property
    def full_width(self) -> bool:
        return self.width is None


@dataclasses.dataclass(frozen=True)
class CardGeometry:
    width: int
    height: int
    offsets: dict[str, float]  # row module id -> x of its local frame
    dividers: tuple[float, ...]  # x of vertical lines between row modules
    rules: tuple[float, ...]  # y of horizontal lines between bands
    bands: dict[str, float]  # "row" / band module id -> y of its local frame
    row_height: int = 0


@dataclasses.dataclass(frozen=True)
class DisplayOptions:
    palette: str = "dark"
    stats: bool = True
    languages: bool = True
    grade: bool = True
    activity_summary: bool = True
    contribution_grid: bool = True

    def shows(self, module_id: str) -> bool:
        return bool(getattr(self, module_id, False))

    def with_modules(self, **flags: bool) -> DisplayOptions:
        unknown = sorted(set(flags) - set(MODULE_IDS))
        if unknown:
            raise ValueError(f"Unknown module(s): {', '.join(unknown)} (expected one of {', '.join(MODULE_IDS)})")
        return dataclasses.replace(self, **{k: bool(v) for k, v in flags.items()})


@dataclasses.dataclass(frozen=True)
class Snapshot:
    profile: ProfileSummary
    repositories: tuple[RepositoryRecord, ...] = ()
    events: tuple[ActivityEvent, ...] = ()
    totals: ActivityTotals = ActivityTotals()
    contributions: tuple[ContributionDay, ...] | None = None
