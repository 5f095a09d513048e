from __future__ import annotations

import dataclasses
import datetime as dt
import json
from typing import Mapping

from .card_languages import calculate_languages, recolor_languages
from .card_layout import compose_card
from .card_metrics import metrics_from_snapshot
from .card_periods import contribution_window, trailing_period
from .card_streak import reference_today
from .models import (
    MODULE_ACTIVITY_SUMMARY,
    MODULE_CONTRIBUTION_GRID,
    MODULE_GRADE,
    MODULE_LANGUAGES,
    MODULE_STATS,
    CardGeometry,
    DisplayOptions,
    LanguageSlice,
    MetricSet,
    Snapshot,
)
from .palettes import Palette, resolve_palette


@dataclasses.dataclass(frozen=True)
class RenderedCard:
    svg: str
    geometry: CardGeometry
    metrics: MetricSet
    languages: tuple[LanguageSlice, ...]
    palette: Palette

    @property
    def width(self) -> int:
        return self.geometry.width

    @property
    def height(self) -> int:
        return self.geometry.height


def render_card(
    snapshot: Snapshot,
    options: DisplayOptions,
    *,
    now: dt.datetime,
    palettes: Mapping[str, Palette] | None = None,
    metrics: MetricSet | None = None,
    languages: list[LanguageSlice] | tuple[LanguageSlice, ...] | None = None,
) -> RenderedCard:
    """
    Render one card. Pure: identical arguments give byte-identical SVG.

    Pass `metrics` / `languages` from a previous render to switch palette or
    module visibility without re-aggregating the snapshot.
    """
    palette = resolve_palette(options.palette, palettes)
    if metrics is None:
        metrics = metrics_from_snapshot(snapshot, now)
    if languages is None:
        langs = calculate_languages(snapshot.repositories, palette)
    else:
        langs = recolor_languages(languages, palette)
    composed = compose_card(
        profile=snapshot.profile,
        metrics=metrics,
        languages=langs,
        palette=palette,
        options=options,
        contributions=snapshot.contributions,
        now=now,
    )
    return RenderedCard(svg=composed.svg, geometry=composed.geometry, metrics=metrics, languages=tuple(langs), palette=palette)


def project_card(card: RenderedCard, snapshot: Snapshot, options: DisplayOptions, *, now: dt.datetime) -> dict:
    """Machine-readable view of a rendered card, gated by the same module flags."""
    m = card.metrics
    obj: dict = {
        "profile": {"login": snapshot.profile.login, "name": snapshot.profile.display_name},
        "palette": card.palette.name,
        "width": card.width,
        "height": card.height,
    }
    if options.shows(MODULE_STATS):
        obj["stats"] = {
            "stars": m.stars,
            "forks": m.forks,
            "commits": m.commits,
            "pull_requests": m.prs,
            "issues": m.issues,
            "contributed_to": m.contributed_to,
            "followers": m.followers,
            "following": m.following,
            # Recent-window counts can disagree with the all-time totals; both are reported.
            "recent_pull_requests": m.recent_prs,
            "recent_issues": m.recent_issues,
        }
    if options.shows(MODULE_LANGUAGES):
        obj["languages"] = [dataclasses.asdict(s) for s in card.languages]
    if options.shows(MODULE_GRADE):
        obj["grade"] = {"grade": m.grade, "percent": m.grade_percent, "score": m.score}
    if options.shows(MODULE_ACTIVITY_SUMMARY):
        obj["activity"] = {
            "total_contributions": m.total_contributions,
            "total_range": m.total_range,
            "current_streak": m.current_streak,
            "streak_range": m.streak_range,
            "longest_streak": m.longest_streak,
        }
    if options.shows(MODULE_CONTRIBUTION_GRID) and MODULE_CONTRIBUTION_GRID in card.geometry.bands:
        period = trailing_period(reference_today(now))
        window = contribution_window(snapshot.contributions, period)
        obj["contribution_window"] = {"start": period.start.isoformat(), "end": period.last_day.isoformat()}
        obj["contributions"] = [{"date": d.date.isoformat(), "count": d.count, "level": d.level} for d in window]
    return obj


def dumps_projection(obj: dict) -> str:
    return json.dumps(obj, indent=2, sort_keys=True) + "\n"
