from __future__ import annotations

import datetime as dt
import json

from profile_card.card_render import dumps_projection, project_card, render_card
from profile_card.models import DisplayOptions
from profile_card.palettes import BUILTIN_PALETTES
from profile_card.snapshot import parse_snapshot

NOW = dt.datetime(2026, 3, 10, 12, 0, tzinfo=dt.timezone.utc)


def _snapshot_obj() -> dict:
    return {
        "profile": {"login": "octo", "name": "Octo Cat", "followers": 20, "following": 3},
        "repositories": [
            {"stargazers_count": 10, "forks_count": 2, "language": "Python"},
            {"stargazers_count": 5, "forks_count": 1, "language": "Python"},
            {"stargazers_count": 0, "forks_count": 0, "language": "Go"},
        ],
        "events": [
            {"type": "PushEvent", "repo": {"name": "octo/one"}, "created_at": "2026-03-10T09:00:00Z", "payload": {"size": 3}},
            {"type": "PullRequestEvent", "repo": {"name": "octo/two"}, "created_at": "2026-03-09T09:00:00Z"},
            {"type": "IssuesEvent", "repo": {"name": "octo/two"}, "created_at": "2026-03-08T09:00:00Z"},
        ],
        "totals": {"commits": 50, "pull_requests": {"total_count": 0}, "issues": 0},
        "contributions": [
            {"date": "2026-03-08", "count": 1},
            {"date": "2026-03-09", "count": 4},
            {"date": "2026-03-10", "count": 2},
        ],
    }


def test_render_is_deterministic() -> None:
    snap = parse_snapshot(_snapshot_obj())
    a = render_card(snap, DisplayOptions(), now=NOW)
    b = render_card(snap, DisplayOptions(), now=NOW)
    assert a.svg == b.svg
    assert a.svg.startswith("<svg ")
    assert f'width="{a.width}" height="{a.height}"' in a.svg
    assert a.width == 830
    assert "RANK" in a.svg
    assert "Total Contributions" in a.svg
    assert "2026-03-09: 4 contributions" in a.svg


def test_hidden_grade_shrinks_card() -> None:
    snap = parse_snapshot(_snapshot_obj())
    card = render_card(snap, DisplayOptions(grade=False), now=NOW)
    assert card.width == 640
    assert "RANK" not in card.svg


def test_palette_switch_reuses_aggregates() -> None:
    snap = parse_snapshot(_snapshot_obj())
    first = render_card(snap, DisplayOptions(), now=NOW)
    second = render_card(
        snap,
        DisplayOptions(palette="dracula"),
        now=NOW,
        metrics=first.metrics,
        languages=first.languages,
    )
    dracula = BUILTIN_PALETTES["dracula"]
    assert second.metrics is first.metrics
    assert second.palette is dracula
    assert dracula.bg1 in second.svg
    assert [s.name for s in second.languages] == ["Python", "Go"]
    assert second.languages[0].color == dracula.chart[0]
    assert second.geometry == first.geometry


def test_unknown_palette_uses_default() -> None:
    snap = parse_snapshot(_snapshot_obj())
    card = render_card(snap, DisplayOptions(palette="no-such"), now=NOW)
    assert card.palette is BUILTIN_PALETTES["dark"]


def test_missing_calendar_omits_grid() -> None:
    obj = _snapshot_obj()
    del obj["contributions"]
    card = render_card(parse_snapshot(obj), DisplayOptions(), now=NOW)
    assert "contribution_grid" not in card.geometry.bands
    assert "</title></rect>" not in card.svg
    # Falls back to commits + pull requests + issues.
    assert card.metrics.total_contributions == 50


def test_text_is_escaped() -> None:
    obj = _snapshot_obj()
    obj["profile"]["name"] = "<Bob & Co>"
    card = render_card(parse_snapshot(obj), DisplayOptions(), now=NOW)
    assert "&lt;Bob &amp; Co&gt;" in card.svg
    assert "<Bob" not in card.svg


def test_projection_follows_module_flags() -> None:
    snap = parse_snapshot(_snapshot_obj())
    options = DisplayOptions(languages=False, contribution_grid=False)
    card = render_card(snap, options, now=NOW)
    obj = project_card(card, snap, options, now=NOW)
    assert set(obj) == {"profile", "palette", "width", "height", "stats", "grade", "activity"}
    assert obj["stats"]["pull_requests"] == 0
    assert obj["stats"]["recent_pull_requests"] == 1
    assert obj["activity"]["total_contributions"] == 7
    assert obj["activity"]["current_streak"] == 3


def test_projection_includes_window_days() -> None:
    snap = parse_snapshot(_snapshot_obj())
    card = render_card(snap, DisplayOptions(), now=NOW)
    obj = json.loads(dumps_projection(project_card(card, snap, DisplayOptions(), now=NOW)))
    assert [d["date"] for d in obj["contributions"]] == ["2026-03-08", "2026-03-09", "2026-03-10"]
    assert obj["contribution_window"] == {"start": "2025-03-11", "end": "2026-03-10"}
    assert obj["languages"][0]["name"] == "Python"
    assert obj["languages"][0]["percent"] == 67
