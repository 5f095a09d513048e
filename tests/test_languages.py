from __future__ import annotations

import dataclasses

from profile_card.card_languages import FALLBACK_LANGUAGE_COLOR, LANGUAGE_COLORS, calculate_languages, recolor_languages
from profile_card.models import RepositoryRecord
from profile_card.palettes import BUILTIN_PALETTES


def _repos(*langs: str | None) -> list[RepositoryRecord]:
    return [RepositoryRecord(language=lang) for lang in langs]


def test_single_language_is_whole_share() -> None:
    out = calculate_languages(_repos("X", "X", None))
    assert [(s.name, s.count, s.percent) for s in out] == [("X", 2, 100)]


def test_top_five_with_truncated_denominator() -> None:
    repos = _repos(*(["A"] * 3 + ["B"] * 3 + ["C"] * 2 + ["D", "E", "F", "G"]))
    out = calculate_languages(repos)
    assert [s.name for s in out] == ["A", "B", "C", "D", "E"]
    # Percentages are shares of the top five (10 repos), not of all 12.
    assert [s.percent for s in out] == [30, 30, 20, 10, 10]


def test_ties_keep_first_seen_order() -> None:
    out = calculate_languages(_repos("B", "A", "B", "A", "C"))
    assert [s.name for s in out] == ["B", "A", "C"]


def test_percent_sum_stays_near_hundred() -> None:
    samples = [
        _repos("A", "B", "C"),
        _repos("A", "B", "C", "D", "E", "F"),
        _repos("A", *(["B"] * 7)),
        _repos("A", "A", "B", "C", "C", "C", "D", "E", "E"),
    ]
    for repos in samples:
        out = calculate_languages(repos)
        assert len(out) <= 5
        assert 97 <= sum(s.percent for s in out) <= 103


def test_half_percent_rounds_up() -> None:
    out = calculate_languages(_repos("A", *(["B"] * 7)))
    assert {s.name: s.percent for s in out} == {"B": 88, "A": 13}


def test_no_languages() -> None:
    assert calculate_languages([]) == []
    assert calculate_languages(_repos(None, "", "  ")) == []


def test_colors_prefer_palette_series() -> None:
    palette = dataclasses.replace(BUILTIN_PALETTES["dark"], chart=("#111111", "#222222"))
    out = calculate_languages(_repos("A", "A", "B", "C"), palette)
    assert [s.color for s in out] == ["#111111", "#222222", "#111111"]


def test_colors_fall_back_to_table_then_gray() -> None:
    out = calculate_languages(_repos("Python", "Python", "Zig"), BUILTIN_PALETTES["dark"])
    assert out[0].color == LANGUAGE_COLORS["Python"]
    assert out[1].color == FALLBACK_LANGUAGE_COLOR


def test_recolor_keeps_counts() -> None:
    out = calculate_languages(_repos("Python", "Go"))
    again = recolor_languages(out, BUILTIN_PALETTES["dracula"])
    assert [(s.name, s.count, s.percent) for s in again] == [(s.name, s.count, s.percent) for s in out]
    assert [s.color for s in again] == list(BUILTIN_PALETTES["dracula"].chart[:2])
