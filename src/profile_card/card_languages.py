from __future__ import annotations

import math
from typing import Iterable

from .models import LanguageSlice, RepositoryRecord
from .palettes import Palette

TOP_LANGUAGES = 5
FALLBACK_LANGUAGE_COLOR = "#7a7a7a"

# Muted, balanced colors so no single language dominates the bar.
LANGUAGE_COLORS = {
    "JavaScript": "#a89f6a",
    "TypeScript": "#6a8fad",
    "Python": "#7a8fa5",
    "Java": "#9a7a5a",
    "C++": "#a07080",
    "C": "#707070",
    "C#": "#5a8a5a",
    "Go": "#6a9aa5",
    "Rust": "#a08a7a",
    "Ruby": "#8a5a5a",
    "PHP": "#6a7090",
    "Swift": "#a07060",
    "Kotlin": "#8a7aaa",
    "Dart": "#6a9a95",
    "HTML": "#a07060",
    "CSS": "#7a6a8a",
    "SCSS": "#9a7090",
    "Vue": "#6a9a7a",
    "Shell": "#7a9a6a",
    "PowerShell": "#5a6a7a",
    "Jupyter Notebook": "#8a7a6a",
}


def language_color(name: str, index: int, palette: Palette | None) -> str:
    if palette is not None and palette.chart:
        return palette.chart[index % len(palette.chart)]
    return LANGUAGE_COLORS.get(name, FALLBACK_LANGUAGE_COLOR)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calculate_languages(
    repos: Iterable[RepositoryRecord],
    palette: Palette | None = None,
    *,
    top_n: int = TOP_LANGUAGES,
) -> list[LanguageSlice]:
    counts: dict[str, int] = {}
    for r in repos:
        lang = (r.language or "").strip()
        if not lang:
            continue
        counts[lang] = counts.get(lang, 0) + 1

    # dicts keep first-seen order and sorted() is stable, so ties stay in that order.
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])[:top_n]
    total = sum(c for _, c in ranked)
    if total <= 0:
        return []
    return [
        LanguageSlice(
            name=name,
            count=count,
            percent=_round_half_up(count / total * 100),
            color=language_color(name, i, palette),
        )
        for i, (name, count) in enumerate(ranked)
    ]


def recolor_languages(slices: Iterable[LanguageSlice], palette: Palette | None) -> list[LanguageSlice]:
    """Re-assign colors for a new palette without recounting repositories."""
    return [
        LanguageSlice(name=s.name, count=s.count, percent=s.percent, color=language_color(s.name, i, palette))
        for i, s in enumerate(slices)
    ]
