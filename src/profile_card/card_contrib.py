from __future__ import annotations

import dataclasses
import datetime as dt
import math
from typing import Iterable

from . import card_svg as svg
from .card_format import MONTH_NAMES
from .card_periods import contribution_window, month_starts, trailing_period
from .card_streak import reference_today
from .models import ContributionDay
from .palettes import Palette

GRID_PADDING = 30
MONTH_LABEL_HEIGHT = 16
MONTH_LABEL_SIZE = 10
MIN_LABEL_SPACING = 30
MIN_GAP = 2.0
GAP_RATIO = 0.15
EMPTY_OPACITY = 0.5
LEVEL_OPACITY = {1: 0.2, 2: 0.4, 3: 0.7, 4: 1.0}
# Narrowest grid that still leaves a few pixels per cell for a full year.
MIN_GRID_WIDTH = 2 * GRID_PADDING + 53 * 10


@dataclasses.dataclass(frozen=True)
class GridRender:
    svg: str
    height: int
    weeks: int = 0
    cell: float = 0.0
    gap: float = 0.0
    labels: tuple[tuple[float, str], ...] = ()


def weekday_row(d: dt.date) -> int:
    """Row of a day in the grid; weeks start on Sunday (row 0)."""
    return (d.weekday() + 1) % 7


def cell_metrics(available_width: float, weeks: int) -> tuple[float, float, float]:
    """(per_week, cell, gap): the last cell ends flush with the right padding."""
    inner = max(0.0, float(available_width) - 2 * GRID_PADDING)
    if weeks <= 0:
        return 0.0, 0.0, MIN_GAP
    gap = max(MIN_GAP, inner / weeks * GAP_RATIO)
    # W cells and W-1 gaps span the inner width.
    per_week = (inner + gap) / weeks
    cell = max(0.0, per_week - gap)
    return per_week, cell, gap


def month_label(d: dt.date) -> str:
    name = MONTH_NAMES[d.month - 1]
    return f"{name} {d.year}" if d.month == 1 else name


def cell_style(level: int, palette: Palette) -> tuple[str, float]:
    level = max(0, min(4, int(level)))
    if level == 0:
        return palette.empty, EMPTY_OPACITY
    return palette.accent, LEVEL_OPACITY[level]


def render_contribution_grid(
    days: Iterable[ContributionDay] | None,
    available_width: float,
    palette: Palette,
    now: dt.datetime,
) -> GridRender:
    """
    Lay the trailing year of `days` out as a week x weekday grid.

    The returned SVG fragment is in local coordinates (origin at the band's
    top-left corner); `height` is the band height it occupies.
    """
    window = contribution_window(days, trailing_period(reference_today(now)))
    if not window:
        return GridRender(svg="", height=0)

    first = window[0].date
    offset = weekday_row(first)
    # Columns follow the calendar; missing days leave holes.
    span = (window[-1].date - first).days + 1
    weeks = math.ceil((span + offset) / 7)
    per_week, cell, gap = cell_metrics(available_width, weeks)
    height = int(math.ceil(MONTH_LABEL_HEIGHT + 7 * per_week))

    parts: list[str] = []
    labels: list[tuple[float, str]] = []
    last_x: float | None = None
    for d in month_starts(window):
        col = ((d - first).days + offset) // 7
        x = GRID_PADDING + col * per_week
        if last_x is not None and x - last_x < MIN_LABEL_SPACING:
            continue
        label = month_label(d)
        labels.append((x, label))
        parts.append(
            svg.text(x, MONTH_LABEL_HEIGHT - 5, label, size=MONTH_LABEL_SIZE, fill=palette.text_dim, family=palette.font)
        )
        last_x = x

    for d in window:
        col = ((d.date - first).days + offset) // 7
        row = weekday_row(d.date)
        fill, opacity = cell_style(d.level, palette)
        noun = "contribution" if d.count == 1 else "contributions"
        parts.append(
            svg.rect(
                GRID_PADDING + col * per_week,
                MONTH_LABEL_HEIGHT + row * per_week,
                cell,
                cell,
                fill,
                rx=min(2.0, cell / 4),
                opacity=opacity,
                title=f"{d.date.isoformat()}: {d.count} {noun}",
            )
        )

    return GridRender(svg="".join(parts), height=height, weeks=weeks, cell=cell, gap=gap, labels=tuple(labels))
