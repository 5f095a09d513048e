from __future__ import annotations

import dataclasses
import datetime as dt
import math
from typing import Iterable

from . import card_svg as svg
from .card_contrib import MIN_GRID_WIDTH, render_contribution_grid
from .card_format import estimate_text_width
from .card_modules import (
    LOGIN_SIZE,
    MARK_SIZE,
    NAME_SIZE,
    render_activity_summary,
    render_grade,
    render_header,
    render_languages,
    render_stats,
)
from .models import (
    MODULE_ACTIVITY_SUMMARY,
    MODULE_CONTRIBUTION_GRID,
    MODULE_GRADE,
    MODULE_IDS,
    MODULE_LANGUAGES,
    MODULE_STATS,
    CardGeometry,
    ContributionDay,
    DisplayOptions,
    LanguageSlice,
    MetricSet,
    ModuleSpec,
    ProfileSummary,
)
from .palettes import Palette

PADDING = 30
MODULE_GAP = 40
MODULE_WIDTHS = {MODULE_STATS: 220, MODULE_LANGUAGES: 320, MODULE_GRADE: 150}

HEADER_HEIGHT = 75
BAND_MARGIN = 10
ROW_HEIGHT = 150
SUMMARY_HEIGHT = 70
SUMMARY_COLUMN_WIDTH = 180
GRID_TRAILING_MARGIN = 10
BOTTOM_MARGIN = 15

MIN_CARD_WIDTH = 360
SUMMARY_MIN_WIDTH = 2 * PADDING + 3 * SUMMARY_COLUMN_WIDTH
CORNER_RADIUS = 16


@dataclasses.dataclass(frozen=True)
class ComposedCard:
    svg: str
    geometry: CardGeometry

    @property
    def width(self) -> int:
        return self.geometry.width

    @property
    def height(self) -> int:
        return self.geometry.height


def module_specs(options: DisplayOptions, *, has_contributions: bool = True) -> list[ModuleSpec]:
    """The fixed module list in declared order, flagged by the display options."""
    out: list[ModuleSpec] = []
    for mid in MODULE_IDS:
        visible = options.shows(mid)
        if mid == MODULE_CONTRIBUTION_GRID and not has_contributions:
            visible = False
        out.append(ModuleSpec(id=mid, visible=visible, width=MODULE_WIDTHS.get(mid)))
    return out


def header_min_width(profile: ProfileSummary) -> int:
    name_w = estimate_text_width(profile.display_name, NAME_SIZE, bold=True)
    login_w = estimate_text_width(f"@{profile.login}", LOGIN_SIZE) if profile.login else 0.0
    need = 2 * PADDING + max(name_w, login_w) + 2 * MARK_SIZE
    return max(MIN_CARD_WIDTH, int(math.ceil(need)))


def row_modules(modules: Iterable[ModuleSpec]) -> list[ModuleSpec]:
    return [m for m in modules if m.visible and not m.full_width]


def band_modules(modules: Iterable[ModuleSpec]) -> list[ModuleSpec]:
    return [m for m in modules if m.visible and m.full_width]


def row_natural_width(row: list[ModuleSpec]) -> int:
    if not row:
        return 0
    return sum(int(m.width or 0) for m in row) + MODULE_GAP * (len(row) - 1)


def card_width(modules: list[ModuleSpec], *, header_min: int) -> int:
    active = {m.id for m in modules if m.visible}
    width = row_natural_width(row_modules(modules)) + 2 * PADDING
    width = max(width, header_min)
    if MODULE_ACTIVITY_SUMMARY in active:
        width = max(width, SUMMARY_MIN_WIDTH)
    if MODULE_CONTRIBUTION_GRID in active:
        width = max(width, MIN_GRID_WIDTH)
    return int(width)


def compute_geometry(modules: list[ModuleSpec], *, width: int, grid_height: int = 0) -> CardGeometry:
    """
    Position every visible module on a canvas of `width`.

    Row modules sit side by side, centered, with a divider in the middle of
    each gap. Full-width bands stack below the row (or directly below the
    header), each preceded by a horizontal rule. Nothing is reserved for
    hidden modules.
    """
    row = row_modules(modules)
    natural = row_natural_width(row)
    offsets: dict[str, float] = {}
    dividers: list[float] = []
    x = (width - natural) / 2
    for i, m in enumerate(row):
        if i:
            dividers.append(x - MODULE_GAP / 2)
        offsets[m.id] = x
        x += int(m.width or 0) + MODULE_GAP

    band_heights: list[tuple[str, int, int]] = []
    if row:
        band_heights.append(("row", ROW_HEIGHT, 0))
    for m in band_modules(modules):
        if m.id == MODULE_ACTIVITY_SUMMARY:
            band_heights.append((m.id, SUMMARY_HEIGHT, 0))
        elif m.id == MODULE_CONTRIBUTION_GRID:
            band_heights.append((m.id, int(grid_height), GRID_TRAILING_MARGIN))

    bands: dict[str, float] = {}
    rules: list[float] = [HEADER_HEIGHT]
    y = float(HEADER_HEIGHT)
    for i, (band_id, height, trailing) in enumerate(band_heights):
        if i:
            rules.append(y)
        y += BAND_MARGIN
        bands[band_id] = y
        y += height + trailing

    return CardGeometry(
        width=int(width),
        height=int(math.ceil(y + BOTTOM_MARGIN)),
        offsets=offsets,
        dividers=tuple(dividers),
        rules=tuple(rules),
        bands=bands,
        row_height=ROW_HEIGHT if row else 0,
    )


def _background(width: int, height: int, palette: Palette) -> str:
    return (
        "<defs>\n"
        '<linearGradient id="bgGrad" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" stop-color="{palette.bg1}"/>'
        f'<stop offset="50%" stop-color="{palette.bg2}"/>'
        f'<stop offset="100%" stop-color="{palette.bg1}"/>'
        "</linearGradient>\n"
        "</defs>\n"
        + svg.rect(0.5, 0.5, width - 1, height - 1, "url(#bgGrad)", rx=CORNER_RADIUS, stroke=palette.border)
    )


def compose_card(
    *,
    profile: ProfileSummary,
    metrics: MetricSet,
    languages: list[LanguageSlice],
    palette: Palette,
    options: DisplayOptions,
    contributions: Iterable[ContributionDay] | None,
    now: dt.datetime,
) -> ComposedCard:
    contributions = list(contributions) if contributions is not None else None
    specs = module_specs(options, has_contributions=bool(contributions))
    width = card_width(specs, header_min=header_min_width(profile))

    grid = None
    if any(m.id == MODULE_CONTRIBUTION_GRID and m.visible for m in specs):
        grid = render_contribution_grid(contributions, width, palette, now)
        if not grid.height:
            # Nothing inside the trailing window: drop the band entirely.
            specs = [dataclasses.replace(m, visible=False) if m.id == MODULE_CONTRIBUTION_GRID else m for m in specs]
            width = card_width(specs, header_min=header_min_width(profile))
            grid = None

    geometry = compute_geometry(specs, width=width, grid_height=grid.height if grid else 0)
    out = svg.svg_open(geometry.width, geometry.height)
    out += _background(geometry.width, geometry.height, palette)
    out += render_header(profile, geometry.width, PADDING, palette)
    for y in geometry.rules:
        out += svg.line(PADDING, y, geometry.width - PADDING, y, palette.line)

    row_y = geometry.bands.get("row")
    for mid, x in geometry.offsets.items():
        w = MODULE_WIDTHS[mid]
        out += svg.group_open(x, row_y or 0)
        if mid == MODULE_STATS:
            out += render_stats(metrics, w, palette)
        elif mid == MODULE_LANGUAGES:
            out += render_languages(languages, w, palette)
        elif mid == MODULE_GRADE:
            out += render_grade(metrics, w, palette)
        out += svg.group_close()
    for x in geometry.dividers:
        out += svg.line(x, row_y or 0, x, (row_y or 0) + geometry.row_height, palette.line)

    if MODULE_ACTIVITY_SUMMARY in geometry.bands:
        out += svg.group_open(0, geometry.bands[MODULE_ACTIVITY_SUMMARY])
        out += render_activity_summary(metrics, geometry.width, PADDING, palette)
        out += svg.group_close()
    if grid is not None and MODULE_CONTRIBUTION_GRID in geometry.bands:
        out += svg.group_open(0, geometry.bands[MODULE_CONTRIBUTION_GRID])
        out += grid.svg
        out += svg.group_close()

    out += svg.svg_close()
    return ComposedCard(svg=out, geometry=geometry)
