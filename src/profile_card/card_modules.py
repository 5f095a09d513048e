from __future__ import annotations

import math

from . import card_svg as svg
from .card_format import fmt_coord, fmt_num, trunc
from .models import LanguageSlice, MetricSet, ProfileSummary
from .palettes import Palette

ICON_STAR = (
    "M8 .25a.75.75 0 01.673.418l1.882 3.815 4.21.612a.75.75 0 01.416 1.279l-3.046 2.97.719 4.192a.75.75 0 01-1.088.791"
    "L8 12.347l-3.766 1.98a.75.75 0 01-1.088-.79l.72-4.194L.818 6.374a.75.75 0 01.416-1.28l4.21-.611L7.327.668A.75.75 0 018 .25z"
)
ICON_FORK = (
    "M5 3.25a.75.75 0 11-1.5 0 .75.75 0 011.5 0zm0 2.122a2.25 2.25 0 10-1.5 0v.878A2.25 2.25 0 005.75 8.5h1.5v2.128a2.251 "
    "2.251 0 101.5 0V8.5h1.5a2.25 2.25 0 002.25-2.25v-.878a2.25 2.25 0 10-1.5 0v.878a.75.75 0 01-.75.75h-4.5A.75.75 0 015 "
    "6.25v-.878zm3.75 7.378a.75.75 0 11-1.5 0 .75.75 0 011.5 0zm3-8.75a.75.75 0 100-1.5.75.75 0 000 1.5z"
)
ICON_COMMITS = (
    "M1.643 3.143L.427 1.927A.25.25 0 000 2.104V5.75c0 .138.112.25.25.25h3.646a.25.25 0 00.177-.427L2.715 4.215a6.5 6.5 0 "
    "11-1.18 4.458.75.75 0 10-1.493.154 8.001 8.001 0 101.6-5.684zM7.75 4a.75.75 0 01.75.75v2.992l2.028.812a.75.75 0 "
    "01-.557 1.392l-2.5-1A.75.75 0 017 8.25v-3.5A.75.75 0 017.75 4z"
)
ICON_PULL_REQUEST = (
    "M7.177 3.073L9.573.677A.25.25 0 0110 .854v4.792a.25.25 0 01-.427.177L7.177 3.427a.25.25 0 010-.354zM3.75 2.5a.75.75 0 "
    "100 1.5.75.75 0 000-1.5zm-2.25.75a2.25 2.25 0 113 2.122v5.256a2.251 2.251 0 11-1.5 0V5.372A2.25 2.25 0 011.5 3.25zM11 "
    "2.5h-1V4h1a1 1 0 011 1v5.628a2.251 2.251 0 101.5 0V5A2.5 2.5 0 0011 2.5zm1 10.25a.75.75 0 111.5 0 .75.75 0 01-1.5 0zM3.75 "
    "12a.75.75 0 100 1.5.75.75 0 000-1.5z"
)
ICON_ISSUE = "M8 9.5a1.5 1.5 0 100-3 1.5 1.5 0 000 3zM8 0a8 8 0 110 16A8 8 0 018 0zM1.5 8a6.5 6.5 0 1013 0 6.5 6.5 0 00-13 0z"
ICON_REPO = (
    "M2 2.5A2.5 2.5 0 014.5 0h8.75a.75.75 0 01.75.75v12.5a.75.75 0 01-.75.75h-2.5a.75.75 0 110-1.5h1.75v-2h-8a1 1 0 "
    "00-.714 1.7.75.75 0 01-1.072 1.05A2.495 2.495 0 012 11.5v-9zm10.5-1V9h-8c-.356 0-.694.074-1 .208V2.5a1 1 0 011-1h8zM5 "
    "12.25v3.25a.25.25 0 00.4.2l1.45-1.087a.25.25 0 01.3 0L8.6 15.7a.25.25 0 00.4-.2v-3.25a.25.25 0 00-.25-.25h-3.5a.25.25 0 "
    "00-.25.25z"
)
GITHUB_MARK = (
    "M12 0c-6.626 0-12 5.373-12 12 0 5.302 3.438 9.8 8.207 11.387.599.111.793-.261.793-.577v-2.234c-3.338.726-4.033-1.416"
    "-4.033-1.416-.546-1.387-1.333-1.756-1.333-1.756-1.089-.745.083-.729.083-.729 1.205.084 1.839 1.237 1.839 1.237 1.07 "
    "1.834 2.807 1.304 3.492.997.107-.775.418-1.305.762-1.604-2.665-.305-5.467-1.334-5.467-5.931 0-1.311.469-2.381 "
    "1.236-3.221-.124-.303-.535-1.524.117-3.176 0 0 1.008-.322 3.301 1.23.957-.266 1.983-.399 3.003-.404 1.02.005 2.047.138 "
    "3.006.404 2.291-1.552 3.297-1.23 3.297-1.23.653 1.653.242 2.874.118 3.176.77.84 1.235 1.911 1.235 3.221 0 4.609-2.807 "
    "5.624-5.479 5.921.43.372.823 1.102.823 2.222v3.293c0 .319.192.694.801.576 4.765-1.589 8.199-6.086 8.199-11.386 "
    "0-6.627-5.373-12-12-12z"
)

NAME_SIZE = 22
LOGIN_SIZE = 13
MARK_SIZE = 29
STAT_ROW_HEIGHT = 22
RING_RADIUS = 55
RING_WIDTH = 8
LANG_BAR_HEIGHT = 8
LANG_LEGEND_COLUMNS = 3


def render_header(profile: ProfileSummary, width: float, padding: float, palette: Palette) -> str:
    out = svg.text(padding, 40, profile.display_name, size=NAME_SIZE, weight="bold", fill=palette.title, family=palette.font)
    if profile.login:
        out += svg.text(padding, 60, f"@{profile.login}", size=LOGIN_SIZE, fill=palette.text_dim, family=palette.font)
    scale = MARK_SIZE / 24
    out += (
        f'<path transform="translate({fmt_coord(width - padding - MARK_SIZE)}, 20) scale({fmt_coord(scale)})" '
        f'fill="{palette.title}" d="{GITHUB_MARK}"/>\n'
    )
    return out


def stat_rows(metrics: MetricSet) -> list[tuple[str, str, int]]:
    return [
        (ICON_STAR, "Total Stars", metrics.stars),
        (ICON_FORK, "Total Forks", metrics.forks),
        (ICON_COMMITS, "Total Commits", metrics.commits),
        (ICON_PULL_REQUEST, "Pull Requests", metrics.prs),
        (ICON_ISSUE, "Issues", metrics.issues),
        (ICON_REPO, "Contributed to", metrics.contributed_to),
    ]


def render_stats(metrics: MetricSet, width: float, palette: Palette) -> str:
    out = ""
    for i, (path_d, label, value) in enumerate(stat_rows(metrics)):
        y = i * STAT_ROW_HEIGHT
        out += svg.group_open(0, y)
        out += svg.icon(0, 3, path_d, palette.text_muted)
        out += svg.text(20, 16, label, size=14, fill=palette.text_muted, family=palette.font)
        out += svg.text(width, 16, fmt_num(value), size=14, weight="bold", fill=palette.text, family=palette.font, anchor="end")
        out += svg.group_close()
    return out


def render_languages(languages: list[LanguageSlice], width: float, palette: Palette) -> str:
    out = svg.text(
        0, 16, "TOP LANGUAGES", size=13, weight="bold", fill=palette.section, family=palette.font, spacing=1
    )
    if not languages:
        out += svg.text(0, 48, "No language data", size=12, fill=palette.text_dim, family=palette.font)
        return out

    out += (
        f'<defs><clipPath id="langBarClip"><rect x="0" y="35" width="{fmt_coord(width)}" '
        f'height="{LANG_BAR_HEIGHT}" rx="4"/></clipPath></defs>\n'
    )
    out += svg.rect(0, 35, width, LANG_BAR_HEIGHT, palette.line, rx=4)
    out += '<g clip-path="url(#langBarClip)">\n'
    x = 0.0
    for lang in languages:
        seg = lang.percent / 100 * width
        out += svg.rect(x, 35, seg, LANG_BAR_HEIGHT, lang.color)
        x += seg
    out += svg.group_close()

    col_w = width / LANG_LEGEND_COLUMNS
    max_chars = max(4, int(col_w // 8) - 4)
    for i, lang in enumerate(languages):
        out += svg.group_open((i % LANG_LEGEND_COLUMNS) * col_w, 60 + (i // LANG_LEGEND_COLUMNS) * 22)
        out += svg.circle(5, 5, 5, fill=lang.color)
        out += svg.text(14, 9, f"{trunc(lang.name, max_chars)} {lang.percent}%", size=11, fill=palette.text_muted, family=palette.font)
        out += svg.group_close()
    return out


def render_grade(metrics: MetricSet, width: float, palette: Palette) -> str:
    cx = width / 2
    cy = RING_RADIUS + RING_WIDTH + 2
    circumference = 2 * math.pi * RING_RADIUS
    dash_offset = circumference - (metrics.grade_percent / 100) * circumference
    out = svg.circle(cx, cy, RING_RADIUS, stroke=palette.line, sw=RING_WIDTH)
    out += svg.circle(
        cx,
        cy,
        RING_RADIUS,
        stroke=palette.accent,
        sw=RING_WIDTH,
        extra=(
            f' stroke-dasharray="{fmt_coord(circumference)}" stroke-dashoffset="{fmt_coord(dash_offset)}"'
            f' stroke-linecap="round" transform="rotate(-90 {fmt_coord(cx)} {fmt_coord(cy)})"'
        ),
    )
    out += svg.text(cx, cy + 12, metrics.grade, size=36, weight="bold", fill=palette.accent, family=palette.font, anchor="middle")
    out += svg.text(cx, cy + RING_RADIUS + 22, "RANK", size=11, fill=palette.text_dim, family=palette.font, anchor="middle")
    return out


def summary_columns(metrics: MetricSet) -> list[tuple[str, str, str]]:
    return [
        (fmt_num(metrics.total_contributions), "Total Contributions", metrics.total_range),
        (fmt_num(metrics.current_streak), "Current Streak", metrics.streak_range or "No recent activity"),
        (fmt_num(metrics.longest_streak), "Longest Streak", "Recent activity"),
    ]


def render_activity_summary(metrics: MetricSet, width: float, padding: float, palette: Palette) -> str:
    columns = summary_columns(metrics)
    col_w = (width - 2 * padding) / len(columns)
    out = ""
    for i, (value, label, sub) in enumerate(columns):
        x = padding + col_w * i
        if i:
            out += svg.line(x, 6, x, 62, palette.line)
        cx = x + col_w / 2
        out += svg.text(cx, 26, value, size=22, weight="bold", fill=palette.text, family=palette.font, anchor="middle")
        out += svg.text(cx, 46, label, size=12, fill=palette.text_muted, family=palette.font, anchor="middle")
        if sub:
            out += svg.text(cx, 62, sub, size=10, fill=palette.text_dim, family=palette.font, anchor="middle")
    return out
