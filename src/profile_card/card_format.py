from __future__ import annotations

import datetime as dt

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def fmt_num(n: int) -> str:
    """Compact count for card text: 999 -> '999', 1234 -> '1.2K', 2500000 -> '2.5M'."""
    n = int(n)
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def trunc(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 1:
        return s[:max_len]
    return s[: max_len - 1] + "…"


def short_date(d: dt.date, *, with_year: bool = False) -> str:
    out = f"{MONTH_NAMES[d.month - 1]} {d.day}"
    if with_year:
        out += f", {d.year}"
    return out


def date_range_label(start: dt.date | None, end: dt.date | None, *, with_year: bool = False) -> str:
    """'Jan 3 - Jan 10'; years are added to both ends when the range crosses a year."""
    if start is None or end is None:
        return ""
    with_year = with_year or start.year != end.year
    return f"{short_date(start, with_year=with_year)} - {short_date(end, with_year=with_year)}"


def fmt_coord(v: float) -> str:
    """Stable SVG coordinate text: at most two decimals, no trailing zeros."""
    s = f"{float(v):.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def estimate_text_width(text: str, size: float, *, bold: bool = False) -> float:
    # Average glyph advance for the sans-serif stacks the palettes use.
    factor = 0.62 if bold else 0.56
    return len(text) * size * factor
