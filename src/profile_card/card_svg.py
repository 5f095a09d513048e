from __future__ import annotations

from .card_format import fmt_coord as _c


def escape(s: str) -> str:
    return (
        str(s)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _opacity(opacity: float) -> str:
    return f' opacity="{_c(opacity)}"' if opacity != 1.0 else ""


def svg_open(width: int, height: int) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
    )


def svg_close() -> str:
    return "</svg>\n"


def group_open(x: float, y: float) -> str:
    return f'<g transform="translate({_c(x)}, {_c(y)})">\n'


def group_close() -> str:
    return "</g>\n"


def text(
    x: float,
    y: float,
    content: str,
    *,
    size: float,
    fill: str,
    family: str,
    weight: str = "normal",
    anchor: str = "start",
    opacity: float = 1.0,
    spacing: float = 0,
) -> str:
    ls = f' letter-spacing="{_c(spacing)}"' if spacing else ""
    return (
        f'<text x="{_c(x)}" y="{_c(y)}" font-family="{escape(family)}" font-size="{_c(size)}" '
        f'font-weight="{weight}" fill="{fill}" text-anchor="{anchor}"{ls}{_opacity(opacity)}>'
        f"{escape(content)}</text>\n"
    )


def rect(
    x: float,
    y: float,
    w: float,
    h: float,
    fill: str,
    *,
    rx: float = 0,
    stroke: str | None = None,
    sw: float = 1,
    opacity: float = 1.0,
    title: str = "",
) -> str:
    s = f' stroke="{stroke}" stroke-width="{_c(sw)}"' if stroke else ""
    r = f' rx="{_c(rx)}"' if rx else ""
    head = f'<rect x="{_c(x)}" y="{_c(y)}" width="{_c(w)}" height="{_c(h)}"{r} fill="{fill}"{s}{_opacity(opacity)}'
    if title:
        return f"{head}><title>{escape(title)}</title></rect>\n"
    return f"{head}/>\n"


def circle(
    cx: float,
    cy: float,
    r: float,
    *,
    fill: str = "none",
    stroke: str | None = None,
    sw: float = 1,
    extra: str = "",
) -> str:
    s = f' stroke="{stroke}" stroke-width="{_c(sw)}"' if stroke else ""
    return f'<circle cx="{_c(cx)}" cy="{_c(cy)}" r="{_c(r)}" fill="{fill}"{s}{extra}/>\n'


def line(x1: float, y1: float, x2: float, y2: float, stroke: str, *, sw: float = 1) -> str:
    return f'<line x1="{_c(x1)}" y1="{_c(y1)}" x2="{_c(x2)}" y2="{_c(y2)}" stroke="{stroke}" stroke-width="{_c(sw)}"/>\n'


def icon(x: float, y: float, path_d: str, fill: str, *, size: float = 14) -> str:
    """16x16 octicon-style glyph scaled into a size x size box."""
    return (
        f'<svg x="{_c(x)}" y="{_c(y)}" width="{_c(size)}" height="{_c(size)}" viewBox="0 0 16 16" fill="{fill}">'
        f'<path d="{path_d}"/></svg>\n'
    )
