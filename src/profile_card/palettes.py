from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Mapping

DEFAULT_PALETTE_NAME = "dark"


@dataclasses.dataclass(frozen=True)
class Palette:
    name: str
    bg1: str
    bg2: str
    border: str
    title: str
    text: str
    text_muted: str
    text_dim: str
    section: str
    line: str
    accent: str
    empty: str
    font: str = "'Segoe UI', Ubuntu, sans-serif"
    chart: tuple[str, ...] = ()


BUILTIN_PALETTES: dict[str, Palette] = {
    "dark": Palette(
        name="Dark",
        bg1="#0d1117",
        bg2="#161b22",
        border="#30363d",
        title="#58a6ff",
        text="#f0f6fc",
        text_muted="#8b949e",
        text_dim="#6e7681",
        section="#c9d1d9",
        line="#21262d",
        accent="#58a6ff",
        empty="#30363d",
    ),
    "light": Palette(
        name="Light",
        bg1="#ffffff",
        bg2="#f6f8fa",
        border="#d0d7de",
        title="#0969da",
        text="#1f2328",
        text_muted="#656d76",
        text_dim="#8c959f",
        section="#24292f",
        line="#eaeef2",
        accent="#1a7f37",
        empty="#c8d1da",
    ),
    "dracula": Palette(
        name="Dracula",
        bg1="#282a36",
        bg2="#343746",
        border="#44475a",
        title="#ff79c6",
        text="#f8f8f2",
        text_muted="#bd93f9",
        text_dim="#6272a4",
        section="#8be9fd",
        line="#44475a",
        accent="#50fa7b",
        empty="#44475a",
        chart=("#ff79c6", "#bd93f9", "#8be9fd", "#50fa7b", "#f1fa8c"),
    ),
    "nord": Palette(
        name="Nord",
        bg1="#2e3440",
        bg2="#3b4252",
        border="#4c566a",
        title="#88c0d0",
        text="#eceff4",
        text_muted="#d8dee9",
        text_dim="#81a1c1",
        section="#8fbcbb",
        line="#434c5e",
        accent="#a3be8c",
        empty="#4c566a",
        chart=("#88c0d0", "#81a1c1", "#5e81ac", "#a3be8c", "#ebcb8b"),
    ),
    "tokyonight": Palette(
        name="Tokyo Night",
        bg1="#1a1b27",
        bg2="#1f2335",
        border="#292e42",
        title="#70a5fd",
        text="#c0caf5",
        text_muted="#a9b1d6",
        text_dim="#565f89",
        section="#bb9af7",
        line="#292e42",
        accent="#7aa2f7",
        empty="#3b4261",
    ),
}

# JSON palette files use camelCase keys.
_JSON_KEYS = {
    "bg1": "bg1",
    "bg2": "bg2",
    "border": "border",
    "title": "title",
    "text": "text",
    "textMuted": "text_muted",
    "textDim": "text_dim",
    "section": "section",
    "line": "line",
    "accent": "accent",
    "empty": "empty",
    "font": "font",
}


def palette_from_mapping(key: str, raw: Mapping[str, object], *, base: Palette | None = None) -> Palette:
    """
    Build a fully-populated Palette from a loose theme mapping.

    Missing roles are filled from `base` (the default palette). `divider` is
    accepted as an alias of `line`, and a missing `accent` borrows `title`.
    """
    if base is None:
        base = BUILTIN_PALETTES[DEFAULT_PALETTE_NAME]
    values: dict[str, object] = {}
    for src, dst in _JSON_KEYS.items():
        v = raw.get(src)
        if isinstance(v, str) and v.strip():
            values[dst] = v.strip()
    if "line" not in values and isinstance(raw.get("divider"), str):
        values["line"] = str(raw["divider"]).strip()
    if "accent" not in values and "title" in values:
        values["accent"] = values["title"]
    chart = raw.get("chart")
    if isinstance(chart, list):
        values["chart"] = tuple(str(c).strip() for c in chart if isinstance(c, str) and c.strip())
    name = raw.get("name")
    values["name"] = str(name).strip() if isinstance(name, str) and name.strip() else key
    return dataclasses.replace(base, **values)


def load_palettes(path: Path | None) -> dict[str, Palette]:
    """Built-in palettes, extended/overridden by a JSON file of `{key: {...}}` entries."""
    store = dict(BUILTIN_PALETTES)
    if path is None or not path.exists():
        return store
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid palette file {path}: {e}") from e
    if not isinstance(obj, dict):
        raise ValueError(f"Invalid palette file {path}: expected an object of palettes")
    for key, raw in obj.items():
        if isinstance(raw, dict):
            store[str(key)] = palette_from_mapping(str(key), raw)
    return store


def resolve_palette(name: str, store: Mapping[str, Palette] | None = None) -> Palette:
    if store is None:
        store = BUILTIN_PALETTES
    key = (name or "").strip()
    if key in store:
        return store[key]
    if key.lower() in store:
        return store[key.lower()]
    return store.get(DEFAULT_PALETTE_NAME) or BUILTIN_PALETTES[DEFAULT_PALETTE_NAME]
