from __future__ import annotations

import json
from pathlib import Path

from .models import MODULE_IDS, DisplayOptions
from .palettes import DEFAULT_PALETTE_NAME


def default_config() -> dict:
    return {
        "palette": DEFAULT_PALETTE_NAME,
        "palettes_path": "",
        "modules": {mid: True for mid in MODULE_IDS},
    }


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        obj = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid config {config_path}: {e}") from e
    if not isinstance(obj, dict):
        raise ValueError(f"Invalid config {config_path}: expected a JSON object")
    return obj


def save_config(config_path: Path, config: dict) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_config_file(config_path: Path) -> dict:
    """Write the default config if `config_path` does not exist yet, then load it."""
    if not config_path.exists():
        save_config(config_path, default_config())
    return load_config(config_path)


def module_name(name: str) -> str:
    """Accept `activity-summary` as well as `activity_summary`."""
    mid = (name or "").strip().lower().replace("-", "_")
    if mid not in MODULE_IDS:
        raise ValueError(f"Unknown module: {name!r} (expected one of {', '.join(MODULE_IDS)})")
    return mid


def palettes_path_from_config(config: dict, *, base_dir: Path) -> Path | None:
    raw = str(config.get("palettes_path", "") or "").strip()
    if not raw:
        return None
    p = Path(raw).expanduser()
    return p if p.is_absolute() else base_dir / p


def display_options_from_config(
    config: dict,
    *,
    palette: str = "",
    show: list[str] | None = None,
    hide: list[str] | None = None,
) -> DisplayOptions:
    """Config file values, then explicit `show` / `hide` / `palette` overrides."""
    flags: dict[str, bool] = {}
    modules = config.get("modules")
    if isinstance(modules, dict):
        for k, v in modules.items():
            flags[module_name(str(k))] = bool(v)
    for name in show or []:
        flags[module_name(name)] = True
    for name in hide or []:
        flags[module_name(name)] = False

    palette_name = (palette or str(config.get("palette", "") or "")).strip() or DEFAULT_PALETTE_NAME
    return DisplayOptions(palette=palette_name).with_modules(**flags)
