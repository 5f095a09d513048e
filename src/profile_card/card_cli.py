from __future__ import annotations

import argparse
import datetime as dt
import sys
from pathlib import Path

from .card_render import dumps_projection, project_card, render_card
from .config import display_options_from_config, load_config, palettes_path_from_config
from .palettes import load_palettes
from .snapshot import load_snapshot, parse_timestamp


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a profile activity snapshot into a single SVG summary card.")
    parser.add_argument("--snapshot", type=Path, required=True, help="Path to a fetched activity snapshot (JSON).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--out", type=Path, default=Path("card.svg"), help="Where to write the SVG card.")
    parser.add_argument("--json", type=Path, default=None, help="Also write the machine-readable projection here.")
    parser.add_argument("--palette", type=str, default="", help="Palette name (overrides `palette` in config).")
    parser.add_argument("--palettes", type=Path, default=None, help="JSON file with extra palettes (overrides `palettes_path`).")
    parser.add_argument("--show", type=str, nargs="+", default=[], help="Modules to show (stats, languages, grade, activity-summary, contribution-grid).")
    parser.add_argument("--hide", type=str, nargs="+", default=[], help="Modules to hide.")
    parser.add_argument(
        "--now",
        type=str,
        default="",
        help="Reference timestamp (ISO 8601). Its timezone defines calendar days; default is the current UTC time.",
    )
    return parser


def _split_csv_args(values: list[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def _reference_now(raw: str) -> dt.datetime:
    if str(raw or "").strip():
        return parse_timestamp(raw, field="--now")
    return dt.datetime.now(dt.timezone.utc)


def run_render(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
        options = display_options_from_config(
            config,
            palette=str(args.palette or ""),
            show=_split_csv_args(args.show),
            hide=_split_csv_args(args.hide),
        )
        palettes_path = args.palettes or palettes_path_from_config(config, base_dir=args.config.resolve().parent)
        palettes = load_palettes(palettes_path)
        now = _reference_now(args.now)
        snapshot = load_snapshot(args.snapshot)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.palette not in palettes and options.palette.lower() not in palettes:
        print(f"Warning: unknown palette {options.palette!r}; using the default palette.", file=sys.stderr)

    card = render_card(snapshot, options, now=now, palettes=palettes)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(card.svg, encoding="utf-8")
    print(f"Wrote {args.out} ({card.width}x{card.height}, palette={card.palette.name}, grade={card.metrics.grade})")
    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(dumps_projection(project_card(card, snapshot, options, now=now)), encoding="utf-8")
        print(f"Wrote {args.json}")
    return 0


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return run_render(args)
