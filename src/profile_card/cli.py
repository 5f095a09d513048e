from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import card_cli
from .config import ensure_config_file
from .palettes import load_palettes


def list_palettes(palettes_path: Path | None) -> int:
    try:
        store = load_palettes(palettes_path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    for key in sorted(store):
        print(f"{key:14} {store[key].name}")
    return 0


def init_config(config_path: Path) -> int:
    existed = config_path.exists()
    try:
        ensure_config_file(config_path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    print(f"{'Config already exists' if existed else 'Wrote new config'}: {config_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        p = card_cli._build_parser()
        p.prog = "profile-card"
        p.print_help()
        print("")
        print("commands:")
        print("  render         Render a snapshot into an SVG card (default).")
        print("  palettes       List the available palettes.")
        print("  init-config    Write a default config.json.")
        print("")
        print("Run `profile-card <command> --help` for command-specific options.")
        return 0
    if argv[0] == "palettes":
        p = argparse.ArgumentParser(prog="profile-card palettes", description="List the available palettes.")
        p.add_argument("--palettes", type=Path, default=None, help="JSON file with extra palettes.")
        args = p.parse_args(argv[1:])
        return list_palettes(args.palettes)
    if argv[0] == "init-config":
        p = argparse.ArgumentParser(prog="profile-card init-config", description="Write a default config.json.")
        p.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
        args = p.parse_args(argv[1:])
        return init_config(args.config)
    if argv[0] == "render":
        argv = argv[1:]
    return card_cli.main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
