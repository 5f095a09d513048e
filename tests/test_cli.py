from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from profile_card import cli


def _write_snapshot(tmp_path: Path) -> Path:
    p = tmp_path / "snapshot.json"
    p.write_text(
        json.dumps(
            {
                "profile": {"login": "octo", "followers": 2},
                "repositories": [{"stargazers_count": 3, "language": "Go"}],
                "events": [{"type": "PushEvent", "repo": {"name": "octo/x"}, "created_at": "2026-03-10T08:00:00Z"}],
                "contributions": [{"date": "2026-03-10", "count": 2}],
            }
        ),
        encoding="utf-8",
    )
    return p


def test_root_help_mentions_commands(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(Path(__file__).resolve().parents[1] / "src")
    proc = subprocess.run(
        [sys.executable, "-m", "profile_card", "--help"], cwd=str(tmp_path), env=env, text=True, capture_output=True
    )
    assert proc.returncode == 0, proc.stderr
    assert "palettes" in proc.stdout
    assert "init-config" in proc.stdout
    assert "--snapshot" in proc.stdout


def test_render_writes_svg_and_projection(tmp_path: Path, capsys) -> None:
    snap = _write_snapshot(tmp_path)
    out = tmp_path / "out" / "card.svg"
    proj = tmp_path / "out" / "card.json"
    rc = cli.main(
        [
            "render",
            "--snapshot", str(snap),
            "--config", str(tmp_path / "config.json"),
            "--out", str(out),
            "--json", str(proj),
            "--palette", "nord",
            "--hide", "languages,grade",
            "--now", "2026-03-10T12:00:00Z",
        ]
    )
    assert rc == 0
    assert out.read_text(encoding="utf-8").startswith("<svg ")
    obj = json.loads(proj.read_text(encoding="utf-8"))
    assert obj["palette"] == "Nord"
    assert "languages" not in obj
    assert "grade" not in obj
    assert obj["activity"]["current_streak"] == 1
    assert "palette=Nord" in capsys.readouterr().out


def test_render_rejects_bad_snapshot(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "snapshot.json"
    bad.write_text("not json", encoding="utf-8")
    rc = cli.main(["--snapshot", str(bad), "--config", str(tmp_path / "config.json"), "--out", str(tmp_path / "c.svg")])
    assert rc == 2
    assert capsys.readouterr().err.startswith("Error: Invalid snapshot")
    assert not (tmp_path / "c.svg").exists()


def test_unknown_palette_warns_but_renders(tmp_path: Path, capsys) -> None:
    snap = _write_snapshot(tmp_path)
    rc = cli.main(
        [
            "--snapshot", str(snap),
            "--config", str(tmp_path / "config.json"),
            "--out", str(tmp_path / "card.svg"),
            "--palette", "neon",
            "--now", "2026-03-10T12:00:00Z",
        ]
    )
    assert rc == 0
    captured = capsys.readouterr()
    assert "unknown palette 'neon'" in captured.err
    assert "palette=Dark" in captured.out


def test_palettes_and_init_config(tmp_path: Path, capsys) -> None:
    assert cli.main(["palettes"]) == 0
    out = capsys.readouterr().out
    assert "dracula" in out
    assert "tokyonight" in out

    cfg = tmp_path / "config.json"
    assert cli.main(["init-config", "--config", str(cfg)]) == 0
    assert json.loads(cfg.read_text(encoding="utf-8"))["palette"] == "dark"
    assert "Wrote new config" in capsys.readouterr().out
    assert cli.main(["init-config", "--config", str(cfg)]) == 0
    assert "already exists" in capsys.readouterr().out


def test_render_rejects_non_list_collections(tmp_path: Path, capsys) -> None:
    for obj in ({"profile": {}, "repositories": 5}, {"profile": {}, "events": 3}, {"contributions": {"weeks": 7}}):
        snap = tmp_path / "snapshot.json"
        snap.write_text(json.dumps(obj), encoding="utf-8")
        rc = cli.main(["--snapshot", str(snap), "--config", str(tmp_path / "config.json"), "--out", str(tmp_path / "c.svg")])
        assert rc == 2
        assert "must be a list" in capsys.readouterr().err
    assert not (tmp_path / "c.svg").exists()
