"""Shared test fixtures."""

from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest


def write_profile(
    root: Path,
    profile: str = "default",
    *,
    password: str = "",
    port: int = 5432,
    search_path: str = "public",
    scripts_dir: str = "scripts",
) -> Path:
    path = root / "config" / f"{profile}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "config": {
            "database": {
                "host": "localhost",
                "port": port,
                "name": "mydb",
                "user": "alice",
                "password": password,
                "searchPath": search_path,
            },
            "migrationScriptsDir": scripts_dir,
        },
    }
    path.write_text(json.dumps(payload), "utf-8")
    return path


def write_fake_executable(bin_dir: Path, name: str) -> Path:
    """Install a fake binary that records argv and PGPASSWORD into ``<name>.calls.jsonl``.

    Exits with the code from ``FAKE_EXIT_CODE`` (default 0).
    """

    calls_path = bin_dir / f"{name}.calls.jsonl"
    script = f"""
import json
import os
import sys

with open({str(calls_path)!r}, "a", encoding="utf-8") as handle:
    handle.write(json.dumps({{"argv": sys.argv[1:], "pgpassword": os.environ.get("PGPASSWORD")}}))
    handle.write("\\n")
raise SystemExit(int(os.environ.get("FAKE_EXIT_CODE", "0")))
"""
    implementation = bin_dir / f"{name}_impl.py"
    implementation.write_text(script.strip() + "\n", "utf-8")

    if os.name == "nt":
        launcher = bin_dir / f"{name}.cmd"
        launcher.write_text(
            f'@echo off\r\n"{sys.executable}" "{implementation}" %*\r\n',
            "utf-8",
        )
    else:
        launcher = bin_dir / name
        launcher.write_text(
            f'#!/usr/bin/env sh\nexec "{sys.executable}" "{implementation}" "$@"\n',
            "utf-8",
        )
        launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR)
    return calls_path


def read_calls(calls_path: Path) -> list[dict]:
    if not calls_path.exists():
        return []
    return [json.loads(line) for line in calls_path.read_text("utf-8").splitlines() if line]


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    """Project tree with a default profile and three up / one down script."""

    root = tmp_path / "project"
    write_profile(root)
    up_dir = root / "scripts" / "up"
    down_dir = root / "scripts" / "down"
    up_dir.mkdir(parents=True)
    down_dir.mkdir(parents=True)
    for name in ("003-c.sql", "001-a.sql", "002-b.sql"):
        (up_dir / name).write_text("select 1;\n", "utf-8")
    (down_dir / "001-drop.sql").write_text("select 1;\n", "utf-8")
    return root


@pytest.fixture(autouse=True)
def _clean_pgrate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PGRATE_PROJECT_ROOT",
        "PGRATE_PSQL_EXECUTABLE",
        "PGRATE_CUE_EXECUTABLE",
        "PGRATE_SMOKE_QUERY",
        "PGRATE_STOP_ON_ERROR",
        "FAKE_EXIT_CODE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty directory prepended to PATH for fake psql/cue binaries."""

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return bin_dir
