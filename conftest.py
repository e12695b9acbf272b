"""
Shared fixtures: a fake mkindex home whose scripts/ directory holds tiny
shell scripts standing in for the real helpers.

Every helper appends a line to $INDEX_ROOT/calls and exits with the code
found in its *_EXIT variable (default 0), so a tree's ``env`` block decides
which step fails.
"""
import json
import stat
from pathlib import Path

import pytest

HELPERS = {
    "find-objdir-files.py": 'echo "find-objdir-files" >> "$INDEX_ROOT/calls"\nexit ${FIND_EXIT:-0}\n',
    "objdir-mkdirs.sh": 'echo "objdir-mkdirs" >> "$INDEX_ROOT/calls"\nexit ${MKDIRS_EXIT:-0}\n',
    "crossref.sh": (
        'echo "crossref $1 $2 $#" >> "$INDEX_ROOT/calls"\n'
        'echo "$PYTHONPATH" > "$INDEX_ROOT/pythonpath"\n'
        'exit ${CROSSREF_EXIT:-0}\n'
    ),
}


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_home(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    for name, body in HELPERS.items():
        write_script(home / "scripts" / name, body)
    return home


@pytest.fixture
def index_root(tmp_path: Path) -> Path:
    root = tmp_path / "index"
    root.mkdir()
    return root


@pytest.fixture
def make_config(tmp_path: Path, index_root: Path):
    """Write a config.json with a single tree 'my-tree'; ``env`` goes into the tree entry."""

    def _make(env: dict | None = None, **extra) -> Path:
        tree = {
            "index_path": str(index_root),
            "files_path": str(tmp_path / "files"),
            "objdir_path": str(tmp_path / "objdir"),
            **extra,
        }
        if env:
            tree["env"] = env
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"mozsearch_path": "/unused", "trees": {"my-tree": tree}}))
        return config_path

    return _make


def read_calls(index_root: Path) -> list[str]:
    calls = index_root / "calls"
    if not calls.exists():
        return []
    return calls.read_text().splitlines()


@pytest.fixture
def calls(index_root: Path):
    return lambda: read_calls(index_root)
