"""Locate the repository root that holds mkindex and its helper scripts."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import HomeResolutionError

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent


def resolve_home(override: str | Path | None = None, start: str | Path | None = None) -> Path:
    """
    Return the absolute repository root.

    An explicit ``override`` wins. Otherwise ``git rev-parse --show-toplevel``
    is run from ``start`` (default: this package's directory), so the
    result never depends on the caller's working directory.
    """
    if override:
        home = Path(override).expanduser().resolve()
        if not home.is_dir():
            raise HomeResolutionError(f"Home directory does not exist: {home}")
        logger.debug(f"Using home override {home}")
        return home

    start_dir = Path(start).resolve() if start else PACKAGE_DIR
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=start_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise HomeResolutionError(f"Cannot run git to locate the repository root: {exc}") from exc
    if result.returncode != 0:
        raise HomeResolutionError(
            f"{start_dir} is not inside a git checkout: {result.stderr.strip()}"
        )
    home = Path(result.stdout.strip()).resolve()
    logger.debug(f"Resolved home {home} from {start_dir}")
    return home
