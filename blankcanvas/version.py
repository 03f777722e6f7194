"""Version string for ``--version``: installed version plus git commit."""

from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants

PACKAGE_DIR = Path(__file__).resolve().parent


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _git(*args: str) -> Optional[str]:
    """Output of a git command run in the package directory, or None."""
    try:
        out = subprocess.check_output(["git", *args], cwd=PACKAGE_DIR,
                                      stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def get_build_info() -> BuildInfo:
    try:
        version = importlib.metadata.version(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        version = None
    # Only a source checkout has a commit; an installed wheel does not
    if _git("rev-parse", "--show-toplevel") is None:
        return BuildInfo(version=version, commit=None, dirty=False)
    return BuildInfo(
        version=version,
        commit=_git("rev-parse", "HEAD"),
        dirty=_git("status", "--porcelain") is not None,
    )


def get_version_string() -> str:
    """``0.1.0``, or ``0.1.0 (abc1234)`` / ``0.1.0 (abc1234-dirty)`` in a checkout."""
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return version
    suffix = "-dirty" if info.dirty else ""
    return f"{version} ({info.commit[:7]}{suffix})"
