from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

__version__ = "0.1.0"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=cwd or os.getcwd(), stderr=subprocess.DEVNULL
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def _from_git_repo() -> Optional[BuildInfo]:
    here = str(Path(__file__).resolve().parent)
    if _run_git(["rev-parse", "--show-toplevel"], cwd=here) is None:
        return None
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    status = _run_git(["status", "--porcelain"], cwd=here)
    return BuildInfo(commit=commit, dirty=bool(status))


def _from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    return BuildInfo(commit=commit, dirty=False) if commit else None


def get_build_info() -> BuildInfo:
    # Priority: live git repo -> embedded file -> unknown
    for getter in (_from_git_repo, _from_embedded_file):
        info = getter()
        if info and info.commit:
            return info
    return BuildInfo(commit=None, dirty=False)


def get_version_string() -> str:
    info = get_build_info()
    if info.commit is None:
        return f"tori {__version__}"
    dirty_suffix = "-dirty" if info.dirty else ""
    # Use short (7-character) git hashes
    return f"tori {__version__} ({info.commit[:7]}{dirty_suffix})"
