"""Custom build hook for Hatchling to embed the git commit in the package."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


class CustomBuildHook(BuildHookInterface):
    """Write tori/_build_info.py so installed copies can report their commit."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        self._write_build_info()
        build_data.setdefault("artifacts", []).append("tori/_build_info.py")

    def _write_build_info(self) -> None:
        target_path = Path(self.root) / "tori" / "_build_info.py"
        commit = self._run_git(["rev-parse", "HEAD"], cwd=Path(self.root))
        target_path.write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n",
            encoding="utf-8",
        )

    def _run_git(self, args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # Build should not fail just because git is unavailable
            return None
        return out.decode().strip() or None
