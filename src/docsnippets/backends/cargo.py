"""Cargo build tool driver."""
from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional

from .base import BuildTool, CommandResult, run_command


class CargoBuildTool(BuildTool):
    """Runs ``cargo check`` and ``cargo run`` inside the scratch project."""

    name = "cargo"

    def __init__(
        self,
        *,
        executable: str = "cargo",
        env: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.executable = executable
        self.env = dict(env or {})
        self.timeout = timeout

    def check(self, project_dir: Path) -> CommandResult:
        return self._invoke(["check"], project_dir)

    def run(self, project_dir: Path) -> CommandResult:
        return self._invoke(["run"], project_dir)

    def _invoke(self, args: List[str], project_dir: Path) -> CommandResult:
        return run_command([self.executable, *args], project_dir, env=self.env, timeout=self.timeout)
