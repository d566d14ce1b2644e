"""Build tool abstractions."""
from __future__ import annotations

import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from docsnippets.errors import ToolInvocationError


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.code == 0 and not self.timed_out


class BuildTool:
    """Capability interface for compiling and running a scratch project."""

    name: str = ""

    def check(self, project_dir: Path) -> CommandResult:
        """Verify the project compiles without running it."""

        raise NotImplementedError

    def run(self, project_dir: Path) -> CommandResult:
        """Build and run the project."""

        raise NotImplementedError


def run_command(
    argv: Sequence[str],
    cwd: Path,
    *,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run ``argv`` in ``cwd`` capturing its output.

    Raises:
        ToolInvocationError: when the process cannot be spawned at all.
    """

    merged_env = os.environ.copy()
    if env:
        merged_env.update(env)
    started = time.monotonic()
    try:
        proc = subprocess.run(
            list(argv),
            cwd=str(cwd),
            env=merged_env,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        return CommandResult(
            code=-1,
            stdout=_as_text(exc.stdout),
            stderr=_as_text(exc.stderr) + f"\ntimed out after {timeout}s",
            duration_ms=int((time.monotonic() - started) * 1000),
            timed_out=True,
        )
    except OSError as exc:
        raise ToolInvocationError(argv, str(exc)) from exc
    return CommandResult(
        code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        duration_ms=int((time.monotonic() - started) * 1000),
    )


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


BuildToolFactory = Callable[..., BuildTool]


class BuildToolManager:
    """Registry of build tool factories keyed by name."""

    def __init__(self) -> None:
        self._factories: Dict[str, BuildToolFactory] = {}

    def register(self, name: str, factory: BuildToolFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Build tool '{name}' already registered")
        self._factories[name] = factory

    def create(self, name: str, **options: object) -> BuildTool:
        factory = self._factories.get(name)
        if factory is None:
            available = ", ".join(sorted(self._factories)) or "none"
            raise KeyError(f"No build tool registered as {name!r} (available: {available})")
        return factory(**options)

    def names(self) -> Iterable[str]:
        return tuple(sorted(self._factories))


build_tool_manager = BuildToolManager()
