from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

from docsnippets import bootstrap
from docsnippets.backends import BuildTool, CommandResult
from docsnippets.errors import ToolInvocationError

FAKE_CARGO = """#!__PYTHON__
import pathlib
import sys
import time

mode = sys.argv[1]
source = pathlib.Path("src/main.rs").read_text()
with open(__LOG__, "a") as log:
    log.write(mode + "\\n")
if "fn main" not in source or "compile_error" in source:
    sys.stderr.write("error[E0601]: cannot compile\\n")
    sys.exit(101)
if mode == "check":
    sys.exit(0)
if "sleep_forever" in source:
    time.sleep(30)
if "panic!" in source:
    sys.stderr.write("thread 'main' panicked at src/main.rs\\n")
    sys.exit(101)
print("ran ok")
"""


@pytest.fixture(scope="session", autouse=True)
def setup_docsnippets() -> None:
    """Bootstrap docsnippets once for the entire test session."""

    bootstrap()


class FakeCargo:
    """Executable standing in for cargo; records the subcommands it receives."""

    def __init__(self, path: Path, log: Path) -> None:
        self.path = path
        self.log = log

    def calls(self) -> List[str]:
        if not self.log.exists():
            return []
        return self.log.read_text().split()


@pytest.fixture
def fake_cargo(tmp_path: Path) -> FakeCargo:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    log = tmp_path / "cargo-calls.log"
    script = bin_dir / "cargo"
    script.write_text(
        FAKE_CARGO.replace("__PYTHON__", sys.executable).replace("__LOG__", repr(str(log))),
        encoding="utf-8",
    )
    script.chmod(0o755)
    return FakeCargo(script, log)


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "Cargo.toml"
    path.write_text('[package]\nname = "snippet"\nversion = "0.1.0"\nedition = "2021"\n', encoding="utf-8")
    return path


class FakeBuildTool(BuildTool):
    """In-process build tool deciding outcomes from the program text."""

    name = "fake"

    def __init__(self, *, broken: bool = False, **_: object) -> None:
        self.broken = broken
        self.calls: List[str] = []
        self.programs: List[str] = []

    def check(self, project_dir: Path) -> CommandResult:
        return self._invoke("check", project_dir)

    def run(self, project_dir: Path) -> CommandResult:
        return self._invoke("run", project_dir)

    def _invoke(self, mode: str, project_dir: Path) -> CommandResult:
        if self.broken:
            raise ToolInvocationError(["fake", mode], "No such file or directory")
        program = (project_dir / "src" / "main.rs").read_text(encoding="utf-8")
        self.calls.append(mode)
        self.programs.append(program)
        if "compile_error" in program:
            return CommandResult(code=101, stderr="error: could not compile")
        if mode == "run" and "panic!" in program:
            return CommandResult(code=101, stdout="partial", stderr="thread 'main' panicked")
        return CommandResult(code=0, stdout="ok")


@pytest.fixture
def fake_tool() -> FakeBuildTool:
    return FakeBuildTool()


@pytest.fixture
def broken_tool() -> FakeBuildTool:
    return FakeBuildTool(broken=True)
