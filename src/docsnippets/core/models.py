"""Core dataclasses shared across docsnippets subsystems."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .naming import derive_name

PASSED = "passed"
FAILED = "failed"
IGNORED = "ignored"
OUTCOMES = (PASSED, FAILED, IGNORED)


@dataclass(frozen=True)
class CodeBlockFlags:
    """Classification of a fenced block's info string."""

    is_runnable: bool = False
    expect_panic: bool = False
    skip: bool = False
    check_only: bool = False


@dataclass(frozen=True)
class TestCase:
    """One code sample extracted from a documentation file."""

    __test__ = False  # keep pytest from collecting this class

    text: Tuple[str, ...]
    origin_path: str
    start_line: int
    section: Optional[str] = None
    skip: bool = False
    check_only: bool = False
    expect_panic: bool = False

    @property
    def name(self) -> str:
        return derive_name(self.origin_path, self.section, self.start_line)

    @property
    def mode(self) -> str:
        if self.skip:
            return "skip"
        if self.check_only:
            return "check"
        return "run"

    @classmethod
    def from_block(
        cls,
        lines: Iterable[str],
        *,
        origin_path: str,
        start_line: int,
        section: Optional[str],
        flags: CodeBlockFlags,
    ) -> "TestCase":
        return cls(
            text=tuple(lines),
            origin_path=origin_path,
            start_line=start_line,
            section=section,
            skip=flags.skip,
            check_only=flags.check_only,
            expect_panic=flags.expect_panic,
        )
