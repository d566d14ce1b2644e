"""Result data structures produced by the snippet runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import FAILED, IGNORED, PASSED, TestCase


@dataclass
class CaseResult:
    """Outcome of executing a single test case."""

    case: TestCase
    status: str
    duration_s: float = 0.0
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == PASSED

    @property
    def failed(self) -> bool:
        return self.status == FAILED

    @property
    def name(self) -> str:
        return self.case.name


@dataclass(frozen=True)
class RunSummary:
    total: int = 0
    passed: int = 0
    failed: int = 0
    ignored: int = 0
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @classmethod
    def from_results(cls, results: Sequence[CaseResult], duration_s: float = 0.0) -> "RunSummary":
        return cls(
            total=len(results),
            passed=sum(1 for result in results if result.status == PASSED),
            failed=sum(1 for result in results if result.status == FAILED),
            ignored=sum(1 for result in results if result.status == IGNORED),
            duration_s=duration_s,
        )


@dataclass
class RunReport:
    results: List[CaseResult] = field(default_factory=list)
    summary: RunSummary = field(default_factory=RunSummary)
