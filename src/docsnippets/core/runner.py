"""Sequential execution of extracted snippets in a shared scratch project."""
from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from docsnippets.backends import BuildTool, CommandResult
from docsnippets.log import log_event

from .models import FAILED, IGNORED, PASSED, TestCase
from .project import ScratchProject
from .results import CaseResult, RunReport, RunSummary

ResultCallback = Callable[[CaseResult, int, int], None]


class SnippetRunner:
    """Executes test cases one after another through a build tool.

    Every case overwrites the same program file, so cases never run
    concurrently. The scratch project is removed once the run ends, even when
    the build tool could not be started.
    """

    def __init__(self, tool: BuildTool, *, fail_fast: bool = False) -> None:
        self._tool = tool
        self._fail_fast = fail_fast

    def run(
        self,
        project: ScratchProject,
        cases: Sequence[TestCase],
        *,
        on_result: Optional[ResultCallback] = None,
    ) -> RunReport:
        results: List[CaseResult] = []
        total = len(cases)
        start = time.perf_counter()
        try:
            for index, case in enumerate(cases, start=1):
                result = self.run_case(project, case)
                results.append(result)
                if on_result:
                    on_result(result, index, total)
                if self._fail_fast and result.failed:
                    break
        finally:
            warning = project.remove()
            if warning:
                log_event("warning", "cleanup", detail=warning)
        summary = RunSummary.from_results(results, time.perf_counter() - start)
        return RunReport(results=results, summary=summary)

    def run_case(self, project: ScratchProject, case: TestCase) -> CaseResult:
        if case.skip:
            log_event("debug", "ignore", case=case.name)
            return CaseResult(case=case, status=IGNORED)
        start = time.perf_counter()
        project.write_program(case.text)
        if case.check_only:
            log_event("debug", "check", case=case.name)
            outcome = self._tool.check(project.root)
            status, error = _classify_check(outcome)
        else:
            log_event("debug", "run", case=case.name, expect_panic=case.expect_panic)
            outcome = self._tool.run(project.root)
            status, error = _classify_run(outcome, expect_panic=case.expect_panic)
        return CaseResult(
            case=case,
            status=status,
            duration_s=time.perf_counter() - start,
            stdout=outcome.stdout if status == FAILED else "",
            stderr=outcome.stderr if status == FAILED else "",
            error=error,
        )


def _classify_check(outcome: CommandResult) -> tuple[str, Optional[str]]:
    if outcome.ok:
        return PASSED, None
    if outcome.timed_out:
        return FAILED, "build timed out"
    return FAILED, f"failed to compile (exit code {outcome.code})"


def _classify_run(outcome: CommandResult, *, expect_panic: bool) -> tuple[str, Optional[str]]:
    if outcome.timed_out:
        return FAILED, "timed out"
    if expect_panic:
        if outcome.ok:
            return FAILED, "expected to panic but exited successfully"
        return PASSED, None
    if outcome.ok:
        return PASSED, None
    return FAILED, f"exited with code {outcome.code}"
