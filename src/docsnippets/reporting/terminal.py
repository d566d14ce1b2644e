"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

from typing import Sequence

import click
from colorama import Fore, Style, just_fix_windows_console

from docsnippets.core.models import FAILED, IGNORED, PASSED, TestCase
from docsnippets.core.results import CaseResult, RunReport

from .base import Reporter

STATUS_COLORS = {
    PASSED: Fore.GREEN,
    FAILED: Fore.RED,
    IGNORED: Fore.YELLOW,
}

STATUS_LABELS = {
    PASSED: "PASS",
    FAILED: "FAIL",
    IGNORED: "IGNORED",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        if use_color:
            just_fix_windows_console()

    def on_start(self, cases: Sequence[TestCase]) -> None:
        documents = len({case.origin_path for case in cases})
        click.echo(self._paint(f"Running {len(cases)} snippet(s) from {documents} document(s)", Fore.CYAN))

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        label = self._paint(f"{STATUS_LABELS.get(result.status, result.status.upper()):<7}", STATUS_COLORS.get(result.status))
        ms = result.duration_s * 1000
        click.echo(f"[{index}/{total}] {label} {result.name} ({ms:.0f} ms)")
        if result.failed:
            self._print_failure_details(result)

    def on_complete(self, report: RunReport) -> None:
        summary = report.summary
        color = Fore.GREEN if summary.ok else Fore.RED
        click.echo(
            self._paint(
                f"Summary: total={summary.total} passed={summary.passed} failed={summary.failed} "
                f"ignored={summary.ignored} duration={summary.duration_s:.2f}s",
                color,
            )
        )
        failed = [result.name for result in report.results if result.failed]
        if failed:
            click.echo(self._paint("Failed snippets:", Fore.RED))
            for name in failed:
                click.echo(f"  {name}")

    def _paint(self, text: str, color: str | None) -> str:
        if not self._use_color or not color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _print_failure_details(self, result: CaseResult, *, indent: str = "    ") -> None:
        case = result.case
        click.echo(f"{indent}source: {case.origin_path}:{case.start_line + 1} mode={case.mode}")
        if result.error:
            click.echo(f"{indent}reason: {result.error}")
        for label, text in (("stdout", result.stdout), ("stderr", result.stderr)):
            text = text.rstrip()
            if not text:
                continue
            click.echo(f"{indent}{label}:")
            for line in text.splitlines():
                click.echo(f"{indent}  {line}")
