"""End-to-end pipeline: documents in, reported outcomes out."""
from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .backends import BuildTool, build_tool_manager
from .config import RunConfig
from .core.extractor import extract_cases_from_file
from .core.models import TestCase
from .core.project import ScratchProject
from .core.results import RunReport
from .core.runner import SnippetRunner
from .discovery import find_markdown_files
from .errors import ConfigError, ExtractionError
from .log import log_event
from .reporting import ReportManager, Reporter

PathLike = Union[str, Path]


def collect_cases(
    files: Iterable[PathLike],
    *,
    patterns: Sequence[str] = (),
) -> Tuple[List[TestCase], List[ExtractionError]]:
    """Extract cases from every file, in order, keeping names matching ``patterns``.

    Unreadable files contribute no cases; their errors are returned alongside.
    """

    cases: List[TestCase] = []
    errors: List[ExtractionError] = []
    for path in files:
        try:
            extracted = extract_cases_from_file(path)
        except ExtractionError as exc:
            log_event("warning", "skip-file", path=exc.path, reason=exc.reason)
            errors.append(exc)
            continue
        log_event("debug", "extract", path=path, cases=len(extracted))
        cases.extend(extracted)
    if patterns:
        cases = [case for case in cases if any(fnmatch.fnmatchcase(case.name, pattern) for pattern in patterns)]
    return cases, errors


def create_tool(config: RunConfig) -> BuildTool:
    try:
        return build_tool_manager.create(config.tool, **config.tool_options())
    except KeyError as exc:
        raise ConfigError(str(exc.args[0])) from exc


def run_snippets_in_files(
    config: RunConfig,
    files: Iterable[PathLike],
    *,
    reporters: Sequence[Reporter] = (),
    tool: Optional[BuildTool] = None,
    patterns: Sequence[str] = (),
    fail_fast: bool = False,
) -> RunReport:
    """Extract and execute the snippets of ``files``.

    The summary is reported even when nothing was found. Raises
    ``ToolInvocationError`` when the build tool cannot be started.
    """

    manager = ReportManager(reporters)
    cases, _ = collect_cases(files, patterns=patterns)
    manager.start(cases)
    if not cases:
        report = RunReport()
        manager.complete(report)
        return report
    tool = tool or create_tool(config)
    project = ScratchProject.create(config.scratch_dir, config.manifest_path)
    runner = SnippetRunner(tool, fail_fast=fail_fast)
    report = runner.run(project, cases, on_result=manager.handle_result)
    manager.complete(report)
    return report


def run_snippets_in_dir(config: RunConfig, directory: PathLike, **kwargs) -> RunReport:
    return run_snippets_in_files(config, find_markdown_files(directory), **kwargs)
