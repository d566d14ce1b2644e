"""Extract test cases from Markdown documents."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from docsnippets.errors import ExtractionError

from .classifier import parse_info_string
from .models import CodeBlockFlags, TestCase
from .naming import sanitize
from .scanner import CodeBlockEnd, CodeBlockStart, Event, HeadingEnd, HeadingStart, Text, scan

SECTION_LEVELS = (1, 2)
HIDDEN_LINE_MARKER = "#"


@dataclass
class _Empty:
    pass


@dataclass
class _Heading:
    text: str = ""


@dataclass
class _Code:
    flags: CodeBlockFlags
    lines: List[str] = field(default_factory=list)
    start_line: Optional[int] = None


_Buffer = Union[_Empty, _Heading, _Code]


def split_lines(text: str) -> List[str]:
    """Split ``text`` on line feeds only, dropping one trailing carriage return per line."""

    pieces = text.split("\n")
    if pieces and pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def clean_code_line(line: str) -> Optional[str]:
    """Return the line to keep for the program, or ``None`` to drop it.

    ``# foo`` lines hide setup code from rendered docs: the marker is stripped
    and the content kept. Bare ``#`` and blank lines are dropped.
    """

    trimmed = line.strip()
    if trimmed.startswith(HIDDEN_LINE_MARKER + " "):
        return trimmed[len(HIDDEN_LINE_MARKER) + 1 :]
    if trimmed == HIDDEN_LINE_MARKER or not trimmed:
        return None
    return line


def extract_cases(source: str, origin_path: str) -> List[TestCase]:
    """Return the runnable code blocks of ``source`` as test cases, in order."""

    return extract_cases_from_events(scan(source), origin_path)


def extract_cases_from_events(events: Iterable[Event], origin_path: str) -> List[TestCase]:
    cases: List[TestCase] = []
    buffer: _Buffer = _Empty()
    section: Optional[str] = None
    for event in events:
        if isinstance(event, HeadingStart):
            if event.level in SECTION_LEVELS:
                buffer = _Heading()
        elif isinstance(event, HeadingEnd):
            if event.level in SECTION_LEVELS and isinstance(buffer, _Heading):
                section = sanitize(buffer.text) or None
                buffer = _Empty()
        elif isinstance(event, CodeBlockStart):
            flags = parse_info_string(event.info)
            if flags.is_runnable:
                buffer = _Code(flags=flags)
        elif isinstance(event, Text):
            if isinstance(buffer, _Code):
                if buffer.start_line is None:
                    buffer.start_line = event.line
                for line in split_lines(event.text):
                    kept = clean_code_line(line)
                    if kept is not None:
                        buffer.lines.append(kept)
            elif isinstance(buffer, _Heading):
                buffer.text += event.text
        elif isinstance(event, CodeBlockEnd):
            if not isinstance(buffer, _Code):
                continue
            start_line = buffer.start_line if buffer.start_line is not None else event.line
            cases.append(
                TestCase.from_block(
                    buffer.lines,
                    origin_path=origin_path,
                    start_line=start_line,
                    section=section,
                    flags=buffer.flags,
                )
            )
            buffer = _Empty()
    return cases


def extract_cases_from_file(path: Union[str, Path]) -> List[TestCase]:
    """Read ``path`` as UTF-8 and extract its cases.

    Raises:
        ExtractionError: when the file cannot be read or decoded.
    """

    origin = str(path)
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(origin, str(exc)) from exc
    return extract_cases(source, origin)
