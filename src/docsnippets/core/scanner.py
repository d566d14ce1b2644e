"""Markdown scanner producing the structural events the extractor consumes."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Union

from markdown_it import MarkdownIt
from markdown_it.token import Token


@dataclass(frozen=True)
class HeadingStart:
    level: int
    line: int


@dataclass(frozen=True)
class HeadingEnd:
    level: int
    line: int


@dataclass(frozen=True)
class CodeBlockStart:
    info: str
    line: int


@dataclass(frozen=True)
class CodeBlockEnd:
    line: int


@dataclass(frozen=True)
class Text:
    text: str
    line: int


Event = Union[HeadingStart, HeadingEnd, CodeBlockStart, CodeBlockEnd, Text]

_HEADING_TEXT_TOKENS = {"text"}
_NEWLINES = re.compile(r"\r\n?")


def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def scan(source: str) -> Iterator[Event]:
    """Yield events for headings and fenced code blocks in ``source``.

    Lines are 0-based. Indented code blocks and every other construct produce
    no events. A fence still open at the end of the document yields its start
    and text events but no ``CodeBlockEnd``; one cut short by its container
    (a block quote or list item) ends there.
    """

    lines = _source_lines(source)
    tokens = _parser().parse(source)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type == "heading_open":
            level = int(token.tag[1:])
            start = token.map[0] if token.map else 0
            yield HeadingStart(level=level, line=start)
            inline = tokens[index + 1] if index + 1 < len(tokens) else None
            if inline is not None and inline.type == "inline":
                text = _heading_text(inline)
                if text:
                    yield Text(text=text, line=start)
        elif token.type == "heading_close":
            end = tokens[index - 1].map[1] - 1 if tokens[index - 1].map else 0
            yield HeadingEnd(level=int(token.tag[1:]), line=max(end, 0))
        elif token.type == "fence":
            yield from _fence_events(token, lines)
        index += 1


def _source_lines(source: str) -> List[str]:
    # same numbering as markdown-it token maps
    lines = _NEWLINES.sub("\n", source).split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _heading_text(inline: Token) -> str:
    return "".join(child.content for child in inline.children or () if child.type in _HEADING_TEXT_TOKENS)


def _fence_events(token: Token, lines: Sequence[str]) -> List[Event]:
    start, end = token.map if token.map else (0, 0)
    events: List[Event] = [CodeBlockStart(info=token.info.strip(), line=start)]
    if token.content:
        events.append(Text(text=token.content, line=start + 1))
    if end < len(lines) or _fence_closed(token, lines, start, end):
        events.append(CodeBlockEnd(line=end - 1))
    return events


def _fence_closed(token: Token, lines: Sequence[str], start: int, end: int) -> bool:
    last = end - 1
    if last <= start or last >= len(lines):
        return False
    closing = lines[last].strip().lstrip("> \t")
    marker = token.markup
    if not marker or len(closing) < len(marker):
        return False
    return set(closing) == {marker[0]}
