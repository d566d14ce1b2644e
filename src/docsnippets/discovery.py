"""Locate Markdown documents on disk."""
from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, List, Union

MARKDOWN_PATTERN = "*.md"


def find_markdown_files(directory: Union[str, Path]) -> List[Path]:
    """Return every ``*.md`` file below ``directory`` (case-insensitive), sorted."""

    root = Path(directory)
    if not root.is_dir():
        return []
    matches = [
        path
        for path in root.rglob("*")
        if path.is_file() and fnmatch.fnmatchcase(path.name.lower(), MARKDOWN_PATTERN)
    ]
    return sorted(matches)


def expand_paths(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand directories into their Markdown files; keep other paths as given."""

    expanded: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            expanded.extend(find_markdown_files(path))
        else:
            expanded.append(path)
    return expanded
