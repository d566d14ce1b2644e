"""Fenced code block info string classification."""
from __future__ import annotations

import re

from .models import CodeBlockFlags

_SEPARATOR = re.compile(r"[^\w-]")

RUST = "rust"
SHOULD_PANIC = "should_panic"
IGNORE = "ignore"
NO_RUN = "no_run"


def parse_info_string(info: str) -> CodeBlockFlags:
    """Classify ``info`` (the text after the opening fence).

    A block is runnable only when it is tagged ``rust``; unknown tags disable it
    unless at least one recognized tag is present as well.
    """

    is_rust = expect_panic = skip = check_only = False
    seen_known = seen_other = False
    for token in _SEPARATOR.split(info or ""):
        if not token:
            continue
        if token == RUST:
            is_rust = True
            seen_known = True
        elif token == SHOULD_PANIC:
            expect_panic = True
            seen_known = True
        elif token == IGNORE:
            skip = True
            seen_known = True
        elif token == NO_RUN:
            check_only = True
            seen_known = True
        else:
            seen_other = True
    return CodeBlockFlags(
        is_runnable=is_rust and (not seen_other or seen_known),
        expect_panic=expect_panic,
        skip=skip,
        check_only=check_only,
    )
