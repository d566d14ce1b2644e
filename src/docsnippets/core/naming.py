"""Derive stable test names from document paths and section headings."""
from __future__ import annotations

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_EXTENSION_LEN = 3


def sanitize(text: str) -> str:
    """Lowercase ``text`` and collapse every non-alphanumeric run into ``_``.

    Leading and trailing separators are trimmed, so ``sanitize`` is idempotent.
    Distinct inputs may sanitize to the same string (``"A-B"`` and ``"a b"``).
    """

    return _NON_ALNUM.sub("_", text.lower()).strip("_")


def strip_extension(path: str) -> str:
    """Drop a trailing three character extension such as ``.md``."""

    if len(path) > _EXTENSION_LEN and path[-_EXTENSION_LEN] == ".":
        return path[:-_EXTENSION_LEN]
    return path


def base_name(path: str) -> str:
    return sanitize(strip_extension(str(path)))


def derive_name(path: str, section: Optional[str], line: int) -> str:
    base = base_name(path)
    if section:
        return f"{base}_sect_{sanitize(section)}_line_{line}"
    return f"{base}_line_{line}"
