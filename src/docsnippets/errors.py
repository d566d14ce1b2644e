"""Exception types raised by docsnippets."""
from __future__ import annotations


class DocSnippetsError(Exception):
    """Base class for every error docsnippets raises on purpose."""


class ExtractionError(DocSnippetsError):
    """A documentation file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(DocSnippetsError, ValueError):
    """Invalid run configuration."""


class ToolInvocationError(DocSnippetsError):
    """The external build tool could not be started."""

    def __init__(self, argv, reason: str) -> None:
        command = " ".join(str(part) for part in argv)
        super().__init__(f"failed to start '{command}': {reason}")
        self.argv = list(argv)
        self.reason = reason
