"""Diagnostic event logging routed through click."""
from __future__ import annotations

import click

_VERBOSE = False


def set_verbose(enabled: bool) -> None:
    global _VERBOSE
    _VERBOSE = bool(enabled)


def log_event(level: str, action: str, **fields: object) -> None:
    """Write a single ``[level] action key=value`` line to stderr.

    ``debug`` events are dropped unless verbose output was requested.
    """

    if level == "debug" and not _VERBOSE:
        return
    extras = " ".join(f"{key}={value}" for key, value in fields.items())
    click.echo(f"[{level}] {action} {extras}".strip(), err=True)
