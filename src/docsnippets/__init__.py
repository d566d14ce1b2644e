"""docsnippets package initialization."""
from __future__ import annotations

import os

from .version import __version__

__all__ = [
    "__version__",
    "bootstrap",
]

PLUGINS_ENV = "DOCSNIPPETS_PLUGINS"

_BOOTSTRAPPED = False


def bootstrap() -> None:
    """Register the build tools named by ``DOCSNIPPETS_PLUGINS`` (idempotent).

    Raises ``ConfigError`` naming the plugin module that could not be loaded.
    """

    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return
    from .backends import build_tool_manager, load_plugins

    load_plugins(plugin_modules(os.environ.get(PLUGINS_ENV)), build_tool_manager)
    _BOOTSTRAPPED = True


def plugin_modules(value: str | None) -> tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(item.strip() for item in value.split(",") if item.strip())
