"""Build tool plugins loaded from user-supplied modules."""
from __future__ import annotations

import importlib
from typing import Iterable

from docsnippets.errors import ConfigError
from docsnippets.log import log_event

from .base import BuildToolManager


def load_plugins(module_names: Iterable[str], manager: BuildToolManager) -> None:
    """Import each module and hand ``manager`` to its ``register`` function.

    A plugin registers its tools with ``manager.register(name, factory)``.
    """

    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ConfigError(f"cannot import build tool plugin {module_name!r}: {exc}") from exc
        register = getattr(module, "register", None)
        if not callable(register):
            raise ConfigError(f"build tool plugin {module_name!r} has no register(manager) function")
        before = set(manager.names())
        try:
            register(manager)
        except ValueError as exc:
            raise ConfigError(f"build tool plugin {module_name!r} failed to register: {exc}") from exc
        added = sorted(set(manager.names()) - before)
        log_event("debug", "plugin", module=module_name, tools=",".join(added) or "none")
