"""Run configuration and its YAML loader."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml
from jsonschema import Draft7Validator

from .errors import ConfigError

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_SCRATCH_DIR = "docsnippets_scratch"
DEFAULT_TOOL = "cargo"

CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "docsnippets config",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "root": {"type": "string"},
        "manifest": {"type": "string"},
        "scratch_dir": {"type": "string"},
        "tool": {"type": "string", "minLength": 1},
        "executable": {"type": "string", "minLength": 1},
        "timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "env": {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}},
        "docs": {"type": "array", "items": {"type": "string", "minLength": 1}},
    },
}

_validator = Draft7Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class RunConfig:
    """Everything the pipeline needs to know about where and how to run."""

    root_dir: Path
    manifest_path: Path
    scratch_dir: Path
    tool: str = DEFAULT_TOOL
    executable: str = "cargo"
    timeout: Optional[float] = None
    env: Mapping[str, str] = field(default_factory=dict)
    docs: Sequence[Path] = field(default_factory=tuple)

    @classmethod
    def for_root(cls, root_dir: Path, **overrides: Any) -> "RunConfig":
        root = Path(root_dir).resolve()
        config = cls(
            root_dir=root,
            manifest_path=root / DEFAULT_MANIFEST,
            scratch_dir=root / DEFAULT_SCRATCH_DIR,
        )
        return config.with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-``None`` override applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        for key in ("manifest_path", "scratch_dir"):
            if key in values:
                values[key] = _resolve(values[key], self.root_dir)
        return replace(self, **values)

    def tool_options(self) -> dict:
        return {"executable": self.executable, "env": dict(self.env), "timeout": self.timeout}


def load_config(path: str, *, root_dir: Optional[Path] = None) -> RunConfig:
    """Load and validate a YAML config file.

    Relative paths in the file are resolved against the file's directory.
    """

    config_path = Path(path).expanduser().resolve()
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load config {config_path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Config file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ConfigError(f"Config schema validation failed: {messages}")
    base = config_path.parent
    root = _resolve(raw["root"], base) if "root" in raw else Path(root_dir or base).resolve()
    config = RunConfig.for_root(root)
    return RunConfig(
        root_dir=root,
        manifest_path=_resolve(raw["manifest"], base) if "manifest" in raw else config.manifest_path,
        scratch_dir=_resolve(raw["scratch_dir"], base) if "scratch_dir" in raw else config.scratch_dir,
        tool=str(raw.get("tool", DEFAULT_TOOL)),
        executable=str(raw.get("executable", "cargo")),
        timeout=float(raw["timeout"]) if raw.get("timeout") is not None else None,
        env={str(k): str(v) for k, v in (raw.get("env") or {}).items()},
        docs=tuple(_resolve(item, base) for item in raw.get("docs") or ()),
    )


def _resolve(value: Any, base: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path
