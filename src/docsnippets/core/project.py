"""Disposable scratch project every snippet is compiled in."""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, Optional

from docsnippets.errors import ConfigError

MANIFEST_NAME = "Cargo.toml"
PROGRAM_PATH = Path("src") / "main.rs"
MARKER_NAME = ".docsnippets-scratch"


class ScratchProject:
    """A build-tool project with a single program file that gets overwritten."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @property
    def main_file(self) -> Path:
        return self.root / PROGRAM_PATH

    @property
    def manifest(self) -> Path:
        return self.root / MANIFEST_NAME

    @classmethod
    def create(cls, root: Path, manifest_path: Path) -> "ScratchProject":
        """Lay out ``root`` and seed it with a copy of ``manifest_path``.

        ``root`` is deleted again by :meth:`remove`, so an existing non-empty
        directory is only accepted when an earlier run left it behind.
        """

        manifest_path = Path(manifest_path)
        if not manifest_path.is_file():
            raise ConfigError(f"build manifest not found: {manifest_path}")
        project = cls(root)
        if project.root.exists() and not project._is_reusable():
            raise ConfigError(f"scratch directory {project.root} already exists and was not created by docsnippets")
        project.main_file.parent.mkdir(parents=True, exist_ok=True)
        (project.root / MARKER_NAME).touch()
        shutil.copyfile(manifest_path, project.manifest)
        return project

    def _is_reusable(self) -> bool:
        if not self.root.is_dir():
            return False
        return (self.root / MARKER_NAME).is_file() or not any(self.root.iterdir())

    def write_program(self, lines: Iterable[str]) -> Path:
        self.main_file.write_text("\n".join(lines), encoding="utf-8")
        return self.main_file

    def remove(self) -> Optional[str]:
        """Delete the project directory; return a warning message on failure."""

        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            return None
        except OSError as exc:
            return f"failed to remove scratch project {self.root}: {exc}"
        return None
