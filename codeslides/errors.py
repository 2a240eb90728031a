from __future__ import annotations

from pathlib import Path


class CodeSlidesError(Exception):
    """Base class for errors that abort a build."""


class EmptyScanError(CodeSlidesError, RuntimeError):
    """Raised when the scan finds no files after ignore filtering."""

    def __init__(self, project_path: Path):
        self.project_path = project_path
        super().__init__(f"No files found or all files were ignored in {project_path}")


class TemplateNotFoundError(CodeSlidesError, FileNotFoundError):
    """Raised when no template directory with an index.html can be found."""

    def __init__(self, searched: list[Path]):
        self.searched = list(searched)
        listing = "\n".join(f"- {path}" for path in self.searched)
        super().__init__(f"Template directory not found. Searched in:\n{listing}")
