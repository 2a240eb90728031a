"""Scan a project directory into an ordered structure tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from config import CONTENT_FILE, HTML_FILE, OUTPUT_DIR_NAME
from codeslides.models import FileNode, FolderNode, Node

log = logging.getLogger(__name__)

IGNORE_EXACT = {
    "node_modules", ".git", "dist", "build", ".next", "out", "coverage",
    ".cache", ".vscode", ".idea", ".DS_Store", "__pycache__", ".venv",
    ".pytest_cache",
    CONTENT_FILE, HTML_FILE, OUTPUT_DIR_NAME, f"{OUTPUT_DIR_NAME}.zip",
}

IGNORE_SUFFIXES = (".log", ".lock", ".map", ".d.ts", ".pyc")

FILE_ICONS = {
    ".tsx": "ri-reactjs-line",
    ".jsx": "ri-reactjs-line",
    ".ts": "ri-file-code-line",
    ".js": "ri-javascript-line",
    ".svelte": "ri-code-s-slash-line",
    ".vue": "ri-vuejs-line",
    ".py": "ri-file-code-line",
    ".java": "ri-cup-line",
    ".php": "ri-code-marker-line",
    ".html": "ri-html5-line",
    ".css": "ri-css3-line",
    ".scss": "ri-css3-line",
    ".json": "ri-braces-line",
    ".md": "ri-markdown-line",
    ".yml": "ri-settings-4-line",
    ".yaml": "ri-settings-4-line",
    ".toml": "ri-settings-4-line",
    ".xml": "ri-code-line",
    ".sql": "ri-database-2-line",
    ".sh": "ri-terminal-box-line",
}
DEFAULT_ICON = "ri-file-text-line"


def should_ignore(name: str, extra_ignores: Iterable[str] = ()) -> bool:
    if name in IGNORE_EXACT or name in extra_ignores:
        return True
    return name.endswith(IGNORE_SUFFIXES)


def icon_for_filename(name: str) -> str:
    return FILE_ICONS.get(Path(name).suffix.lower(), DEFAULT_ICON)


def scan_directory(
    dir_path: Path,
    max_depth: int = 5,
    current_depth: int = 0,
    *,
    extra_ignores: Iterable[str] = (),
) -> dict[str, Node] | None:
    """
    Return ``{name: node}`` for ``dir_path``, or None when nothing survives.

    Entries are visited in name order so repeated scans agree. Folders whose
    subtree is empty (or beyond ``max_depth``) are left out. Unreadable
    directories are skipped with a warning.
    """
    if current_depth >= max_depth:
        return None

    extra = frozenset(extra_ignores)
    result: dict[str, Node] = {}

    try:
        with os.scandir(dir_path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        print(f"⚠️  Skipping directory \"{dir_path}\": {exc}")
        return None

    for entry in entries:
        name = entry.name
        if should_ignore(name, extra):
            log.debug("ignored %s", entry.path)
            continue

        try:
            is_dir = entry.is_dir()
            is_file = entry.is_file()
        except OSError as exc:
            print(f"⚠️  Skipping \"{entry.path}\": {exc}")
            continue

        if is_dir:
            children = scan_directory(
                Path(entry.path), max_depth, current_depth + 1, extra_ignores=extra
            )
            if children:
                result[name] = FolderNode(children=children)
        elif is_file:
            result[name] = FileNode(icon=icon_for_filename(name))

    return result or None


def build_file_path_map(structure: dict[str, Node], current_path: str = "") -> set[str]:
    """Full path keys of every file node in ``structure``."""
    paths: set[str] = set()
    for name, node in structure.items():
        full_path = f"{current_path}/{name}" if current_path else name
        if isinstance(node, FileNode):
            paths.add(full_path)
        elif isinstance(node, FolderNode):
            paths |= build_file_path_map(node.children, full_path)
    return paths
