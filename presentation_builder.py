#!/usr/bin/env python3
"""
PresentationBuilder - scan, reconcile and render one presentation run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import config as cfg
from codeslides.content_store import dumps_content, load_content, write_texts_atomic
from codeslides.deletion_report import detect_deleted_files, print_custom_slides
from codeslides.errors import EmptyScanError
from codeslides.extractor import extract_content_from_structure, merge_missing_content
from codeslides.html_builder import find_template_dir, generate_html, iter_slides
from codeslides.reconciler import InjectionConflict, reconcile
from codeslides.tree_scanner import build_file_path_map, scan_directory


@dataclass
class BuildReport:
    html_path: Path
    content_path: Path
    new_keys: List[str] = field(default_factory=list)
    custom_keys: List[str] = field(default_factory=list)
    conflicts: List[InjectionConflict] = field(default_factory=list)
    slide_count: int = 0


class PresentationBuilder:
    """Turns a project directory into a content file plus an HTML deck."""

    def __init__(
        self,
        project_path: Path,
        output_dir: Optional[Path] = None,
        *,
        max_depth: Optional[int] = None,
        extra_ignores: Iterable[str] = (),
        template_dir: Optional[Path] = None,
    ):
        self.project_path = Path(project_path).resolve()
        self.output_dir = (
            Path(output_dir).resolve() if output_dir else self.project_path / cfg.OUTPUT_DIR_NAME
        )
        self.max_depth = max_depth if max_depth is not None else cfg.get_max_depth()
        self.extra_ignores = [*cfg.get_extra_ignores(), *extra_ignores]
        self.template_dir = template_dir
        self.content_path = self.output_dir / cfg.CONTENT_FILE
        self.html_path = self.output_dir / cfg.HTML_FILE

    def scan(self):
        """Scan the project; an empty result aborts the run."""
        structure = scan_directory(
            self.project_path, self.max_depth, extra_ignores=self.extra_ignores
        )
        if not structure:
            print("❌ No files found")
            raise EmptyScanError(self.project_path)
        print("🔍 Project structure scanned")
        return structure

    def build(self) -> BuildReport:
        """
        Run the whole pipeline. Both artifacts are rendered in memory first,
        so a failure never leaves a half-written pair behind.
        """
        print(f"📁 Project: {self.project_path}")
        print(f"📂 Output:  {self.output_dir}")

        structure = self.scan()
        current_files = build_file_path_map(structure)

        store = load_content(self.content_path)
        custom_keys: List[str] = []
        if store.is_empty():
            print("  ℹ️  Creating new content file...")
        else:
            print("  ℹ️  Loading existing content...")
            custom_keys = detect_deleted_files(store, current_files)
            print_custom_slides(custom_keys)

        result = reconcile(structure, store)
        for conflict in result.conflicts:
            print(f"⚠️  Slide not placed, path blocked: {conflict.describe()}")

        extracted = extract_content_from_structure(result.tree)
        final_store, new_keys = merge_missing_content(store, extracted)
        if new_keys:
            print(f"🆕 {len(new_keys)} new slide(s) added to {self.content_path.name}")

        template_dir = find_template_dir([self.template_dir, cfg.get_template_dir()])
        meta = store.meta
        project_title = (meta.project_title if meta else None) or cfg.DEFAULT_TITLE
        page = generate_html(result.tree, project_title, template_dir, meta)
        content_text = dumps_content(final_store)

        write_texts_atomic([(self.html_path, page), (self.content_path, content_text)])
        print("✅ Slides processed")
        print("✅ HTML generated")

        return BuildReport(
            html_path=self.html_path,
            content_path=self.content_path,
            new_keys=new_keys,
            custom_keys=custom_keys,
            conflicts=list(result.conflicts),
            slide_count=sum(1 for _ in iter_slides(result.tree)),
        )
