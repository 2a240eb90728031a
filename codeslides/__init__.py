"""Reexports the building blocks of the presentation generator."""

from codeslides.content_store import ContentStore, load_content, save_content
from codeslides.deletion_report import detect_deleted_files
from codeslides.extractor import extract_content_from_structure, merge_missing_content
from codeslides.reconciler import (
    InjectionConflict,
    ReconcileResult,
    inject_and_sort,
    inject_virtual_nodes,
    merge_structure_with_content,
    reconcile,
    sort_based_on_content_order,
)
from codeslides.tree_scanner import build_file_path_map, scan_directory

__all__ = [
    "ContentStore",
    "InjectionConflict",
    "ReconcileResult",
    "build_file_path_map",
    "detect_deleted_files",
    "extract_content_from_structure",
    "inject_and_sort",
    "inject_virtual_nodes",
    "load_content",
    "merge_missing_content",
    "merge_structure_with_content",
    "reconcile",
    "save_content",
    "scan_directory",
    "sort_based_on_content_order",
]
