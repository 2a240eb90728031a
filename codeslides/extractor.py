"""Flatten a merged tree back into content records, and merge them into a store."""

from __future__ import annotations

from config import META_KEY
from codeslides.content_store import ContentStore
from codeslides.models import (
    FileNode,
    FolderNode,
    Node,
    SlideContent,
    SlideNode,
    slide_content_to_dict,
)


def extract_content_from_structure(
    structure: dict[str, Node], current_path: str = ""
) -> dict[str, SlideContent]:
    """Every file/slide record keyed by its full path, in tree order."""
    extracted: dict[str, SlideContent] = {}
    for name, node in structure.items():
        full_path = f"{current_path}/{name}" if current_path else name
        if isinstance(node, (FileNode, SlideNode)):
            if node.content is not None:
                extracted[full_path] = node.content
        elif isinstance(node, FolderNode):
            extracted.update(extract_content_from_structure(node.children, full_path))
    return extracted


def merge_missing_content(
    store: ContentStore, extracted: dict[str, SlideContent]
) -> tuple[ContentStore, list[str]]:
    """
    Append extracted records whose key is not stored yet.

    Existing records are never overwritten, so author edits always win over
    freshly synthesized defaults. Returns the new store and the added keys.
    """
    records = dict(store.records)
    raw = store.raw_items()
    added: list[str] = []
    for key, record in extracted.items():
        if key == META_KEY or key in store:
            continue
        records[key] = record
        raw[key] = slide_content_to_dict(record)
        added.append(key)
    return ContentStore(records=records, meta=store.meta, raw=raw), added
