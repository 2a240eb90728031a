"""Persistent slide content keyed by project-relative path.

File layout (``presentation-content.json``)::

    {
      "__META__": {"projectTitle": "...", "accentColor": "#58a6ff"},
      "src/cli.py": {"title": "...", "sections": [...]},
      "intro": {"title": "Welcome", "sections": [...]}
    }

Key order is meaningful: it is the slide order authors curate by hand.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from config import META_KEY
from codeslides.models import (
    DeckMeta,
    SlideContent,
    meta_to_dict,
    parse_meta,
    parse_slide_content,
    slide_content_to_dict,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentStore:
    """
    Parsed records for reconciliation plus the stored JSON values.

    ``raw`` keeps every loaded key, in file order, with the value exactly as
    it was stored; saving writes it back untouched. A store built by hand
    without ``raw`` serializes from ``meta`` and ``records`` instead.
    """

    records: dict[str, SlideContent] = field(default_factory=dict)
    meta: DeckMeta | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    def raw_items(self) -> dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        data: dict[str, Any] = {}
        if self.meta is not None:
            data[META_KEY] = meta_to_dict(self.meta)
        for key, record in self.records.items():
            data[key] = slide_content_to_dict(record)
        return data

    def keys(self) -> list[str]:
        source = self.raw if self.raw else self.records
        return [key for key in source if key != META_KEY]

    def get(self, key: str) -> SlideContent | None:
        return self.records.get(key)

    def items(self):
        return self.records.items()

    def __contains__(self, key: object) -> bool:
        return key in self.records or key in self.raw

    def __len__(self) -> int:
        return len(self.records)

    def is_empty(self) -> bool:
        return not self.records and self.meta is None and not self.raw

    def hidden_keys(self) -> set[str]:
        return {key for key, record in self.records.items() if not record.show}


def parse_content(data: Any) -> tuple[ContentStore, list[str]]:
    """Build a store from decoded JSON, collecting validation warnings."""
    warnings: list[str] = []
    if not isinstance(data, dict):
        warnings.append("content file is not a JSON object")
        return ContentStore(), warnings

    records: dict[str, SlideContent] = {}
    meta: DeckMeta | None = None
    for key, raw in data.items():
        if key == META_KEY:
            meta = parse_meta(raw, warnings)
            continue
        record = parse_slide_content(key, raw, warnings)
        if record is not None:
            records[key] = record
    return ContentStore(records=records, meta=meta, raw=dict(data)), warnings


def load_content(content_path: Path) -> ContentStore:
    """
    Load the content file.

    A missing file is an empty store. An unreadable or malformed file is also
    an empty store, with a warning: the store can always be regenerated.
    """
    content_path = Path(content_path)
    if not content_path.exists():
        return ContentStore()

    try:
        data = json.loads(content_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        print(f"⚠️  Could not read content file: {exc}")
        return ContentStore()

    store, warnings = parse_content(data)
    for warning in warnings:
        print(f"⚠️  {warning}")
    log.debug("loaded %d records from %s", len(store), content_path)
    return store


def content_to_dict(store: ContentStore) -> dict[str, Any]:
    return store.raw_items()


def dumps_content(store: ContentStore) -> str:
    return json.dumps(content_to_dict(store), indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(path: Path, text: str) -> None:
    write_texts_atomic([(path, text)])


def write_texts_atomic(files: list[tuple[Path, str]]) -> None:
    """
    Write several files so that none is replaced until all are staged.

    Every temp file is written first; the renames only start once all of
    them succeeded. A failed rename rolls nothing back, but no target is
    left half-written.
    """
    staged: list[tuple[str, Path]] = []
    try:
        for path, text in files:
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=path.name + ".", suffix=".tmp", dir=str(path.parent)
            )
            staged.append((tmp_name, path))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
        for tmp_name, path in staged:
            os.replace(tmp_name, path)
    finally:
        for tmp_name, _ in staged:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)


def save_content(content_path: Path, store: ContentStore) -> None:
    write_text_atomic(content_path, dumps_content(store))
