from __future__ import annotations

from typing import Iterable

from config import META_KEY
from codeslides.content_store import ContentStore


def detect_deleted_files(store: ContentStore, current_files: Iterable[str]) -> list[str]:
    """
    Stored keys with no file behind them, in store order.

    This covers hand-written virtual slides and records of deleted files
    alike. Nothing is removed from the store.
    """
    existing = set(current_files)
    return [key for key in store.keys() if key != META_KEY and key not in existing]


def print_custom_slides(custom_keys: list[str]) -> None:
    if not custom_keys:
        return
    print("\n✨ Custom/Virtual Slides detected (preserved from JSON):")
    for key in custom_keys:
        print(f"   - {key}")
