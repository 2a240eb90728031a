"""Combine a scanned structure tree with stored slide content.

Pipeline: attach content to files, inject virtual slides for stored keys with
no backing file, then order siblings the way the content file lists them.
Every step returns new dicts; the scanner's tree is never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from codeslides.content_store import ContentStore
from codeslides.models import (
    FileNode,
    FolderNode,
    Node,
    SlideContent,
    SlideNode,
    default_content,
)

log = logging.getLogger(__name__)

Tree = dict[str, Node]


@dataclass(frozen=True)
class InjectionConflict:
    """A stored key that could not be placed in the tree."""

    key: str
    blocked_by: str
    reason: str

    def describe(self) -> str:
        return f"{self.key} ({self.reason}: {self.blocked_by})"


@dataclass(frozen=True)
class ReconcileResult:
    tree: Tree
    conflicts: list[InjectionConflict] = field(default_factory=list)


def _join(current_path: str, name: str) -> str:
    return f"{current_path}/{name}" if current_path else name


def merge_structure_with_content(
    structure: Tree, store: ContentStore, current_path: str = ""
) -> Tree:
    """
    Attach stored (or default) content to every file node.

    Entries whose stored record has ``show`` false are dropped, subtree
    included. Folders left without children are dropped too.
    """
    result: Tree = {}

    for name, node in structure.items():
        full_path = _join(current_path, name)
        record = store.get(full_path)

        if record is not None and not record.show:
            log.debug("hidden: %s", full_path)
            continue

        if isinstance(node, FolderNode):
            children = merge_structure_with_content(node.children, store, full_path)
            if children:
                result[name] = FolderNode(children=children)
            else:
                log.debug("dropped empty folder: %s", full_path)
        elif isinstance(node, FileNode):
            result[name] = FileNode(
                icon=node.icon,
                content=record if record is not None else default_content(name),
            )

    return result


def _has_hidden_ancestor(parts: list[str], hidden: set[str]) -> bool:
    for depth in range(1, len(parts)):
        if "/".join(parts[:depth]) in hidden:
            return True
    return False


def _inject_level(
    level: Tree,
    entries: list[tuple[list[str], str, SlideContent]],
    current_path: str,
    conflicts: list[InjectionConflict],
) -> Tree:
    result: Tree = dict(level)
    pending: dict[str, list[tuple[list[str], str, SlideContent]]] = {}

    for parts, key, record in entries:
        head, rest = parts[0], parts[1:]
        existing = result.get(head)

        if not rest:
            if existing is None:
                log.debug("virtual slide: %s", key)
                result[head] = SlideNode(content=record)
            continue

        if existing is None:
            # Placeholder; filled with its children once the level is walked.
            existing = result[head] = FolderNode()
        if not isinstance(existing, FolderNode):
            conflicts.append(
                InjectionConflict(
                    key=key,
                    blocked_by=_join(current_path, head),
                    reason=f"path is a {existing.type}",
                )
            )
            continue
        pending.setdefault(head, []).append((rest, key, record))

    for head, child_entries in pending.items():
        folder = result[head]
        result[head] = FolderNode(
            children=_inject_level(
                folder.children, child_entries, _join(current_path, head), conflicts
            )
        )

    return result


def inject_virtual_nodes(tree: Tree, store: ContentStore) -> ReconcileResult:
    """
    Add a slide node for every visible stored key with nothing at its path.

    Missing intermediate folders are created. Existing nodes are never
    replaced. A key whose prefix is occupied by a file or slide is reported
    as a conflict instead of being placed.
    """
    hidden = store.hidden_keys()
    conflicts: list[InjectionConflict] = []
    entries: list[tuple[list[str], str, SlideContent]] = []

    for key, record in store.items():
        if not record.show:
            continue
        parts = key.split("/")
        if not all(parts):
            conflicts.append(InjectionConflict(key=key, blocked_by=key, reason="empty path segment"))
            continue
        if _has_hidden_ancestor(parts, hidden):
            log.debug("skipped below hidden folder: %s", key)
            continue
        entries.append((parts, key, record))

    return ReconcileResult(tree=_inject_level(tree, entries, "", conflicts), conflicts=conflicts)


def sort_based_on_content_order(
    level: Tree, store: ContentStore, current_path: str = ""
) -> Tree:
    """
    Order siblings by first mention in the store's key order.

    Siblings the store never mentions keep their current order and go last.
    """
    prefix = f"{current_path}/" if current_path else ""
    defined_order: list[str] = []
    seen: set[str] = set()

    for full_path in store.keys():
        if not full_path.startswith(prefix):
            continue
        root_part = full_path[len(prefix):].split("/", 1)[0]
        if root_part in level and root_part not in seen:
            seen.add(root_part)
            defined_order.append(root_part)

    final_order = defined_order + [name for name in level if name not in seen]

    result: Tree = {}
    for name in final_order:
        node = level[name]
        if isinstance(node, FolderNode):
            node = FolderNode(
                children=sort_based_on_content_order(node.children, store, _join(current_path, name))
            )
        result[name] = node
    return result


def inject_and_sort(tree: Tree, store: ContentStore) -> ReconcileResult:
    injected = inject_virtual_nodes(tree, store)
    return ReconcileResult(
        tree=sort_based_on_content_order(injected.tree, store),
        conflicts=injected.conflicts,
    )


def reconcile(structure: Tree, store: ContentStore) -> ReconcileResult:
    """Attach, inject and sort: the merged tree handed to the renderer."""
    merged = merge_structure_with_content(structure, store)
    return inject_and_sort(merged, store)
