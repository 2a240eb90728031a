"""Slide content and structure tree types.

Content records are closed tagged variants. Raw JSON from the content file is
validated here; anything malformed falls back to defaults instead of being
passed through untyped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

LAYOUTS = ("linear", "split")
SLOTS = ("left", "right")
LIST_STYLES = ("bullets", "numbered")

PLACEHOLDER_ITEMS = ("Add description...", "More details...")

_RECORD_FIELDS = {"title", "layout", "show", "sections"}
_META_FIELDS = {"projectTitle", "accentColor", "backgroundColor"}


@dataclass(frozen=True)
class TextSection:
    body: str
    slot: str | None = None
    kind = "text"


@dataclass(frozen=True)
class ListSection:
    items: tuple[str, ...]
    style: str = "bullets"
    slot: str | None = None
    kind = "list"


@dataclass(frozen=True)
class CodeSection:
    lines: tuple[str, ...]
    language: str = "text"
    slot: str | None = None
    kind = "code"


@dataclass(frozen=True)
class ImageRef:
    src: str
    width: int | str | None = None


@dataclass(frozen=True)
class ImagesSection:
    images: tuple[ImageRef, ...]
    slot: str | None = None
    kind = "images"


Section = Union[TextSection, ListSection, CodeSection, ImagesSection]


@dataclass(frozen=True)
class SlideContent:
    title: str
    sections: tuple[Section, ...] = ()
    layout: str = "linear"
    show: bool = True


@dataclass(frozen=True)
class DeckMeta:
    project_title: str | None = None
    accent_color: str | None = None
    background_color: str | None = None


@dataclass(frozen=True)
class FolderNode:
    children: dict[str, "Node"] = field(default_factory=dict)
    type = "folder"


@dataclass(frozen=True)
class FileNode:
    icon: str
    content: SlideContent | None = None
    type = "file"


@dataclass(frozen=True)
class SlideNode:
    content: SlideContent
    type = "slide"


Node = Union[FolderNode, FileNode, SlideNode]


def default_content(filename: str) -> SlideContent:
    """Content synthesized for a file that has no stored record yet."""
    return SlideContent(
        title=filename,
        sections=(
            TextSection(body=f"File: {filename}"),
            ListSection(items=PLACEHOLDER_ITEMS),
        ),
    )


def resolve_slot(section: Section) -> str:
    """Column a section goes to under the split layout."""
    if section.slot in SLOTS:
        return section.slot
    return "right" if isinstance(section, ImagesSection) else "left"


# --- Parsing -----------------------------------------------------------------


def _as_str_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _parse_slot(raw: dict[str, Any]) -> str | None:
    slot = raw.get("slot")
    return slot if slot in SLOTS else None


def _parse_width(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _parse_image(raw: Any) -> ImageRef | None:
    if isinstance(raw, str) and raw.strip():
        return ImageRef(src=raw.strip())
    if isinstance(raw, dict) and isinstance(raw.get("src"), str) and raw["src"].strip():
        return ImageRef(src=raw["src"].strip(), width=_parse_width(raw.get("width")))
    return None


def parse_section(raw: Any, warnings: list[str] | None = None) -> Section | None:
    """Parse one section, returning None for anything unusable."""
    if not isinstance(raw, dict):
        if warnings is not None:
            warnings.append("section is not an object")
        return None

    kind = raw.get("type")
    slot = _parse_slot(raw)

    if kind == "text":
        body = raw.get("body")
        return TextSection(body=str(body) if body is not None else "", slot=slot)

    if kind == "list":
        style = raw.get("style")
        return ListSection(
            items=_as_str_list(raw.get("items")),
            style=style if style in LIST_STYLES else "bullets",
            slot=slot,
        )

    if kind == "code":
        lines = raw.get("lines")
        if isinstance(lines, str):
            parsed_lines = tuple(lines.split("\n"))
        else:
            parsed_lines = _as_str_list(lines)
        language = raw.get("language")
        return CodeSection(
            lines=parsed_lines,
            language=language if isinstance(language, str) and language else "text",
            slot=slot,
        )

    if kind == "images":
        raw_images = raw.get("images")
        images = []
        if isinstance(raw_images, list):
            for item in raw_images:
                image = _parse_image(item)
                if image is not None:
                    images.append(image)
        return ImagesSection(images=tuple(images), slot=slot)

    if warnings is not None:
        warnings.append(f"unknown section type {kind!r}")
    return None


def parse_slide_content(
    key: str, raw: Any, warnings: list[str] | None = None
) -> SlideContent | None:
    """
    Validate one stored record.

    Returns None when the value is not an object at all; the caller treats
    the key as absent. Field-level problems fall back to defaults and are
    appended to ``warnings``.
    """
    if not isinstance(raw, dict):
        if warnings is not None:
            warnings.append(f"{key}: record is not an object")
        return None

    notes: list[str] = []

    unknown = sorted(set(raw) - _RECORD_FIELDS)
    if unknown:
        notes.append(f"ignoring unknown fields {', '.join(unknown)}")

    title = raw.get("title")
    if not isinstance(title, str):
        title = key.rsplit("/", 1)[-1]

    layout = raw.get("layout", "linear")
    if layout not in LAYOUTS:
        notes.append(f"unknown layout {layout!r}")
        layout = "linear"

    show = raw.get("show", True)
    if not isinstance(show, bool):
        notes.append("show is not a boolean")
        show = True

    sections: list[Section] = []
    raw_sections = raw.get("sections", [])
    if not isinstance(raw_sections, list):
        notes.append("sections is not a list")
        raw_sections = []
    for raw_section in raw_sections:
        section = parse_section(raw_section, notes)
        if section is not None:
            sections.append(section)

    if warnings is not None:
        warnings.extend(f"{key}: {note}" for note in notes)

    return SlideContent(title=title, sections=tuple(sections), layout=layout, show=show)


def parse_meta(raw: Any, warnings: list[str] | None = None) -> DeckMeta | None:
    if not isinstance(raw, dict):
        if warnings is not None:
            warnings.append("deck metadata is not an object")
        return None

    unknown = sorted(set(raw) - _META_FIELDS)
    if unknown and warnings is not None:
        warnings.append(f"deck metadata: ignoring unknown fields {', '.join(unknown)}")

    def _str_or_none(name: str) -> str | None:
        value = raw.get(name)
        return value if isinstance(value, str) and value.strip() else None

    return DeckMeta(
        project_title=_str_or_none("projectTitle"),
        accent_color=_str_or_none("accentColor"),
        background_color=_str_or_none("backgroundColor"),
    )


# --- Serialization -----------------------------------------------------------


def section_to_dict(section: Section) -> dict[str, Any]:
    data: dict[str, Any] = {"type": section.kind}
    if isinstance(section, TextSection):
        data["body"] = section.body
    elif isinstance(section, ListSection):
        data["style"] = section.style
        data["items"] = list(section.items)
    elif isinstance(section, CodeSection):
        data["language"] = section.language
        data["lines"] = list(section.lines)
    elif isinstance(section, ImagesSection):
        images = []
        for image in section.images:
            entry: dict[str, Any] = {"src": image.src}
            if image.width is not None:
                entry["width"] = image.width
            images.append(entry)
        data["images"] = images
    if section.slot is not None:
        data["slot"] = section.slot
    return data


def slide_content_to_dict(content: SlideContent) -> dict[str, Any]:
    return {
        "title": content.title,
        "layout": content.layout,
        "show": content.show,
        "sections": [section_to_dict(section) for section in content.sections],
    }


def meta_to_dict(meta: DeckMeta) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if meta.project_title is not None:
        data["projectTitle"] = meta.project_title
    if meta.accent_color is not None:
        data["accentColor"] = meta.accent_color
    if meta.background_color is not None:
        data["backgroundColor"] = meta.background_color
    return data


def node_to_dict(node: Node) -> dict[str, Any]:
    """Shape consumed by the viewer: type plus children or icon/content."""
    if isinstance(node, FolderNode):
        return {"type": node.type, "children": tree_to_dict(node.children)}
    data: dict[str, Any] = {"type": node.type}
    if isinstance(node, FileNode):
        data["icon"] = node.icon
    if node.content is not None:
        data["content"] = slide_content_to_dict(node.content)
    return data


def tree_to_dict(tree: dict[str, Node]) -> dict[str, Any]:
    return {name: node_to_dict(node) for name, node in tree.items()}
