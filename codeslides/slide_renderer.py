"""Render slide content to static HTML fragments."""

from __future__ import annotations

import html
import re

import markdown

from codeslides.models import (
    CodeSection,
    ImagesSection,
    ListSection,
    Section,
    SlideContent,
    TextSection,
    resolve_slot,
)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "attr_list"]
DEFAULT_IMAGE_WIDTH = "400px"

_SINGLE_PARAGRAPH_RE = re.compile(r"^<p>(.*)</p>$", re.DOTALL)


def markdown_block(text: str) -> str:
    text = text.replace("\xa0", " ")
    try:
        return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html5")
    except Exception as e:
        print(f"⚠️  Markdown conversion failed, retrying without extensions: {e}")
        return markdown.markdown(text, output_format="html5")


def markdown_inline(text: str) -> str:
    """Markdown for a single list item: no wrapping paragraph."""
    rendered = markdown_block(text).strip()
    match = _SINGLE_PARAGRAPH_RE.match(rendered)
    return match.group(1) if match else rendered


def _width_style(width: int | str | None) -> str:
    if width is None:
        return DEFAULT_IMAGE_WIDTH
    if isinstance(width, int):
        return f"{width}px"
    return width


def render_section(section: Section) -> str:
    if isinstance(section, TextSection):
        return f"<div class='slide-section slide-text'>{markdown_block(section.body)}</div>"

    if isinstance(section, ListSection):
        tag = "ol" if section.style == "numbered" else "ul"
        items = "".join(f"<li>{markdown_inline(item)}</li>" for item in section.items)
        return f"<div class='slide-section slide-list'><{tag}>{items}</{tag}></div>"

    if isinstance(section, CodeSection):
        language = html.escape(section.language, quote=True)
        code = html.escape("\n".join(section.lines))
        return (
            "<div class='slide-section slide-code'>"
            f"<div class='code-lang'>{language}</div>"
            f"<pre><code class='language-{language}'>{code}</code></pre>"
            "</div>"
        )

    if isinstance(section, ImagesSection):
        images = "".join(
            f"<img src=\"{html.escape(image.src, quote=True)}\" alt=\"\" "
            f"style=\"max-width: {html.escape(_width_style(image.width), quote=True)}; width: 100%;\">"
            for image in section.images
        )
        return f"<div class='slide-section slide-images'>{images}</div>"

    raise TypeError(f"unknown section: {section!r}")


def render_breadcrumb(path: str) -> str:
    parts = [html.escape(part) for part in path.split("/")]
    crumbs = [f"<span class='crumb'>{part}</span>" for part in parts[:-1]]
    crumbs.append(f"<span class='crumb crumb-current'>{parts[-1]}</span>")
    return "<div class='breadcrumb'>" + "<span class='crumb-sep'>/</span>".join(crumbs) + "</div>"


def render_slide_body(content: SlideContent) -> str:
    if content.layout == "split":
        left = "".join(render_section(s) for s in content.sections if resolve_slot(s) == "left")
        right = "".join(render_section(s) for s in content.sections if resolve_slot(s) == "right")
        return (
            "<div class='slide-split'>"
            f"<div class='slide-col slide-col-left'>{left}</div>"
            f"<div class='slide-col slide-col-right'>{right}</div>"
            "</div>"
        )
    return "".join(render_section(section) for section in content.sections)


def render_slide(path: str, content: SlideContent, node_type: str) -> str:
    """One ``<section>`` per slide; the viewer toggles them by ``data-path``."""
    path_attr = html.escape(path, quote=True)
    title = html.escape(content.title or path.rsplit("/", 1)[-1])
    return (
        f"<section class='slide slide-{node_type} layout-{content.layout}' data-path=\"{path_attr}\" hidden>"
        f"<header class='slide-header'><h1 class='slide-title'>{title}</h1>{render_breadcrumb(path)}</header>"
        f"<div class='slide-body'>{render_slide_body(content)}</div>"
        "</section>"
    )
