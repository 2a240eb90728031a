"""Assemble the single-file HTML deck from the template and the merged tree."""

from __future__ import annotations

import html
import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from bs4 import BeautifulSoup

from codeslides.errors import TemplateNotFoundError
from codeslides.models import DeckMeta, FileNode, FolderNode, Node, SlideNode, tree_to_dict
from codeslides.slide_renderer import render_slide

log = logging.getLogger(__name__)

PACKAGE_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

PLACEHOLDERS = {
    "css": "/* INJECT_CSS */",
    "js": "/* INJECT_JS */",
    "structure": "/* INJECT_STRUCTURE */",
    "title": "/* INJECT_TITLE */",
}

TEMPLATE_FILES = ("index.html", "dist/output.css", "dist/bundle.js")

_SCRIPT_TAG_RE = re.compile(r"<(/?)script", re.IGNORECASE)


def find_template_dir(extra_paths: Iterable[Path | None] = ()) -> Path:
    """First candidate directory holding an ``index.html``."""
    search_paths = [Path(p) for p in extra_paths if p is not None]
    search_paths += [PACKAGE_TEMPLATE_DIR, Path.cwd() / "templates"]

    for candidate in search_paths:
        if (candidate / "index.html").is_file():
            log.debug("template dir: %s", candidate)
            return candidate
        log.debug("no template in %s", candidate)

    raise TemplateNotFoundError(search_paths)


def read_template_files(template_dir: Path) -> tuple[str, str, str]:
    """Read index.html, the stylesheet and the script in parallel."""
    paths = [template_dir / name for name in TEMPLATE_FILES]
    with ThreadPoolExecutor(max_workers=len(paths)) as pool:
        futures = [pool.submit(path.read_text, encoding="utf-8") for path in paths]
        index_html, style_css, script_js = (future.result() for future in futures)
    return index_html, style_css, script_js


def escape_script(text: str) -> str:
    """Keep ``</script`` sequences from terminating an inline script."""
    return _SCRIPT_TAG_RE.sub(lambda m: "\\x3C" + ("\\/" if m.group(1) else "") + "script", text)


def iter_slides(tree: dict[str, Node], current_path: str = ""):
    """Yield ``(path, node)`` for every content-bearing node in tree order."""
    for name, node in tree.items():
        full_path = f"{current_path}/{name}" if current_path else name
        if isinstance(node, FolderNode):
            yield from iter_slides(node.children, full_path)
        elif isinstance(node, (FileNode, SlideNode)) and node.content is not None:
            yield full_path, node


def _theme_css(meta: DeckMeta | None) -> str:
    if meta is None:
        return ""
    rules = []
    if meta.accent_color:
        rules.append(f"--accent: {meta.accent_color};")
    if meta.background_color:
        rules.append(f"--bg: {meta.background_color};")
    return f":root {{ {' '.join(rules)} }}" if rules else ""


def inject_slides(index_html: str, tree: dict[str, Node], meta: DeckMeta | None) -> str:
    """Place pre-rendered slides and the theme block into the template."""
    soup = BeautifulSoup(index_html, "html.parser")

    deck = soup.find(id="slideDeck")
    if deck is None:
        deck = soup.new_tag("div", id="slideDeck")
        (soup.body or soup).append(deck)
    deck.clear()
    for path, node in iter_slides(tree):
        fragment = BeautifulSoup(render_slide(path, node.content, node.type), "html.parser")
        deck.append(fragment)

    theme = _theme_css(meta)
    if theme:
        style_tag = soup.new_tag("style", id="deckTheme")
        style_tag.string = theme
        head = soup.head
        if head is None:
            head = soup.new_tag("head")
            if soup.html:
                soup.html.insert(0, head)
            else:
                soup.insert(0, head)
        head.append(style_tag)

    return str(soup)


def structure_json(tree: dict[str, Node]) -> str:
    payload = json.dumps(tree_to_dict(tree), indent=2, ensure_ascii=False)
    return payload.replace("</", "<\\/")


def generate_html(
    tree: dict[str, Node], project_title: str, template_dir: Path, meta: DeckMeta | None = None
) -> str:
    index_html, style_css, script_js = read_template_files(template_dir)

    # Placeholders are filled in the template only; slide text may contain the
    # same marker strings and must reach the page untouched.
    substitutions = {
        PLACEHOLDERS["css"]: style_css,
        PLACEHOLDERS["js"]: escape_script(script_js),
        PLACEHOLDERS["structure"]: structure_json(tree),
        PLACEHOLDERS["title"]: html.escape(project_title),
    }
    pattern = "|".join(re.escape(placeholder) for placeholder in substitutions)
    page = re.sub(pattern, lambda m: substitutions[m.group(0)], index_html)

    return inject_slides(page, tree, meta)
