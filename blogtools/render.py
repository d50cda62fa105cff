from __future__ import annotations

import copy
import xml.etree.ElementTree as etree
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from .errors import FileAccessError, RenderError

# Receives the parsed document (root element is a ``div``) and returns the
# table of contents as text. Must not depend on anything but the tree.
TocFunction = Callable[[etree.Element], str]

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
PRE_RENDERED_SUFFIXES = {".html", ".htm"}


class TreeCaptureProcessor(Treeprocessor):
    def __init__(self, md, sink: list):
        super().__init__(md)
        self.sink = sink

    def run(self, root):
        self.sink.append(copy.deepcopy(root))
        return None


class TreeCaptureExtension(Extension):
    def __init__(self, sink: list, **kwargs):
        super().__init__(**kwargs)
        self.sink = sink

    def extendMarkdown(self, md):
        # After inline, prettify and unescape have run.
        md.treeprocessors.register(TreeCaptureProcessor(md, self.sink), "tree_capture", -10)


@dataclass(frozen=True)
class RenderedPost:
    html: str
    toc: Optional[str] = None


@dataclass(frozen=True)
class Renderer:
    """Markdown to HTML conversion settings shared by every strategy.

    Raw HTML and any link protocol are left as written: posts are authored by
    the site owner, not submitted by visitors.
    """

    extensions: tuple[str, ...] = ("fenced_code", "tables")
    highlight: bool = False
    extension_configs: dict = field(default_factory=dict, hash=False)

    def _markdown(self, sink: Optional[list] = None) -> markdown.Markdown:
        extensions: list = list(self.extensions)
        configs = dict(self.extension_configs)
        if self.highlight and "codehilite" not in extensions:
            extensions.append("codehilite")
            configs.setdefault("codehilite", {"guess_lang": False, "css_class": "codehilite"})
        if sink is not None:
            extensions.append(TreeCaptureExtension(sink))
        return markdown.Markdown(extensions=extensions, extension_configs=configs)

    def render(self, text: str, toc_function: Optional[TocFunction] = None) -> RenderedPost:
        sink: list = []
        md = self._markdown(sink if toc_function is not None else None)
        try:
            html_content = md.convert(text)
        except Exception as exc:
            raise RenderError(f"Markdown conversion failed: {exc}") from exc
        toc = None
        if toc_function is not None:
            tree = sink[-1] if sink else etree.Element("div")
            toc = toc_function(tree)
        return RenderedPost(html=html_content, toc=toc)

    def render_file(self, path: Path, toc_function: Optional[TocFunction] = None) -> RenderedPost:
        path = Path(path)
        text = read_source(path)
        if path.suffix.lower() in PRE_RENDERED_SUFFIXES:
            return RenderedPost(html=text)
        try:
            return self.render(text, toc_function)
        except RenderError as exc:
            raise RenderError(f"Cannot render {path}: {exc.message}", path) from exc


DEFAULT_RENDERER = Renderer()


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileAccessError(f"Cannot read content file {path}: {exc}", path) from exc


def render_markdown(text: str, toc_function: Optional[TocFunction] = None) -> RenderedPost:
    return DEFAULT_RENDERER.render(text, toc_function)


def outline_toc(root: etree.Element) -> str:
    """Turn the headings of a document into a nested Markdown list."""
    headings = []
    for el in root.iter():
        if isinstance(el.tag, str) and el.tag in HEADING_TAGS:
            text = "".join(el.itertext()).strip()
            if text:
                headings.append((int(el.tag[1]), text))
    if not headings:
        return ""
    top = min(level for level, _ in headings)
    return "\n".join(f"{'  ' * (level - top)}- {text}" for level, text in headings)


def highlight_css(style: str = "default") -> str:
    try:
        formatter = HtmlFormatter(style=style, cssclass="codehilite")
    except ClassNotFound as exc:
        raise RenderError(f"Unknown Pygments style: {style}") from exc
    return formatter.get_style_defs(".codehilite")
