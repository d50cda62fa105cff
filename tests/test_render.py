"""Tests for Markdown rendering and the table-of-contents hook."""

import xml.etree.ElementTree as etree

import markdown
import pytest

from blogtools.errors import FileAccessError, RenderError
from blogtools.render import Renderer, highlight_css, outline_toc, render_markdown


def test_renders_markdown_paragraphs():
    rendered = render_markdown("Hello *world*.")
    assert rendered.html == "<p>Hello <em>world</em>.</p>"
    assert rendered.toc is None


def test_raw_html_and_custom_protocols_pass_through():
    html_text = render_markdown('<div class="note">raw</div>\n\n[call](tel:12345)').html
    assert '<div class="note">raw</div>' in html_text
    assert 'href="tel:12345"' in html_text


def test_tables_and_fenced_code_are_enabled():
    text = "| a | b |\n|---|---|\n| 1 | 2 |\n\n```\ncode\n```\n"
    html_text = render_markdown(text).html
    assert "<table>" in html_text
    assert "<pre><code>code" in html_text


def test_toc_function_receives_document_tree():
    seen = []

    def toc(root):
        seen.append(root)
        return "toc!"

    rendered = render_markdown("# One\n\ntext", toc)

    assert rendered.toc == "toc!"
    assert isinstance(seen[0], etree.Element)
    assert seen[0].tag == "div"
    assert seen[0].find("h1").text == "One"


def test_toc_tree_is_a_copy():
    def vandal(root):
        root.clear()
        return ""

    assert render_markdown("# One", vandal).html == "<h1>One</h1>"


def test_outline_toc():
    text = "## Intro\n\nx\n\n### Detail *bold*\n\ny\n\n## End\n"
    assert render_markdown(text, outline_toc).toc == "- Intro\n  - Detail bold\n- End"


def test_outline_toc_without_headings():
    assert render_markdown("just text", outline_toc).toc == ""


def test_highlight_uses_pygments():
    renderer = Renderer(highlight=True)
    html_text = renderer.render("```python\nx = 1\n```\n").html
    assert 'class="codehilite"' in html_text


def test_highlight_css():
    css = highlight_css()
    assert ".codehilite" in css
    with pytest.raises(RenderError):
        highlight_css("no-such-style")


def test_render_file_passes_html_through(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<p>Already *rendered*</p>", encoding="utf-8")
    rendered = Renderer().render_file(page, outline_toc)
    assert rendered.html == "<p>Already *rendered*</p>"
    assert rendered.toc is None


def test_render_file_missing(tmp_path):
    with pytest.raises(FileAccessError):
        Renderer().render_file(tmp_path / "missing.md")


def test_render_error_is_wrapped(monkeypatch):
    def broken(self, source):
        raise ValueError("bad input")

    monkeypatch.setattr(markdown.Markdown, "convert", broken)
    with pytest.raises(RenderError, match="bad input"):
        render_markdown("text")
