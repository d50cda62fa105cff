from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup

DEFAULT_PREVIEW_CHARS = 320


def get_preview(html_text: str, preview_chars: Optional[int] = None) -> str:
    """Build a plain-text preview from the paragraphs of rendered HTML.

    Paragraph text is concatenated in document order until it is longer than
    ``preview_chars`` and then cut to exactly that length. HTML without any
    ``<p>`` yields an empty preview.
    """
    limit = DEFAULT_PREVIEW_CHARS if preview_chars is None else max(0, preview_chars)
    soup = BeautifulSoup(html_text or "", "html.parser")
    preview = ""
    for paragraph in soup.find_all("p"):
        preview += paragraph.get_text()
        if len(preview) > limit:
            break
    return preview[:limit]
