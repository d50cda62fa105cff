from __future__ import annotations

from pathlib import Path
from typing import Optional

from .index import build_index
from .metadata import PostMetadata
from .models import HighBlog, HighBlogEntry
from .render import RenderedPost, Renderer, TocFunction
from .sitemap import SitemapOptions


def high_entry(meta: PostMetadata, rendered: RenderedPost, preview: str, source: str) -> HighBlogEntry:
    return HighBlogEntry.from_metadata(meta, html=rendered.html, toc=rendered.toc, preview=preview)


def get_high_blog(
    root: Path,
    toc_function: Optional[TocFunction] = None,
    preview_chars: Optional[int] = None,
    url_base: Optional[str] = None,
    sitemap_options: Optional[SitemapOptions] = None,
    renderer: Optional[Renderer] = None,
) -> HighBlog:
    """Load the whole blog with every post rendered up front.

    Lookups afterwards are plain dictionary and tuple reads. Load once at
    start-up and share the result: it is never modified. The sitemap is
    precomputed when ``url_base`` is given.
    """
    return build_index(
        root,
        high_entry,
        toc_function=toc_function,
        preview_chars=preview_chars,
        url_base=url_base,
        sitemap_options=sitemap_options,
        renderer=renderer,
    )
