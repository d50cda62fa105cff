from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Optional

from .index import build_index
from .metadata import PostMetadata
from .models import HighBlogEntry, MediumBlog, MediumBlogEntry
from .render import DEFAULT_RENDERER, RenderedPost, Renderer, TocFunction
from .sitemap import SitemapOptions


def medium_entry(
    meta: PostMetadata,
    rendered: RenderedPost,
    preview: str,
    source: str,
    renderer: Renderer = DEFAULT_RENDERER,
) -> MediumBlogEntry:
    # The HTML is dropped here; only what is needed to render again is kept.
    return MediumBlogEntry.from_metadata(
        meta, toc=rendered.toc, preview=preview, source=source, renderer=renderer
    )


def get_medium_blog(
    root: Path,
    toc_function: Optional[TocFunction] = None,
    preview_chars: Optional[int] = None,
    url_base: Optional[str] = None,
    sitemap_options: Optional[SitemapOptions] = None,
    renderer: Optional[Renderer] = None,
) -> MediumBlog:
    """Load the blog index without keeping any post HTML.

    Previews and tables of contents are computed at load time. Use
    ``render`` (or ``MediumBlogEntry.render``) to produce the full post when
    it is requested; it uses the same ``renderer`` as the load.
    """
    renderer = renderer or DEFAULT_RENDERER
    return build_index(
        root,
        partial(medium_entry, renderer=renderer),
        toc_function=toc_function,
        preview_chars=preview_chars,
        url_base=url_base,
        sitemap_options=sitemap_options,
        renderer=renderer,
    )


def render(entry: MediumBlogEntry, root: Path, renderer: Optional[Renderer] = None) -> HighBlogEntry:
    return entry.render(root, renderer)
