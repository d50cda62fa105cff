"""Read-through access: nothing is kept between calls.

Every function walks the blog root again and reads posts straight from disk.
That keeps memory use minimal, but each call costs time proportional to the
size of the blog. For large blogs put a cache or a database in front of it,
or use the high or medium strategy.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import ImproperDate
from .index import collect_tags, scan_metadata, sort_by_date, unique_by_slug
from .metadata import PostMetadata, read_metadata
from .models import LowBlogEntry, PostRecord, PreviewBlogEntry
from .preview import get_preview
from .render import DEFAULT_RENDERER, Renderer, TocFunction
from .scanner import content_for_sidecar, list_sidecars
from .sitemap import SitemapOptions, generate_sitemap
from .utils import parse_iso_date

logger = logging.getLogger(__name__)


def _newest(root: Path) -> list[tuple[Path, PostMetadata]]:
    pairs = unique_by_slug(scan_metadata(root), key=lambda pair: pair[1].full_slug)
    return sort_by_date(pairs, key=lambda pair: pair[1].date)


def _preview_entry(
    path: Path, meta: PostMetadata, preview_chars: Optional[int], renderer: Optional[Renderer]
) -> PreviewBlogEntry:
    rendered = (renderer or DEFAULT_RENDERER).render_file(path)
    return PreviewBlogEntry.from_metadata(meta, preview=get_preview(rendered.html, preview_chars))


def get_blog_tag_list(root: Path) -> list[str]:
    """List every distinct tag, in the order posts are discovered."""
    records = [PostRecord.from_metadata(meta) for _, meta in scan_metadata(root)]
    return collect_tags(records)


def preview_blogs(
    root: Path,
    num: int,
    preview_chars: Optional[int] = None,
    renderer: Optional[Renderer] = None,
) -> list[PreviewBlogEntry]:
    """Preview the ``num`` newest posts. Only those posts are rendered."""
    selected = _newest(root)[: max(0, num)]
    return [_preview_entry(path, meta, preview_chars, renderer) for path, meta in selected]


def preview_blogs_tagged(
    root: Path,
    tag: str,
    preview_chars: Optional[int] = None,
    renderer: Optional[Renderer] = None,
) -> list[PreviewBlogEntry]:
    selected = [(path, meta) for path, meta in _newest(root) if tag in meta.tags]
    return [_preview_entry(path, meta, preview_chars, renderer) for path, meta in selected]


def list_posts(
    root: Path, preview_chars: Optional[int] = None, renderer: Optional[Renderer] = None
) -> list[PreviewBlogEntry]:
    return [_preview_entry(path, meta, preview_chars, renderer) for path, meta in _newest(root)]


def render_blog_post(
    root: Path,
    date: str,
    slug: str,
    toc_function: Optional[TocFunction] = None,
    renderer: Optional[Renderer] = None,
) -> Optional[LowBlogEntry]:
    """Render one post given its date (``YYYY-MM-DD``) and partial slug.

    Only ``<root>/<year>/<date>/`` is searched. Returns None when nothing
    there matches. When several posts there share the slug, the one the full
    index would keep is rendered.
    """
    post_date = parse_iso_date(date)
    if post_date is None:
        raise ImproperDate(f"Improper date `{date}`, expected YYYY-MM-DD")
    folder = Path(root) / str(post_date.year) / post_date.isoformat()
    match = None
    for json_path in list_sidecars(folder):
        meta = read_metadata(json_path)
        if meta.slug != slug or meta.date != post_date:
            continue
        source = content_for_sidecar(json_path)
        if source is None:
            logger.debug("Metadata %s has no content file", json_path)
            continue
        # Later files replace earlier ones, as in the full index.
        match = (source, meta)
    if match is None:
        return None
    source, meta = match
    rendered = (renderer or DEFAULT_RENDERER).render_file(source, toc_function)
    return LowBlogEntry.from_metadata(meta, html=rendered.html, toc=rendered.toc)


def lookup_by_slug(
    root: Path,
    full_slug: str,
    toc_function: Optional[TocFunction] = None,
    renderer: Optional[Renderer] = None,
) -> Optional[LowBlogEntry]:
    date, _, slug = full_slug.partition("/")
    if not slug:
        return None
    return render_blog_post(root, date, slug, toc_function, renderer)


def create_sitemap(root: Path, url_base: str, options: Optional[SitemapOptions] = None) -> str:
    """Build the sitemap straight from the metadata files; nothing is rendered."""
    records = [PostRecord.from_metadata(meta) for _, meta in scan_metadata(root)]
    tags = collect_tags(records)
    records = sort_by_date(unique_by_slug(records))
    return generate_sitemap(records, tags, url_base, options)
