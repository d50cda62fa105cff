from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar

from .errors import SidecarNotFound
from .metadata import PostMetadata, load_metadata
from .models import BlogEntry, BlogIndex
from .preview import get_preview
from .render import DEFAULT_RENDERER, RenderedPost, Renderer, TocFunction
from .scanner import get_blog_paths
from .sitemap import SitemapOptions, generate_sitemap

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BlogEntry)
# (metadata, rendered content, preview text, source path relative to root) -> entry
EntryFactory = Callable[[PostMetadata, RenderedPost, str, str], EntryT]


def relative_source(path: Path, root: Path) -> str:
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()


def scan_metadata(root: Path) -> list[tuple[Path, PostMetadata]]:
    """Pair every content file with its metadata, in scanner order.

    Content files without a sidecar are skipped; every other failure is raised.
    """
    pairs = []
    for path in get_blog_paths(root):
        try:
            meta = load_metadata(path)
        except SidecarNotFound:
            logger.debug("Skipping %s: no metadata file", path)
            continue
        pairs.append((path, meta))
    return pairs


def sort_by_date(items: list, key: Callable = lambda item: item.date) -> list:
    # Stable, so same-date items keep scanner order.
    items.sort(key=key, reverse=True)
    return items


def process_post(
    path: Path,
    meta: PostMetadata,
    root: Path,
    entry_factory: EntryFactory,
    toc_function: Optional[TocFunction] = None,
    preview_chars: Optional[int] = None,
    renderer: Optional[Renderer] = None,
):
    renderer = renderer or DEFAULT_RENDERER
    rendered = renderer.render_file(path, toc_function)
    preview = get_preview(rendered.html, preview_chars)
    return entry_factory(meta, rendered, preview, relative_source(path, root))


def parse_blogs(
    root: Path,
    entry_factory: EntryFactory,
    toc_function: Optional[TocFunction] = None,
    preview_chars: Optional[int] = None,
    renderer: Optional[Renderer] = None,
) -> tuple[list, list[str]]:
    """Load, render and order every post under ``root``.

    Returns the entries newest first and the distinct tags in discovery order.
    Any failure other than a missing sidecar aborts the whole load. When two
    posts share a full slug the one found later in scanner order replaces the
    earlier one.
    """
    root = Path(root)
    entries = []
    for path, meta in scan_metadata(root):
        logger.debug("Processing %s", path)
        entries.append(process_post(path, meta, root, entry_factory, toc_function, preview_chars, renderer))
    tags = collect_tags(entries)
    entries = sort_by_date(unique_by_slug(entries))
    logger.info("Loaded %d posts with %d tags from %s", len(entries), len(tags), root)
    return entries, tags


def unique_by_slug(entries: Iterable, key: Callable = lambda entry: entry.slug) -> list:
    """Drop earlier entries whose full slug is reused by a later one."""
    by_slug: dict = {}
    for entry in entries:
        slug = key(entry)
        if slug in by_slug:
            logger.warning("Duplicate slug %s: the later post replaces the earlier one", slug)
            del by_slug[slug]
        by_slug[slug] = entry
    return list(by_slug.values())


def build_index(
    root: Path,
    entry_factory: EntryFactory,
    toc_function: Optional[TocFunction] = None,
    preview_chars: Optional[int] = None,
    url_base: Optional[str] = None,
    sitemap_options: Optional[SitemapOptions] = None,
    renderer: Optional[Renderer] = None,
) -> BlogIndex:
    entries, tags = parse_blogs(root, entry_factory, toc_function, preview_chars, renderer)
    sitemap = None
    if url_base is not None:
        sitemap = generate_sitemap(entries, tags, url_base, sitemap_options)
    return BlogIndex(
        hash={entry.slug: entry for entry in entries},
        entries=tuple(entries),
        tags=tuple(tags),
        sitemap=sitemap,
    )


def lookup_by_slug(index: BlogIndex, full_slug: str):
    """Return the entry for ``<date>/<slug>`` or None."""
    return index.hash.get(full_slug)


def list_by_tag(index: BlogIndex, tag: str) -> list:
    return [entry for entry in index.entries if tag in entry.tags]


def list_tags(index: BlogIndex) -> list[str]:
    return list(index.tags)


def recent(index: BlogIndex, num: int) -> list:
    return list(index.entries[: max(0, num)])


def collect_tags(entries: Iterable[BlogEntry]) -> list[str]:
    tags: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        for tag in entry.tags:
            if tag not in seen:
                seen.add(tag)
                tags.append(tag)
    return tags
