from __future__ import annotations

import datetime as dt
import html
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from lxml import etree

from .errors import PriorityOutOfRange, SitemapMergeError
from .utils import join_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
DATE_FORMAT = "%d-%m-%Y"
INDENT = "  "


@dataclass(frozen=True)
class SitemapOptions:
    """How the sitemap is laid out.

    ``blog_root_slug`` is the URL segment posts live under, so the default
    gives ``<base>/blog/2024-05-12/my-blog``. ``tag_root_slug`` is only used
    when ``include_tags`` is set. ``sitemap_base`` is an existing sitemap
    whose ``<url>`` records are merged into the output, for pages that are
    not part of the blog.
    """

    default_priority: float = 0.5
    include_tags: bool = False
    blog_root_slug: str = "blog"
    tag_root_slug: str = "blog/tag"
    sitemap_base: Optional[str] = None


def validate_priority(priority: float) -> float:
    if not 0.0 <= priority <= 1.0:
        raise PriorityOutOfRange(priority)
    return priority


def format_priority(priority: float) -> str:
    text = repr(float(priority))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_lastmod(value: dt.date) -> str:
    return value.strftime(DATE_FORMAT)


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def url_block(loc: str, lastmod: str, priority: str) -> list[str]:
    return [
        f"{INDENT}<url>",
        f"{INDENT * 2}<loc>{html.escape(loc, quote=False)}</loc>",
        f"{INDENT * 2}<lastmod>{lastmod}</lastmod>",
        f"{INDENT * 2}<priority>{priority}</priority>",
        f"{INDENT}</url>",
    ]


def url_path(*parts: str) -> str:
    return "/".join(part.strip("/") for part in parts if part.strip("/"))


def merge_fragment(sitemap_base: str) -> list[str]:
    """Re-emit every element of an existing sitemap except its ``urlset``."""
    parser = etree.XMLPullParser(
        events=("start", "end"),
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
    )
    try:
        parser.feed(sitemap_base.strip().encode("utf-8"))
        parser.close()
        events = list(parser.read_events())
    except etree.XMLSyntaxError as exc:
        raise SitemapMergeError(f"Cannot merge sitemap base: {exc}") from exc

    lines = []
    depth = 1
    leaves = set()
    for event, element in events:
        name = etree.QName(element).localname
        if name == "urlset":
            continue
        if event == "start":
            attrs = "".join(
                f' {local_name(key)}="{html.escape(value)}"' for key, value in element.attrib.items()
            )
            if len(element) == 0:
                text = html.escape((element.text or "").strip(), quote=False)
                lines.append(f"{INDENT * depth}<{name}{attrs}>{text}</{name}>")
                leaves.add(element)
            else:
                lines.append(f"{INDENT * depth}<{name}{attrs}>")
                depth += 1
        elif element not in leaves:
            depth -= 1
            lines.append(f"{INDENT * depth}</{name}>")
    return lines


def generate_sitemap(
    entries: Iterable,
    tags: Optional[Sequence[str]],
    url_base: str,
    options: Optional[SitemapOptions] = None,
    today: Optional[dt.date] = None,
) -> str:
    """Build a sitemaps.org ``urlset`` for the given posts and tags.

    Entries are written in the order given. Any priority outside [0.0, 1.0]
    raises ``PriorityOutOfRange``.
    """
    options = options or SitemapOptions()
    default_priority = validate_priority(options.default_priority)
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NS}">',
    ]

    for entry in entries:
        priority = default_priority if entry.priority is None else validate_priority(entry.priority)
        lastmod = entry.last_modified or entry.date
        loc = join_url(url_base, url_path(options.blog_root_slug, entry.slug))
        lines.extend(url_block(loc, format_lastmod(lastmod), format_priority(priority)))

    if options.include_tags and tags is not None:
        today = today or dt.datetime.now(dt.timezone.utc).date()
        for tag in tags:
            loc = join_url(url_base, url_path(options.tag_root_slug, tag))
            lines.extend(url_block(loc, format_lastmod(today), format_priority(default_priority)))

    if options.sitemap_base:
        lines.extend(merge_fragment(options.sitemap_base))

    lines.append("</urlset>")
    return "\n".join(lines) + "\n"
