from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Generic, Mapping, Optional, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, SkipValidation

from .metadata import PostMetadata, full_slug
from .render import DEFAULT_RENDERER, Renderer


@runtime_checkable
class BlogEntry(Protocol):
    """What every entry type exposes, whatever the caching strategy."""

    @property
    def title(self) -> str: ...

    @property
    def date(self) -> dt.date: ...

    @property
    def description(self) -> Optional[str]: ...

    @property
    def slug(self) -> str: ...

    @property
    def part_slug(self) -> str: ...

    @property
    def tags(self) -> tuple[str, ...]: ...

    @property
    def priority(self) -> Optional[float]: ...

    @property
    def last_modified(self) -> Optional[dt.date]: ...


class PostRecord(BaseModel):
    """Fields shared by every entry. ``slug`` is the full ``<date>/<slug>`` form."""

    model_config = ConfigDict(frozen=True)

    title: str
    date: dt.date
    description: Optional[str] = None
    slug: str
    part_slug: str
    tags: tuple[str, ...] = ()
    keywords: Optional[tuple[str, ...]] = None
    canonical_link: Optional[str] = None
    author_name: Optional[str] = None
    author_webpage: Optional[str] = None
    last_modified: Optional[dt.date] = None
    priority: Optional[float] = None

    @classmethod
    def metadata_fields(cls, meta: PostMetadata) -> dict:
        return {
            "title": meta.title,
            "date": meta.date,
            "description": meta.description,
            "slug": full_slug(meta.date, meta.slug),
            "part_slug": meta.slug,
            "tags": tuple(meta.tags),
            "keywords": tuple(meta.keywords) if meta.keywords is not None else None,
            "canonical_link": meta.canonical_link,
            "author_name": meta.author_name,
            "author_webpage": meta.author_webpage,
            "last_modified": meta.last_modified,
            "priority": meta.priority,
        }

    @classmethod
    def from_metadata(cls, meta: PostMetadata, **extra):
        return cls(**cls.metadata_fields(meta), **extra)

    def record_fields(self) -> dict:
        return {name: getattr(self, name) for name in PostRecord.model_fields}


class HighBlogEntry(PostRecord):
    """A fully rendered post."""

    html: str
    toc: Optional[str] = None
    preview: str = ""


class MediumBlogEntry(PostRecord):
    """A post kept without its HTML. Call ``render`` to get the full post."""

    toc: Optional[str] = None
    preview: str = ""
    # Content file path relative to the blog root, POSIX separators.
    source: str
    # The renderer the index was loaded with; ``render`` uses it by default.
    renderer: SkipValidation[Renderer] = Field(default=DEFAULT_RENDERER, exclude=True, repr=False)

    def source_path(self, root: Path) -> Path:
        return Path(root).joinpath(*self.source.split("/"))

    def render(self, root: Path, renderer: Optional[Renderer] = None) -> HighBlogEntry:
        renderer = renderer or self.renderer
        rendered = renderer.render_file(self.source_path(root))
        return HighBlogEntry(**self.record_fields(), html=rendered.html, toc=self.toc, preview=self.preview)


class LowBlogEntry(PostRecord):
    html: str
    toc: Optional[str] = None


class PreviewBlogEntry(PostRecord):
    preview: str = ""


EntryT = TypeVar("EntryT")


@dataclass(frozen=True)
class BlogIndex(Generic[EntryT]):
    """An immutable snapshot of a loaded blog.

    ``hash`` and ``entries`` hold the same posts: one keyed by full slug, one
    ordered newest first. ``tags`` lists every tag once, in the order posts
    were discovered.
    """

    hash: Mapping[str, EntryT] = field(default_factory=dict)
    entries: tuple[EntryT, ...] = ()
    tags: tuple[str, ...] = ()
    sitemap: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", MappingProxyType(dict(self.hash)))
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "tags", tuple(self.tags))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, slug: object) -> bool:
        return slug in self.hash

    def get(self, slug: str) -> Optional[EntryT]:
        return self.hash.get(slug)


HighBlog = BlogIndex[HighBlogEntry]
MediumBlog = BlogIndex[MediumBlogEntry]
