"""Tools for serving a blog kept as Markdown files with JSON metadata.

Put each post under a root folder as a pair of files sharing a stem::

    blog/2024/2024-03-19/my-post.md
    blog/2024/2024-03-19/my-post.json

and load it with one of three strategies: ``get_high_blog`` (everything
rendered and kept in memory), ``get_medium_blog`` (index in memory, posts
rendered on request) or the functions in ``blogtools.low`` (nothing kept).
"""

from .errors import (
    BlogError,
    ConfigError,
    FileAccessError,
    FileNotFound,
    ImproperDate,
    ImproperFileName,
    MetadataInvalid,
    NotADirectory,
    PriorityOutOfRange,
    RenderError,
    SidecarNotFound,
    SitemapMergeError,
)
from .high import get_high_blog
from .index import list_by_tag, list_tags, lookup_by_slug, recent
from .low import create_sitemap, get_blog_tag_list, preview_blogs, preview_blogs_tagged, render_blog_post
from .medium import get_medium_blog, render
from .metadata import PostMetadata, load_metadata
from .models import (
    BlogEntry,
    BlogIndex,
    HighBlog,
    HighBlogEntry,
    LowBlogEntry,
    MediumBlog,
    MediumBlogEntry,
    PostRecord,
    PreviewBlogEntry,
)
from .preview import get_preview
from .render import Renderer, TocFunction, outline_toc
from .scanner import get_blog_paths
from .sitemap import SitemapOptions, generate_sitemap
from .store import BlogStore

__all__ = [
    "BlogEntry",
    "BlogError",
    "BlogIndex",
    "BlogStore",
    "ConfigError",
    "FileAccessError",
    "FileNotFound",
    "HighBlog",
    "HighBlogEntry",
    "ImproperDate",
    "ImproperFileName",
    "LowBlogEntry",
    "MediumBlog",
    "MediumBlogEntry",
    "MetadataInvalid",
    "NotADirectory",
    "PostMetadata",
    "PostRecord",
    "PreviewBlogEntry",
    "PriorityOutOfRange",
    "RenderError",
    "Renderer",
    "SidecarNotFound",
    "SitemapMergeError",
    "SitemapOptions",
    "TocFunction",
    "create_sitemap",
    "generate_sitemap",
    "get_blog_paths",
    "get_blog_tag_list",
    "get_high_blog",
    "get_medium_blog",
    "get_preview",
    "list_by_tag",
    "list_tags",
    "load_metadata",
    "lookup_by_slug",
    "outline_toc",
    "preview_blogs",
    "preview_blogs_tagged",
    "recent",
    "render",
    "render_blog_post",
]
