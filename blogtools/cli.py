from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from . import low
from .cache import fingerprint, hash_text, load_lock, write_lock
from .config import STRATEGIES, load_config, resolve_path, sitemap_options_from_config
from .errors import BlogError
from .high import get_high_blog
from .medium import get_medium_blog
from .render import Renderer, highlight_css
from .sitemap import SitemapOptions, url_path
from .utils import join_url, parse_bool, parse_float, parse_optional_int

logger = logging.getLogger(__name__)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def post_url(site_url: str, options: SitemapOptions, slug: str) -> str:
    path = url_path(options.blog_root_slug, slug)
    if not site_url:
        return f"/{path}"
    return join_url(site_url, path)


def build_index_json(entries: list, site_url: str, options: SitemapOptions) -> str:
    index = []
    for entry in entries:
        index.append(
            {
                "title": entry.title,
                "slug": entry.slug,
                "url": post_url(site_url, options, entry.slug),
                "date": entry.date.isoformat(),
                "tags": list(entry.tags),
                "description": entry.description,
                "preview": entry.preview,
            }
        )
    return json.dumps(index, indent=2, ensure_ascii=True)


def load_posts(args: argparse.Namespace, options: SitemapOptions, renderer: Renderer):
    root = Path(args.root)
    site_url = args.site_url or None
    if args.strategy == "low":
        entries = low.list_posts(root, args.preview_chars, renderer)
        tags = low.get_blog_tag_list(root)
        sitemap = low.create_sitemap(root, site_url, options) if site_url else None
        return entries, tags, sitemap
    loader = get_high_blog if args.strategy == "high" else get_medium_blog
    blog = loader(
        root,
        preview_chars=args.preview_chars,
        url_base=site_url,
        sitemap_options=options,
        renderer=renderer,
    )
    return list(blog.entries), list(blog.tags), blog.sitemap


def settings_hash(args: argparse.Namespace, options: SitemapOptions) -> str:
    values = [
        args.strategy,
        args.site_url,
        str(args.preview_chars),
        repr(options),
        str(args.highlight),
        args.highlight_style,
    ]
    return hash_text("\n".join(values))


def build_blog(args: argparse.Namespace) -> bool:
    root = Path(args.root)
    output_dir = Path(args.output)
    config_path = Path(args.config)
    options = sitemap_options_from_config(vars(args), config_path)
    renderer = Renderer(highlight=args.highlight)

    lock_path = Path(args.lock_file)
    if not lock_path.is_absolute():
        lock_path = resolve_path(args.lock_file, config_path)

    incremental = parse_bool(args.incremental)
    current_state = {
        "content_hash": fingerprint(root),
        "settings_hash": settings_hash(args, options),
    }
    previous_state = load_lock(lock_path) if incremental else {}
    if (
        incremental
        and output_dir.exists()
        and previous_state.get("content_hash") == current_state["content_hash"]
        and previous_state.get("settings_hash") == current_state["settings_hash"]
    ):
        print("No changes detected. Build skipped.")
        return False

    entries, tags, sitemap = load_posts(args, options, renderer)

    output_dir.mkdir(parents=True, exist_ok=True)
    write_text(output_dir / "index.json", build_index_json(entries, args.site_url, options))
    write_text(output_dir / "tags.json", json.dumps(tags, indent=2, ensure_ascii=True))
    if sitemap is not None:
        write_text(output_dir / "sitemap.xml", sitemap)
    else:
        print("No site URL configured; sitemap.xml not written.", file=sys.stderr)
    if args.highlight:
        write_text(output_dir / "pygments.css", highlight_css(args.highlight_style))

    if incremental:
        write_lock(lock_path, current_state)
    logger.info("Wrote %d posts and %d tags to %s", len(entries), len(tags), output_dir)
    return True


def main(argv: Optional[list[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="blog.toml",
        help="Path to blog config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
    except BlogError as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        return parse_bool(cfg_value(key, default))

    def cfg_path(key: str) -> str:
        # Paths in the config file are relative to that file.
        value = str(cfg_value(key, "")).strip()
        return str(resolve_path(value, Path(pre_args.config))) if value else ""

    parser = argparse.ArgumentParser(description="Index a Markdown + JSON blog and write its sitemap.")
    parser.add_argument("--config", default=pre_args.config, help="Path to blog config file (TOML/YAML/JSON).")
    parser.add_argument("--root", default=cfg_str("root", "blog"), help="Blog root directory.")
    parser.add_argument("--output", default=cfg_str("output", "dist"), help="Output directory.")
    parser.add_argument(
        "--site-url",
        default=cfg_str("site_url", ""),
        help="Public site URL used for the sitemap.",
    )
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default=cfg_str("strategy", "high"),
        help="Caching strategy used to load the blog.",
    )
    parser.add_argument(
        "--preview-chars",
        default=parse_optional_int(config.get("preview_chars")),
        type=int,
        help="Preview length in characters (default 320).",
    )
    parser.add_argument(
        "--default-priority",
        default=parse_float(config.get("default_priority"), 0.5),
        type=float,
        help="Sitemap priority for posts without their own.",
    )
    parser.add_argument(
        "--include-tags",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("include_tags", False),
        help="Add tag pages to the sitemap.",
    )
    parser.add_argument(
        "--blog-root-slug",
        default=cfg_str("blog_root_slug", "blog"),
        help="URL segment posts live under.",
    )
    parser.add_argument(
        "--tag-root-slug",
        default=cfg_str("tag_root_slug", "blog/tag"),
        help="URL segment tag pages live under.",
    )
    parser.add_argument(
        "--sitemap-base",
        default=cfg_path("sitemap_base"),
        help="Existing sitemap XML file whose URLs are merged in.",
    )
    parser.add_argument(
        "--highlight",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("highlight", False),
        help="Highlight fenced code with Pygments and write pygments.css.",
    )
    parser.add_argument(
        "--highlight-style",
        default=cfg_str("highlight_style", "default"),
        help="Pygments style for pygments.css.",
    )
    parser.add_argument(
        "--incremental",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("incremental", False),
        help="Skip the build when nothing changed since the last one.",
    )
    parser.add_argument(
        "--lock-file",
        default=cfg_str("lock_file", "blog.lock.json"),
        help="Path to build lock JSON.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress.")
    args = parser.parse_args(argv)
    if args.strategy not in STRATEGIES:
        parser.error(f"unknown strategy: {args.strategy}")
    args.preview_chars = parse_optional_int(args.preview_chars)
    if args.sitemap_base:
        args.sitemap_base = str(Path(args.sitemap_base).resolve())

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    start = time.perf_counter()
    try:
        built = build_blog(args)
    except BlogError as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    if built:
        print(f"Blog index written to: {args.output}")
