"""Shared fixtures: small blog trees written into tmp_path."""

import json

import pytest


def write_post(root, folder, stem, meta, body="", suffix=".md"):
    directory = root / folder
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{stem}{suffix}").write_text(body, encoding="utf-8")
    if meta is not None:
        (directory / f"{stem}.json").write_text(json.dumps(meta), encoding="utf-8")
    return directory / f"{stem}{suffix}"


def post_meta(title, date, slug, tags, **extra):
    meta = {"title": title, "date": date, "slug": slug, "tags": tags}
    meta.update(extra)
    return meta


@pytest.fixture
def make_post(tmp_path):
    root = tmp_path / "blog"
    root.mkdir(exist_ok=True)

    def _make(folder, stem, meta, body="", suffix=".md"):
        return write_post(root, folder, stem, meta, body, suffix)

    return _make


@pytest.fixture
def blog_root(tmp_path, make_post):
    """Four posts over two years; two share a date."""
    make_post(
        "2024/2024-06-01",
        "summer",
        post_meta("Summer", "2024-06-01", "summer", ["b", "c"], desc="Warm days", priority=0.8),
        "# Summer\n\nLong days and *short* nights.\n\n## Beaches\n\nSand everywhere.\n",
    )
    make_post(
        "2024/2024-01-01",
        "alpha",
        post_meta("Alpha", "2024-01-01", "alpha", ["a", "b"]),
        "First post of the year.\n\n<div class=\"note\">raw html</div>\n",
    )
    make_post(
        "2024/2024-01-01",
        "beta",
        post_meta("Beta", "2024-01-01", "beta", ["a"]),
        "Second post of the year with a [phone link](tel:12345).\n",
    )
    make_post(
        "2023/2023-05-05",
        "old",
        post_meta("Old", "2023-05-05", "old", [], last_modified="2023-06-01"),
        "An older post.\n",
    )
    return tmp_path / "blog"
