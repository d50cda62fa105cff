"""The three caching strategies must serve the same content."""

import pytest

from blogtools import low
from blogtools.errors import FileAccessError
from blogtools.high import get_high_blog
from blogtools.medium import get_medium_blog, render
from blogtools.models import BlogEntry, HighBlogEntry, MediumBlogEntry
from blogtools.render import Renderer, outline_toc
from blogtools.sitemap import SitemapOptions
from tests.conftest import post_meta


def content(entry):
    return (entry.slug, entry.title, tuple(entry.tags), entry.html)


def test_high_keeps_html_preview_and_toc(blog_root):
    blog = get_high_blog(blog_root, toc_function=outline_toc, preview_chars=10)
    summer = blog.hash["2024-06-01/summer"]

    assert isinstance(summer, HighBlogEntry)
    assert summer.html.startswith("<h1>Summer</h1>")
    assert summer.toc == "- Summer\n  - Beaches"
    assert summer.preview == "Long days "
    assert blog.sitemap is None


def test_medium_keeps_no_html(blog_root):
    blog = get_medium_blog(blog_root, toc_function=outline_toc)
    summer = blog.hash["2024-06-01/summer"]

    assert isinstance(summer, MediumBlogEntry)
    assert not hasattr(summer, "html")
    assert summer.source == "2024/2024-06-01/summer.md"
    assert summer.toc == "- Summer\n  - Beaches"
    assert summer.preview.startswith("Long days and short nights.")


def test_high_and_medium_render_identical_content(blog_root):
    high = get_high_blog(blog_root, toc_function=outline_toc)
    medium = get_medium_blog(blog_root, toc_function=outline_toc)

    high_content = {content(entry) for entry in high.entries}
    medium_content = {content(entry.render(blog_root)) for entry in medium.entries}

    assert high_content == medium_content
    assert [entry.slug for entry in high.entries] == [entry.slug for entry in medium.entries]
    assert high.tags == medium.tags
    for entry in medium.entries:
        assert render(entry, blog_root) == high.hash[entry.slug]


def test_low_renders_the_same_html(blog_root):
    high = get_high_blog(blog_root, toc_function=outline_toc)
    for entry in high.entries:
        date, _, slug = entry.slug.partition("/")
        post = low.render_blog_post(blog_root, date, slug, outline_toc)
        assert content(post) == content(entry)
        assert post.toc == entry.toc
    assert low.get_blog_tag_list(blog_root) == list(high.tags)
    assert [entry.slug for entry in low.list_posts(blog_root)] == [entry.slug for entry in high.entries]


def test_every_entry_type_satisfies_blog_entry(blog_root):
    high = get_high_blog(blog_root)
    medium = get_medium_blog(blog_root)
    previews = low.preview_blogs(blog_root, 1)
    post = low.render_blog_post(blog_root, "2024-01-01", "alpha")
    for entry in (high.entries[0], medium.entries[0], previews[0], post):
        assert isinstance(entry, BlogEntry)


def test_sitemaps_agree(blog_root):
    options = SitemapOptions(include_tags=True)
    high = get_high_blog(blog_root, url_base="https://example.com", sitemap_options=options)
    medium = get_medium_blog(blog_root, url_base="https://example.com", sitemap_options=options)
    low_sitemap = low.create_sitemap(blog_root, "https://example.com", options)

    assert high.sitemap == medium.sitemap == low_sitemap
    assert "<loc>https://example.com/blog/2024-06-01/summer</loc>" in high.sitemap
    assert "<priority>0.8</priority>" in high.sitemap
    assert "<loc>https://example.com/blog/tag/c</loc>" in high.sitemap


def test_medium_render_with_highlighting(make_post, tmp_path):
    make_post(
        "2024/2024-01-01",
        "code",
        {"title": "Code", "date": "2024-01-01", "slug": "code", "tags": []},
        "```python\nprint('hi')\n```\n",
    )
    renderer = Renderer(highlight=True)
    high = get_high_blog(tmp_path / "blog", renderer=renderer)
    medium = get_medium_blog(tmp_path / "blog", renderer=renderer)

    rendered = medium.entries[0].render(tmp_path / "blog", renderer)

    assert "codehilite" in rendered.html
    assert rendered.html == high.entries[0].html


def test_medium_render_after_source_removed(blog_root):
    medium = get_medium_blog(blog_root)
    (blog_root / "2023" / "2023-05-05" / "old.md").unlink()
    with pytest.raises(FileAccessError):
        medium.hash["2023-05-05/old"].render(blog_root)


def test_pre_rendered_html_posts(make_post, tmp_path):
    make_post(
        "2024/2024-02-02",
        "page",
        {"title": "Page", "date": "2024-02-02", "slug": "page", "tags": ["html"]},
        "<p>Hand written</p><p>markup</p>",
        suffix=".html",
    )
    root = tmp_path / "blog"
    high = get_high_blog(root, toc_function=outline_toc)
    entry = high.hash["2024-02-02/page"]

    assert entry.html == "<p>Hand written</p><p>markup</p>"
    assert entry.preview == "Hand writtenmarkup"
    assert entry.toc is None
    assert get_medium_blog(root).entries[0].render(root).html == entry.html
    assert low.render_blog_post(root, "2024-02-02", "page").html == entry.html


@pytest.fixture
def colliding_root(make_post, tmp_path):
    make_post("2024/2024-01-01", "a", post_meta("From A", "2024-01-01", "same", ["x"]), "Written as a.")
    make_post("2024/2024-01-01", "b", post_meta("From B", "2024-01-01", "same", ["y"]), "Written as b.")
    make_post("2023/2023-01-01", "other", post_meta("Other", "2023-01-01", "other", []), "Unrelated.")
    return tmp_path / "blog"


def test_slug_collisions_resolve_alike_everywhere(colliding_root):
    high = get_high_blog(colliding_root)
    medium = get_medium_blog(colliding_root)
    kept = high.hash["2024-01-01/same"]

    assert kept.title == "From A"
    assert [entry.slug for entry in high.entries] == ["2024-01-01/same", "2023-01-01/other"]
    assert medium.hash["2024-01-01/same"].render(colliding_root) == kept
    assert low.lookup_by_slug(colliding_root, "2024-01-01/same").html == kept.html
    assert low.render_blog_post(colliding_root, "2024-01-01", "same").title == "From A"
    assert [entry.title for entry in low.preview_blogs(colliding_root, 10)] == ["From A", "Other"]
    assert [entry.title for entry in low.preview_blogs_tagged(colliding_root, "x")] == ["From A"]
    assert low.preview_blogs_tagged(colliding_root, "y") == []
    assert [entry.title for entry in low.list_posts(colliding_root)] == ["From A", "Other"]
    assert low.get_blog_tag_list(colliding_root) == list(high.tags) == ["y", "x"]


def test_medium_render_uses_the_loading_renderer(make_post, tmp_path):
    make_post(
        "2024/2024-01-01",
        "code",
        post_meta("Code", "2024-01-01", "code", []),
        "```python\nx = 1\n```\n",
    )
    root = tmp_path / "blog"
    renderer = Renderer(highlight=True)
    high = get_high_blog(root, renderer=renderer)
    medium = get_medium_blog(root, renderer=renderer)

    rendered = render(medium.entries[0], root)

    assert 'class="codehilite"' in rendered.html
    assert rendered == high.entries[0]
    assert "renderer" not in medium.entries[0].model_dump()


def test_htm_posts_are_pre_rendered(make_post, tmp_path):
    make_post(
        "2024/2024-03-03",
        "legacy",
        post_meta("Legacy", "2024-03-03", "legacy", []),
        "<p># not a heading</p>",
        suffix=".htm",
    )
    root = tmp_path / "blog"

    assert get_high_blog(root).entries[0].html == "<p># not a heading</p>"
    assert low.render_blog_post(root, "2024-03-03", "legacy").html == "<p># not a heading</p>"
