"""Unit tests for core/render.py"""

import json
from pathlib import Path

import pytest

from mdsite.config import Settings
from mdsite.core.errors import TemplateError, WriteError
from mdsite.core.models import Metadata, PageData
from mdsite.core.render import (
    JsonRenderer,
    TemplateRenderer,
    make_renderer,
    output_path,
    to_html,
    write_page,
)


# --- to_html ---

def test_to_html_heading_and_emphasis():
    html = to_html("# Hi\n\nSome **bold** and *em* text.\n")
    assert "<h1>Hi</h1>" in html
    assert "<strong>bold</strong>" in html
    assert "<em>em</em>" in html


def test_to_html_lists_links_code_quotes():
    html = to_html("- one\n- two\n\n[link](https://example.com)\n\n```\ncode\n```\n\n> quoted\n")
    assert "<ul>" in html and "<li>one</li>" in html
    assert '<a href="https://example.com">link</a>' in html
    assert "<pre><code>code\n</code></pre>" in html
    assert "<blockquote>" in html


def test_to_html_tables():
    """The default gfm-like preset renders pipe tables."""
    html = to_html("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<table>" in html
    assert "<td>1</td>" in html


def test_to_html_no_linkify():
    """Bare URLs are left as text."""
    assert "<a" not in to_html("see https://example.com\n")


# --- TemplateRenderer ---

def _page(title="Hello", content="<h1>Hi</h1>\n"):
    return PageData(metadata=Metadata(title=title), content=content)


def test_template_renderer_composes_base_and_page(site):
    """The base layout includes the page fragment with the same context."""
    out = TemplateRenderer(site / "templates").render(_page()).decode("utf-8")
    assert "<title>Hello</title>" in out
    assert "<article><h1>Hi</h1>\n</article>" in out


def test_template_renderer_does_not_escape_content(site):
    """Rendered HTML is injected as-is while metadata is escaped."""
    out = TemplateRenderer(site / "templates").render(
        _page(title="Tom & Jerry", content="<p>a &amp; b</p>")
    ).decode("utf-8")
    assert "<p>a &amp; b</p>" in out
    assert "Tom &amp; Jerry" in out


def test_template_renderer_reloads_templates(site):
    """Edits to a template apply on the next call."""
    renderer = TemplateRenderer(site / "templates")
    renderer.render(_page())
    (site / "templates" / "page.html").write_text("<section>{{ content }}</section>\n")
    assert b"<section>" in renderer.render(_page())


def test_template_renderer_missing_page(site):
    (site / "templates" / "page.html").unlink()
    with pytest.raises(TemplateError, match="page.html"):
        TemplateRenderer(site / "templates").render(_page(), source="content/x.md")


def test_template_renderer_missing_base(site):
    (site / "templates" / "base.html").unlink()
    with pytest.raises(TemplateError, match="base.html"):
        TemplateRenderer(site / "templates").render(_page())


def test_template_renderer_syntax_error(site):
    (site / "templates" / "page.html").write_text("{% if %}\n")
    with pytest.raises(TemplateError, match="syntax error"):
        TemplateRenderer(site / "templates").render(_page())


def test_template_renderer_undefined_variable(site):
    """Referencing a field PageData does not carry fails instead of rendering blank."""
    (site / "templates" / "page.html").write_text("{{ metadata.author }}\n")
    with pytest.raises(TemplateError, match="x.md"):
        TemplateRenderer(site / "templates").render(_page(), source="x.md")


# --- JsonRenderer ---

def test_json_renderer():
    out = JsonRenderer().render(_page())
    assert json.loads(out) == {"metadata": {"title": "Hello"}, "content": "<h1>Hi</h1>\n"}
    assert JsonRenderer.suffix == ".json"


def test_make_renderer_selects_format(tmp_path):
    assert isinstance(make_renderer(Settings(output_format="json")), JsonRenderer)
    renderer = make_renderer(Settings(template_dir=str(tmp_path), page_template="body.html"))
    assert isinstance(renderer, TemplateRenderer)
    assert renderer.page == "body.html"


# --- output_path ---

@pytest.mark.parametrize("source,expected", [
    ("content/blog/post.md", "public/blog/post.html"),
    ("content/index.md",     "public/index.html"),
    ("content/a.md/b.md",    "public/a.md/b.html"),
])
def test_output_path(source, expected):
    assert output_path(Path(source), Path("content"), Path("public")) == Path(expected)


def test_output_path_suffix():
    assert output_path(Path("content/x.md"), Path("content"), Path("out"), ".json") == Path("out/x.json")


# --- write_page ---

def test_write_page_creates_parents(tmp_path):
    target = tmp_path / "public" / "deep" / "page.html"
    write_page(target, b"<p>x</p>")
    assert target.read_bytes() == b"<p>x</p>"


def test_write_page_error_tagged_with_source(tmp_path):
    """A write failure names the source document."""
    blocker = tmp_path / "public"
    blocker.write_text("not a directory")
    with pytest.raises(WriteError, match="post.md"):
        write_page(blocker / "page.html", b"x", source="content/post.md")
