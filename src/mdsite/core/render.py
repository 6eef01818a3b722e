"""Markdown conversion, page renderers, and output writing"""

import json
from pathlib import Path
from typing import Protocol

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markdown_it import MarkdownIt

from mdsite.config import Settings
from mdsite.core.errors import TemplateError, WriteError
from mdsite.core.models import PageData


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def to_html(body: str, parser_config: str = "gfm-like") -> str:
    """Render a markdown body to an HTML fragment."""
    return _make_parser(parser_config).render(body)


class Renderer(Protocol):
    """Turns PageData into the bytes of one output file."""
    suffix: str

    def render(self, page: PageData, source: Path | str = "<string>") -> bytes: ...


class TemplateRenderer:
    """Render a base layout that includes a page fragment by name.

    Templates are loaded from disk on every call so edits take effect on the
    next document without restarting the build.
    """
    suffix = ".html"

    def __init__(self, template_dir: Path, base: str = "base.html", page: str = "page.html"):
        self.template_dir = Path(template_dir)
        self.base = base
        self.page = page

    def _environment(self) -> Environment:
        return Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, page: PageData, source: Path | str = "<string>") -> bytes:
        env = self._environment()
        try:
            base = env.get_template(self.base)
            env.get_template(self.page)
            return base.render(page.context()).encode("utf-8")
        except jinja2.TemplateNotFound as e:
            raise TemplateError(source, f"template not found in {self.template_dir}: {e.name}") from e
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(source, f"template syntax error in {e.name} line {e.lineno}: {e.message}") from e
        except (jinja2.TemplateError, OSError) as e:
            raise TemplateError(source, f"template execution failed: {e}") from e


class JsonRenderer:
    """Emit PageData as a JSON document instead of HTML."""
    suffix = ".json"

    def render(self, page: PageData, source: Path | str = "<string>") -> bytes:
        data = {"metadata": page.metadata.model_dump(), "content": page.content}
        return (json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True) + "\n").encode("utf-8")


def make_renderer(settings: Settings) -> Renderer:
    """Return the renderer selected by settings.output_format."""
    if settings.output_format == "json":
        return JsonRenderer()
    return TemplateRenderer(Path(settings.template_dir), settings.base_template, settings.page_template)


def output_path(source: Path, content_dir: Path, output_dir: Path, suffix: str = ".html") -> Path:
    """Mirror source under output_dir, swapping a trailing .md for suffix.

    content/blog/post.md -> public/blog/post.html
    """
    rel = Path(source).relative_to(content_dir)
    if rel.suffix == ".md":
        rel = rel.with_suffix(suffix)
    return Path(output_dir) / rel


def write_page(path: Path, data: bytes, source: Path | str | None = None) -> None:
    """Write data to path, creating parent directories; errors are tagged with source."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise WriteError(source or path, f"cannot write {path}: {e}") from e
