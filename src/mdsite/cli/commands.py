"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.errors import FileError, SetupError, TraversalError
from mdsite.core.pipeline import render_file, run_build
from mdsite.core.render import make_renderer


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Markdown source root")] = None,
    templates: Annotated[Optional[str], typer.Option("--template-dir", help="Template directory")] = None,
    out: Annotated[Optional[str], typer.Option("--output-dir", help="Output directory (recreated)")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    fmt: Annotated[Optional[str], typer.Option("--output-format", help="html or json")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any document fails")] = False,
    ):
    """Rebuild the output directory from every markdown file under the content root."""
    settings = _settings(overrides={
        "content_dir": content, "template_dir": templates, "output_dir": out,
        "parser_config": parser, "output_format": fmt,
    })
    try:
        summary = run_build(settings)
    except SetupError as e:
        _fail("Could not prepare output directory", e)
    except TraversalError as e:
        _fail("Could not scan sources", e)

    for result in summary.results:
        if result.ok:
            typer.echo(f"  {result.source} -> {result.output}")
        else:
            typer.echo(f"  FAILED {result.source}: {result.error.message}", err=True)
    typer.echo(
        f"Built {len(summary.succeeded)} page(s) to {settings.output_dir}/"
        f" ({len(summary.failed)} failed)"
    )
    if strict and summary.failed:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to render")],
    templates: Annotated[Optional[str], typer.Option("--template-dir", help="Template directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    fmt: Annotated[Optional[str], typer.Option("--output-format", help="html or json")] = None,
    ):
    """Render a single document to stdout without touching the output directory."""
    settings = _settings(overrides={"template_dir": templates, "parser_config": parser, "output_format": fmt})
    try:
        data = render_file(path, settings, make_renderer(settings))
    except FileError as e:
        _fail(f"Could not render {path}", e)
    typer.echo(data.decode("utf-8"), nl=False)
