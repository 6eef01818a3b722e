"""Pipeline step functions: output setup, per-file processing, and build orchestration"""

import logging
import shutil
from pathlib import Path

from mdsite.config import Settings
from mdsite.core.errors import FileError, SetupError, TraversalError
from mdsite.core.models import BuildSummary, FileResult, PageData
from mdsite.core.parse import discover_files, extract, read_document
from mdsite.core.render import Renderer, make_renderer, output_path, to_html, write_page


logger = logging.getLogger(__name__)


def setup_output(output_dir: Path, content_dir: Path | None = None) -> None:
    """Remove output_dir if present and recreate it empty.

    Refuses to clear a directory that is, or contains, the content root.
    """
    if content_dir is not None:
        out, src = output_dir.resolve(), content_dir.resolve()
        if out == src or out in src.parents:
            raise SetupError(output_dir, f"refusing to clear a directory containing the content root {content_dir}")
    logger.info("Cleaning output directory %s", output_dir)
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as e:
        raise SetupError(output_dir, f"cannot recreate output directory: {e}") from e


def render_file(path: Path, settings: Settings, renderer: Renderer) -> bytes:
    """Read, extract, convert, and render one document. Returns the page bytes."""
    raw = read_document(path)
    metadata, body = extract(raw, source=path)
    page = PageData(metadata=metadata, content=to_html(body, settings.parser_config))
    logger.debug("Rendering %s (title: %r)", path, metadata.title)
    return renderer.render(page, source=path)


def process_file(path: Path, settings: Settings, renderer: Renderer) -> Path:
    """Run the full pipeline for one document and return the written output path."""
    data = render_file(path, settings, renderer)
    out = output_path(path, Path(settings.content_dir), Path(settings.output_dir), renderer.suffix)
    write_page(out, data, source=path)
    logger.info("Generated %s", out)
    return out


def run_build(settings: Settings, renderer: Renderer | None = None) -> BuildSummary:
    """Rebuild the output tree from the content tree.

    Raises SetupError or TraversalError for run-level failures. Per-file
    failures are logged and recorded in the returned summary.
    """
    content_dir = Path(settings.content_dir)
    output_dir = Path(settings.output_dir)
    renderer = renderer or make_renderer(settings)

    if settings.output_format == "html" and not Path(settings.template_dir).is_dir():
        raise TraversalError(settings.template_dir, "template directory does not exist or is not a directory")

    setup_output(output_dir, content_dir)
    logger.info("Scanning %s for markdown files", content_dir)
    files = discover_files(content_dir)

    summary = BuildSummary()
    for path in files:
        try:
            out = process_file(path, settings, renderer)
        except FileError as e:
            logger.error("Failed to process %s: %s", path, e.message)
            summary.results.append(FileResult(source=path, error=e))
            continue
        summary.results.append(FileResult(source=path, output=out))

    logger.info("Build finished: %d generated, %d failed", len(summary.succeeded), len(summary.failed))
    return summary
