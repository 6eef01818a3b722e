"""File discovery, document reading, and front matter extraction"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from yaml.constructor import SafeConstructor

from mdsite.core.errors import MetadataDecodeError, ReadError, TraversalError
from mdsite.core.models import Metadata


logger = logging.getLogger(__name__)

MARKER = "---"
MD_EXTENSION = ".md"
NULL_TAG = "tag:yaml.org,2002:null"


def _closing_marker(text: str, start: int) -> int:
    """Return the offset of the first line-initial marker at or after start, else -1."""
    pos = text.find(MARKER, start)
    while pos != -1 and text[pos - 1] != "\n":
        pos = text.find(MARKER, pos + 1)
    return pos


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return (block, body); block is None unless text opens with a closed marker pair.

    The closing marker must begin a line, so a `---` inside a YAML value does
    not end the block early. Line breaks right after the closing marker are
    dropped from the body.
    """
    if not text.startswith(MARKER):
        return None, text
    end = _closing_marker(text, len(MARKER))
    if end == -1:
        return None, text
    return text[len(MARKER):end], text[end + len(MARKER):].lstrip("\r\n")


def _literal_mapping(node: yaml.MappingNode) -> dict[str, Any]:
    """Map top-level keys to scalar source text; `No` stays "No", not False."""
    constructor = SafeConstructor()
    data: dict[str, Any] = {}
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        if isinstance(value_node, yaml.ScalarNode):
            data[key_node.value] = None if value_node.tag == NULL_TAG else value_node.value
        else:
            data[key_node.value] = constructor.construct_object(value_node, deep=True)
    return data


def decode_metadata(block: str, source: Path | str = "<string>") -> Metadata:
    """Decode a YAML front matter block into Metadata."""
    try:
        node = yaml.compose(block, Loader=yaml.SafeLoader)
        if node is None:
            data = {}
        elif isinstance(node, yaml.MappingNode):
            data = _literal_mapping(node)
        else:
            raise MetadataDecodeError(source, f"front matter must be a mapping, got {node.id}")
    except yaml.YAMLError as e:
        raise MetadataDecodeError(source, f"invalid YAML front matter: {e}") from e
    try:
        return Metadata.model_validate(data)
    except ValidationError as e:
        raise MetadataDecodeError(source, f"invalid front matter field: {e}") from e


def extract(text: str, source: Path | str = "<string>") -> tuple[Metadata, str]:
    """Split and decode a document into (metadata, markdown body)."""
    block, body = split_frontmatter(text)
    if block is None:
        logger.warning("No front matter found in %s; using default title", source)
        return Metadata(), body
    return decode_metadata(block, source), body


def read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(path, f"cannot read document: {e}") from e


def discover_files(root: Path) -> list[Path]:
    """Return sorted .md files under root; other files and directories are skipped.

    Any directory that cannot be listed, the root included, aborts the scan.
    """
    if not root.is_dir():
        raise TraversalError(root, "content directory does not exist or is not a directory")

    def _unreadable(e: OSError) -> None:
        raise TraversalError(e.filename or root, f"cannot scan content directory: {e}") from e

    found = []
    for dirpath, _, filenames in os.walk(root, onerror=_unreadable):
        found.extend(Path(dirpath) / name for name in filenames if name.endswith(MD_EXTENSION))
    return sorted(found)
