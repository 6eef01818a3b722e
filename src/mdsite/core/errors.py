"""Build error taxonomy: fatal run errors and per-file errors tagged with a path"""

from pathlib import Path


class SiteError(Exception):
    """Base error carrying the file or directory it concerns."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class SetupError(SiteError):
    """Output root could not be cleared or recreated. Fatal."""


class TraversalError(SiteError):
    """Content or template root could not be enumerated. Fatal."""


class FileError(SiteError):
    """Failure scoped to a single document; the build continues."""


class ReadError(FileError):
    pass


class MetadataDecodeError(FileError):
    pass


class TemplateError(FileError):
    pass


class WriteError(FileError):
    pass
