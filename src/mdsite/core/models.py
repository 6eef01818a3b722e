"""Data models for the parse and render pipeline"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from mdsite.core.errors import FileError


class Metadata(BaseModel):
    """Front matter fields recognised by the templates; unknown keys are dropped."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _scalar_text(cls, value: Any, info: ValidationInfo) -> Any:
        """Coerce YAML scalars to text; null falls back to the field default."""
        if value is None:
            return cls.model_fields[info.field_name].default
        if isinstance(value, (dict, list)):
            raise ValueError("expected a scalar value")
        return str(value)


@dataclass(frozen=True)
class PageData:
    """Decoded metadata plus the rendered body; the sole template input."""
    metadata: Metadata
    content:  str              # HTML from the markdown converter, trusted

    def context(self) -> dict[str, Any]:
        return {"metadata": self.metadata, "content": Markup(self.content)}


@dataclass
class FileResult:
    source: Path
    output: Optional[Path] = None
    error:  Optional[FileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BuildSummary:
    """Ordered per-file outcomes of a single build run."""
    results: list[FileResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[FileResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]
