"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    content_dir:   str = Field(default="content",   description="Root of the markdown source tree")
    template_dir:  str = Field(default="templates", description="Directory holding the base and page templates")
    output_dir:    str = Field(default="public",    description="Output root; recreated on every build")
    base_template: str = Field(default="base.html", description="Layout template executed for each page")
    page_template: str = Field(default="page.html", description="Fragment the layout includes by name")
    parser_config: str = Field(
        default="gfm-like",
        pattern="^(commonmark|default|gfm-like|js-default|zero)$",
        description="MarkdownIt parser preset name",
    )
    output_format: str = Field(default="html", pattern="^(html|json)$", description="html or json")
    log_level:     str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
