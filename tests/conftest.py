"""Shared fixtures: a throwaway site layout with content/, templates/ and public/"""

import pytest

from mdsite.config import Settings


BASE_TEMPLATE = """\
<html><head><title>{{ metadata.title }}</title></head>
<body>{% include "page.html" %}</body></html>
"""

PAGE_TEMPLATE = """\
<article>{{ content }}</article>
"""


@pytest.fixture(name="site")
def site_fixture(tmp_path, monkeypatch):
    """Create content/ and templates/ under tmp_path and run from there."""
    monkeypatch.chdir(tmp_path)
    for field in ("CONTENT_DIR", "TEMPLATE_DIR", "OUTPUT_DIR", "OUTPUT_FORMAT", "PARSER_CONFIG"):
        name = f"MDSITE_{field}"
        monkeypatch.delenv(name, raising=False)
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "base.html").write_text(BASE_TEMPLATE)
    (templates / "page.html").write_text(PAGE_TEMPLATE)
    (tmp_path / "content").mkdir()
    return tmp_path


@pytest.fixture(name="settings")
def settings_fixture(site):
    return Settings(
        content_dir=str(site / "content"),
        template_dir=str(site / "templates"),
        output_dir=str(site / "public"),
    )
