"""Shared fixtures for pagetree tests.

The fixtures build throwaway source trees and a minimal page template under
``tmp_path`` so each test renders a real site without touching the
repository. Conversion always uses the in-process Python-Markdown backend so
results do not depend on ``cmark-gfm`` being installed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from pagetree.config import BuildConfig
from pagetree.generator import SiteBuilder

if typ.TYPE_CHECKING:
    from pagetree.generator import BuildReport

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head><title>{{ title }}</title></head>
<body>
<main>{{ content }}</main>
<ul class="categories">
{% for entry in categories %}
<li><a href="{{ entry.destination_name }}/index.html">{{ entry.title }}</a></li>
{% endfor %}
</ul>
<ul class="pages">
{% for entry in pages %}
<li><a href="{{ entry.destination_name }}">{{ entry.title }}</a></li>
{% endfor %}
</ul>
</body>
</html>
"""


class SiteFixture(typ.NamedTuple):
    """Paths of a temporary site layout."""

    source: Path
    output: Path
    templates: Path

    def write(self, relative: str, text: str) -> Path:
        """Create ``relative`` under the source root with ``text``."""
        path = self.source / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def config(self, **overrides: typ.Any) -> BuildConfig:
        """Return a build config for this layout using the Markdown backend."""
        values: dict[str, typ.Any] = {
            "source_dir": self.source,
            "output_dir": self.output,
            "templates_dir": self.templates,
            "converter": "markdown",
        }
        values.update(overrides)
        return BuildConfig(**values)

    def build(self, **overrides: typ.Any) -> BuildReport:
        """Run a full build and return its report."""
        return SiteBuilder(self.config(**overrides)).run()

    def soup(self, relative: str) -> BeautifulSoup:
        """Parse an output file into a BeautifulSoup tree."""
        html = (self.output / relative).read_text(encoding="utf-8")
        return BeautifulSoup(html, "html.parser")


@pytest.fixture
def site(tmp_path: Path) -> SiteFixture:
    """Return an empty source tree with a single ``page.html`` template."""
    source = tmp_path / "src"
    templates = tmp_path / "templates"
    source.mkdir()
    templates.mkdir()
    (templates / "page.html").write_text(PAGE_TEMPLATE, encoding="utf-8")
    return SiteFixture(source=source, output=tmp_path / "out", templates=templates)


def listing(soup: BeautifulSoup, kind: str) -> list[tuple[str, str]]:
    """Return ``(title, href)`` pairs from an index page listing."""
    return [
        (link.get_text(strip=True), str(link.get("href")))
        for link in soup.select(f"ul.{kind} a")
    ]
