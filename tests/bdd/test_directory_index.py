"""Behaviour tests for directory index synthesis.

The scenarios in ``features/directory_index.feature`` lay out a source tree
under ``tmp_path``, render it with the Python-Markdown backend, and inspect
the generated ``index.html`` files: their titles, the pages they list, and
the subdirectories they link as categories.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_directory_index.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from pagetree.config import BuildConfig
from pagetree.generator import SiteBuilder

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "directory_index.feature"
scenarios(FEATURE_FILE)

TEMPLATE = """\
<html><head><title>{{ title }}</title></head><body>
<main>{{ content }}</main>
{% for entry in categories %}<a class="category" href="{{ entry.destination_name }}/index.html">{{ entry.title }}</a>
{% endfor %}{% for entry in pages %}<a class="page" href="{{ entry.destination_name }}">{{ entry.title }}</a>
{% endfor %}</body></html>
"""


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _source_tree(tmp_path: Path, scenario_state: dict[str, object]) -> Path:
    source = tmp_path / "src"
    templates = tmp_path / "templates"
    source.mkdir()
    templates.mkdir()
    (templates / "page.html").write_text(TEMPLATE, encoding="utf-8")
    scenario_state["config"] = BuildConfig(
        source_dir=source,
        output_dir=tmp_path / "out",
        templates_dir=templates,
        converter="markdown",
    )
    scenario_state["output"] = tmp_path / "out"
    return source


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _index(scenario_state: dict[str, object], directory: str = "") -> BeautifulSoup:
    output = scenario_state["output"]
    assert isinstance(output, Path)
    html = (output / directory / "index.html").read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


@given("a source tree with a README, a page and a Templating subdirectory")
def given_canonical_tree(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    source = _source_tree(tmp_path, scenario_state)
    _write(source / "README.md", "# Welcome\n\nRead [traversal](traversal.md).\n")
    _write(source / "traversal.md", "# Traversal\n")
    _write(source / "Templating" / "about.md", "# About\n")


@given(parsers.parse('a source tree whose "{name}" directory ships its own index.html'))
def given_handwritten_index(
    tmp_path: Path, scenario_state: dict[str, object], name: str
) -> None:
    source = _source_tree(tmp_path, scenario_state)
    _write(source / name / "index.html", "<p>hand made</p>")
    _write(source / name / "page.md", "# Page\n")


@when("the site is rendered")
def when_rendered(scenario_state: dict[str, object]) -> None:
    config = scenario_state["config"]
    assert isinstance(config, BuildConfig)
    scenario_state["report"] = SiteBuilder(config).run()


@then(parsers.parse('the root index is titled "{title}"'))
def then_root_title(scenario_state: dict[str, object], title: str) -> None:
    assert _index(scenario_state).title.get_text() == title


@then(parsers.parse('the "{directory}" index is titled "{title}"'))
def then_directory_title(
    scenario_state: dict[str, object], directory: str, title: str
) -> None:
    assert _index(scenario_state, directory).title.get_text() == title


@then(parsers.parse('the root index lists the page "{title}"'))
def then_lists_page(scenario_state: dict[str, object], title: str) -> None:
    pages = [link.get_text() for link in _index(scenario_state).select("a.page")]
    assert title in pages, f"expected {title!r} among {pages!r}"


@then(parsers.parse('the root index lists the category "{title}"'))
def then_lists_category(scenario_state: dict[str, object], title: str) -> None:
    categories = [
        link.get_text() for link in _index(scenario_state).select("a.category")
    ]
    assert title in categories, f"expected {title!r} among {categories!r}"


@then(parsers.parse('the "{directory}" index still holds the hand-written content'))
def then_index_untouched(scenario_state: dict[str, object], directory: str) -> None:
    output = scenario_state["output"]
    assert isinstance(output, Path)
    index = output / directory / "index.html"
    assert index.read_text(encoding="utf-8") == "<p>hand made</p>"
