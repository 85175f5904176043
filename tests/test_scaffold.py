"""Tests for the packaged example site scaffold."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from pagetree.config import BuildConfig
from pagetree.errors import BuildConfigError, WriteError
from pagetree.generator import SiteBuilder
from pagetree.scaffold import EXAMPLE_TEMPLATE_NAME, generate_example_content

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_example_content_is_written(tmp_path: Path) -> None:
    src, templates = tmp_path / "content", tmp_path / "templates"
    written = generate_example_content(src, templates)
    assert [path.relative_to(tmp_path).as_posix() for path in written] == [
        "content/README.md",
        "content/Templating/about.md",
        "content/traversal.md",
        f"templates/{EXAMPLE_TEMPLATE_NAME}",
    ]
    assert all(path.is_file() for path in written)


def test_existing_files_are_not_overwritten(tmp_path: Path) -> None:
    src, templates = tmp_path / "content", tmp_path / "templates"
    src.mkdir()
    (src / "README.md").write_text("mine", encoding="utf-8")
    with pytest.raises(WriteError, match="Refusing to overwrite"):
        generate_example_content(src, templates)
    assert (src / "README.md").read_text(encoding="utf-8") == "mine"


def test_same_directories_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(BuildConfigError):
        generate_example_content(tmp_path, tmp_path)


def test_example_site_builds(tmp_path: Path) -> None:
    src, templates = tmp_path / "content", tmp_path / "templates"
    output = tmp_path / "site"
    generate_example_content(src, templates)

    report = SiteBuilder(
        BuildConfig(
            source_dir=src,
            output_dir=output,
            templates_dir=templates,
            converter="markdown",
        )
    ).run()

    assert sorted(path.relative_to(output).as_posix() for path in report.indexes) == [
        "Templating/index.html",
        "index.html",
    ]
    root = BeautifulSoup((output / "index.html").read_text(encoding="utf-8"), "html.parser")
    assert root.title.get_text() == "Example site"
    hrefs = [link.get("href") for link in root.find_all("a")]
    assert "Templating/index.html" in hrefs
    assert "traversal.html" in hrefs, "README links should point at rendered pages"
