"""Unit tests for the directory accumulator and title derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagetree.generator.models import BuildReport, DirectoryIndex, PageMeta, file_name_to_title


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("getting-started.md", "getting started"),
        ("Templating", "Templating"),
        ("release notes-2024.md", "release notes-2024"),
        ("a-b-c", "a b c"),
        ("README.md", "README"),
    ],
)
def test_file_name_to_title(name: str, expected: str) -> None:
    assert file_name_to_title(name) == expected


def test_categories_deduplicate_adjacent_entries_only() -> None:
    """Only a repeat of the most recent category is dropped."""
    index = DirectoryIndex()
    alpha = PageMeta(title="alpha", destination_name="alpha")
    beta = PageMeta(title="beta", destination_name="beta")
    assert index.add_category(alpha) is True
    assert index.add_category(alpha) is False
    assert index.add_category(beta) is True
    assert index.add_category(alpha) is True
    assert [meta.destination_name for meta in index.categories] == [
        "alpha",
        "beta",
        "alpha",
    ]


def test_pages_keep_insertion_order() -> None:
    index = DirectoryIndex()
    for name in ("b.md", "a.md", "c.md"):
        index.add_page(PageMeta(title=name, destination_name=name, source_path=Path(name)))
    assert [meta.destination_name for meta in index.pages] == ["b.md", "a.md", "c.md"]


def test_build_report_lists_every_written_path() -> None:
    report = BuildReport(
        documents=[Path("a.md")], mirrored=[Path("b.png")], indexes=[Path("index.html")]
    )
    assert report.written == [Path("a.md"), Path("b.png"), Path("index.html")]
