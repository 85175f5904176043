"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from pagetree._constants import MD_SUFFIX

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(slots=True, frozen=True)
class PageMeta:
    """One entry listed in a directory index.

    Attributes
    ----------
    title : str
        Human-readable label shown in the listing.
    destination_name : str
        Base name of the destination file or subdirectory.
    source_path : Path or None
        Source document path; set only for rendered documents so the
        synthesizer can read a readme body later. ``None`` for categories.
    """

    title: str
    destination_name: str
    source_path: Path | None = None


@dc.dataclass(slots=True)
class DirectoryIndex:
    """Pages and subcategories accumulated for one destination directory.

    Attributes
    ----------
    pages : list[PageMeta]
        Rendered documents in traversal order.
    categories : list[PageMeta]
        Subdirectories holding documents, deduplicated against the most
        recently appended entry only.
    """

    pages: list[PageMeta] = dc.field(default_factory=list)
    categories: list[PageMeta] = dc.field(default_factory=list)

    def add_page(self, meta: PageMeta) -> None:
        """Append ``meta`` to the page listing."""
        self.pages.append(meta)

    def add_category(self, meta: PageMeta) -> bool:
        """Append ``meta`` unless the last category has the same name.

        A depth-first walk visits every document of a subdirectory before
        moving on to the next sibling, so repeated registrations of the same
        subdirectory are always adjacent.

        Returns
        -------
        bool
            ``True`` when the entry was appended.
        """
        if self.categories and (
            self.categories[-1].destination_name == meta.destination_name
        ):
            return False
        self.categories.append(meta)
        return True


@dc.dataclass(slots=True)
class BuildReport:
    """Destination paths written by one build, grouped by kind."""

    documents: list[Path] = dc.field(default_factory=list)
    mirrored: list[Path] = dc.field(default_factory=list)
    indexes: list[Path] = dc.field(default_factory=list)

    @property
    def written(self) -> list[Path]:
        """Return every written path: documents, mirrored files, then indexes."""
        return [*self.documents, *self.mirrored, *self.indexes]


@dc.dataclass(slots=True)
class Page:
    """Render payload handed to the page template.

    ``pages`` and ``categories`` are populated only for synthetic indexes.
    """

    title: str
    content: str
    pages: list[PageMeta] = dc.field(default_factory=list)
    categories: list[PageMeta] = dc.field(default_factory=list)


def file_name_to_title(name: str) -> str:
    """Derive a display title from a file or directory name.

    The Markdown suffix is stripped. Names without spaces are treated as
    hyphenated words, so every hyphen becomes a space; names that already
    contain a space are returned as-is.

    Examples
    --------
    >>> file_name_to_title("getting-started.md")
    'getting started'
    >>> file_name_to_title("Release notes-2024.md")
    'Release notes-2024'
    """
    stem = name.removesuffix(MD_SUFFIX)
    if " " in stem:
        return stem
    return stem.replace("-", " ")


__all__ = ["BuildReport", "DirectoryIndex", "Page", "PageMeta", "file_name_to_title"]
