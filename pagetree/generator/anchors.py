"""Assign unique, slugified ``id`` attributes to every heading in a fragment.

Converted Markdown is parsed as the children of an ``<article>`` element, so
bare text and several sibling roots are legal input and an unclosed heading
ends where the next one starts. Each ``h1``-``h6`` element gets an
``id`` derived from its text; collisions within one document are resolved by
appending ``-1``, ``-2`` and so on. Only the parsed children are rendered
back, never a wrapping element.

Example
-------
>>> assign_anchors("<h2>Install</h2><p>x</p><h3>install</h3>")
'<h2 id="install">Install</h2><p>x</p><h3 id="install-1">install</h3>'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from bs4 import Tag

from pagetree.generator.fragments import parse_fragment, serialize_fragment

if typ.TYPE_CHECKING:
    from bs4 import PageElement

logger = logging.getLogger(__name__)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
MAX_SLUG_SUFFIX = 99
_SEPARATOR_RUN = re.compile(r"[\W_]+")


def slugify(value: str) -> str:
    """Convert heading text into a lowercase hyphen-separated slug.

    Letters and digits (including non-ASCII ones) are kept; every other run
    of characters collapses into a single hyphen, and hyphens at either end
    are dropped.

    Examples
    --------
    >>> slugify("Some header")
    'some-header'
    >>> slugify("  What's new?  ")
    'what-s-new'
    """
    return _SEPARATOR_RUN.sub("-", value.lower()).strip("-")


def assign_anchors(fragment: str) -> str:
    """Return ``fragment`` with a unique ``id`` on every heading element.

    Parameters
    ----------
    fragment : str
        HTML block fragment, typically the output of Markdown conversion.

    Returns
    -------
    str
        Re-serialized fragment. Existing ``id`` attributes on headings are
        overwritten, so running the function on its own output is stable.

    Raises
    ------
    MarkupError
        If the fragment cannot be parsed.
    """
    root = parse_fragment(fragment)
    seen: set[str] = set()
    for heading in _iter_headings(root):
        heading["id"] = _unique_slug(slugify(heading.get_text()), seen)
    return serialize_fragment(root)


def _iter_headings(node: PageElement) -> typ.Iterator[Tag]:
    """Yield heading elements in document order without entering headings."""
    for child in getattr(node, "children", ()):
        if not isinstance(child, Tag):
            continue
        if child.name in HEADING_TAGS:
            yield child
        else:
            yield from _iter_headings(child)


def _unique_slug(base: str, seen: set[str]) -> str:
    """Return ``base`` or the first free ``base-N`` and record it in ``seen``."""
    if base not in seen:
        seen.add(base)
        return base
    for suffix in range(1, MAX_SLUG_SUFFIX + 1):
        candidate = f"{base}-{suffix}"
        if candidate not in seen:
            seen.add(candidate)
            return candidate
    logger.warning(
        "Heading slug %r collides more than %d times; reusing it unchanged",
        base,
        MAX_SLUG_SUFFIX,
    )
    return base


__all__ = ["HEADING_TAGS", "assign_anchors", "slugify"]
