"""Helpers for retargeting relative Markdown links at rendered HTML pages."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from pagetree._constants import HTML_SUFFIX, MD_SUFFIX

from pagetree.generator.fragments import parse_fragment, serialize_fragment


def rewrite_links(fragment: str) -> str:
    """Rewrite same-site ``*.md`` hyperlinks in ``fragment`` to ``*.html``.

    Links carrying a scheme (``https:``, ``mailto:``) or a host
    (``//example.com/...``) are left untouched, as are hrefs that fail to
    parse. Query strings and fragments survive the rewrite, and an element
    that repeats ``href`` keeps only the first value. Fragments that never
    mention the Markdown suffix are returned unchanged without parsing.

    Parameters
    ----------
    fragment : str
        HTML block fragment.

    Returns
    -------
    str
        Fragment with matching ``<a href>`` values rewritten.

    Raises
    ------
    MarkupError
        If the fragment cannot be parsed.

    Examples
    --------
    >>> rewrite_links('<a href="/bar.md#usage">bar</a>')
    '<a href="/bar.html#usage">bar</a>'
    >>> rewrite_links('<a href="//example.com/foo.md">foo</a>')
    '<a href="//example.com/foo.md">foo</a>'
    """
    if MD_SUFFIX not in fragment:
        return fragment
    root = parse_fragment(fragment)
    for element in root.find_all("a"):
        rewritten = _rewrite(element.get("href"))
        if rewritten is not None:
            element["href"] = rewritten
    return serialize_fragment(root)


def _rewrite(target: str | list[str] | None) -> str | None:
    """Return the retargeted href, or ``None`` when it must stay as-is."""
    if not isinstance(target, str) or not target:
        return None
    try:
        parsed = urlsplit(target)
    except ValueError:
        return None
    if parsed.scheme or parsed.netloc or not parsed.path.endswith(MD_SUFFIX):
        return None
    path = parsed.path.removesuffix(MD_SUFFIX) + HTML_SUFFIX
    return urlunsplit(parsed._replace(path=path))


__all__ = ["rewrite_links"]
