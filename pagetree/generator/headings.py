"""Extract the first top-level heading from a rendered HTML fragment."""

from __future__ import annotations

from bs4 import BeautifulSoup, ParserRejectedMarkup, SoupStrainer

from pagetree.errors import MarkupError

_H1_ONLY = SoupStrainer("h1")


def first_heading(fragment: str | bytes) -> str:
    """Return the text of the first ``<h1>`` element in ``fragment``.

    Only ``h1`` elements are kept while parsing; any other markup before the
    heading is ignored. Inline markup nested inside the heading contributes
    its text but not its tags.

    Parameters
    ----------
    fragment : str or bytes
        HTML fragment; bytes are decoded as UTF-8.

    Returns
    -------
    str
        Concatenated heading text, or ``""`` when the fragment has no
        ``h1``. A missing heading is not an error.

    Raises
    ------
    MarkupError
        If the fragment cannot be decoded or tokenized.

    Examples
    --------
    >>> first_heading("<p>Text</p><h1>Header <span>text</span></h1>")
    'Header text'
    >>> first_heading("<p>No heading</p>")
    ''
    """
    text = _decode(fragment)
    try:
        soup = BeautifulSoup(text, "html.parser", parse_only=_H1_ONLY)
    except ParserRejectedMarkup as exc:
        msg = f"Cannot tokenize HTML while looking for a heading: {exc}"
        raise MarkupError(msg) from exc
    heading = soup.find("h1")
    if heading is None:
        return ""
    return heading.get_text()


def _decode(fragment: str | bytes) -> str:
    if isinstance(fragment, str):
        return fragment
    try:
        return fragment.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"HTML fragment is not valid UTF-8: {exc}"
        raise MarkupError(msg) from exc


__all__ = ["first_heading"]
