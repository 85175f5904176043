"""Parse and re-serialize HTML block fragments.

Converted Markdown is parsed with the HTML5 algorithm as if it were the
children of an ``<article>`` element, so implied end tags (an unclosed
``<p>`` or heading) close the way a browser closes them and a duplicated
attribute keeps its first value. Only the parsed children are serialized
back, never the wrapping document or container.

Example
-------
>>> body = parse_fragment("<p>one<p>two")
>>> serialize_fragment(body)
'<p>one</p><p>two</p>'
"""

from __future__ import annotations

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from pagetree.errors import MarkupError

FRAGMENT_CONTAINER = "article"


def parse_fragment(fragment: str) -> Tag:
    """Return a tag whose children are the parsed nodes of ``fragment``.

    Raises
    ------
    MarkupError
        If the fragment cannot be parsed.
    """
    markup = f"<{FRAGMENT_CONTAINER}>{fragment}</{FRAGMENT_CONTAINER}>"
    try:
        soup = BeautifulSoup(markup, "html5lib")
    except ParserRejectedMarkup as exc:
        msg = f"Cannot parse HTML fragment: {exc}"
        raise MarkupError(msg) from exc
    body = soup.body
    if body is None:  # pragma: no cover - html5lib always builds a body
        msg = "Cannot parse HTML fragment: no document body was produced."
        raise MarkupError(msg)
    container = body.find(FRAGMENT_CONTAINER, recursive=False)
    if isinstance(container, Tag):
        # a stray </article> in the input leaves trailing nodes beside it
        container.unwrap()
    return body


def serialize_fragment(root: Tag) -> str:
    """Render the children of ``root`` without ``root`` itself."""
    return root.decode_contents()


__all__ = ["FRAGMENT_CONTAINER", "parse_fragment", "serialize_fragment"]
