"""Local preview server for a rendered output tree.

Rendered documents keep their ``.md`` file names on disk while links inside
them point at ``.html``. The preview handler therefore serves ``.md`` files
as HTML and falls back from a missing ``X.html`` to ``X.md``. It is meant
for local previews only; any static web server can host the output.
"""

from __future__ import annotations

import functools
import http.server
import logging
import os
import typing as typ

from pagetree._constants import HTML_SUFFIX, MD_SUFFIX

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ADDR = "localhost:8080"
REQUEST_TIMEOUT = 10


class PreviewRequestHandler(http.server.SimpleHTTPRequestHandler):
    """Serve static files with security headers and Markdown-name fallbacks."""

    extensions_map: typ.ClassVar[dict[str, str]] = {
        **http.server.SimpleHTTPRequestHandler.extensions_map,
        MD_SUFFIX: "text/html; charset=utf-8",
    }
    timeout = REQUEST_TIMEOUT

    def end_headers(self) -> None:
        """Attach framing, referrer and (behind HTTPS proxies) HSTS headers."""
        if self.headers.get("X-Forwarded-Proto", "").lower() == "https":
            self.send_header("Strict-Transport-Security", "max-age=31536000; preload")
        self.send_header("X-Frame-Options", "SAMEORIGIN")
        self.send_header("Referrer-Policy", "same-origin")
        super().end_headers()

    def translate_path(self, path: str) -> str:
        """Map a missing ``X.html`` request onto the rendered ``X.md`` file."""
        translated = super().translate_path(path)
        if translated.endswith(HTML_SUFFIX) and not os.path.exists(translated):
            fallback = translated.removesuffix(HTML_SUFFIX) + MD_SUFFIX
            if os.path.isfile(fallback):
                return fallback
        return translated

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


def parse_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts; an empty address binds any free port.

    Examples
    --------
    >>> parse_addr("localhost:8080")
    ('localhost', 8080)
    >>> parse_addr("")
    ('localhost', 0)
    """
    if not addr:
        return "localhost", 0
    host, _, port = addr.rpartition(":")
    try:
        return host.strip("[]"), int(port)
    except ValueError as exc:
        msg = f"Invalid listen address {addr!r}; expected host:port."
        raise ValueError(msg) from exc


def make_server(addr: str, directory: Path) -> http.server.ThreadingHTTPServer:
    """Bind a preview server for ``directory`` without starting it."""
    handler = functools.partial(PreviewRequestHandler, directory=str(directory))
    return http.server.ThreadingHTTPServer(parse_addr(addr), handler)


def serve(addr: str, directory: Path) -> None:
    """Serve ``directory`` on ``addr`` until interrupted."""
    with make_server(addr, directory) as server:
        host, port = server.server_address[:2]
        print(f"serving on http://{host}:{port}/")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("server stopped")


__all__ = ["DEFAULT_ADDR", "PreviewRequestHandler", "make_server", "parse_addr", "serve"]
