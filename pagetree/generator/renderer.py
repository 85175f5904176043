"""Convert Markdown documents into HTML block fragments.

Two backends are available: Python-Markdown with Pygments highlighting,
which always works in-process, and the ``cmark-gfm`` binary, which renders
GitHub-flavoured Markdown under a bounded deadline. ``auto`` prefers the
binary whenever it is found on ``PATH``.
"""

from __future__ import annotations

import shutil
import subprocess
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from pagetree.errors import ConversionError

if typ.TYPE_CHECKING:
    from pathlib import Path

CMARK_BINARY = "cmark-gfm"
CMARK_ARGS = (
    "--validate-utf8",
    "--smart",
    "--github-pre-lang",
    "--strikethrough-double-tilde",
    "-e",
    "footnotes",
    "-e",
    "table",
    "-e",
    "strikethrough",
    "-e",
    "autolink",
    "-e",
    "tasklist",
)
CONVERTERS = ("auto", "markdown", "cmark-gfm")
DEFAULT_TIMEOUT = 2.0


class HtmlContentRenderer:
    """Render Markdown source into HTML fragments with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        converter: str = "auto",
        timeout: float = DEFAULT_TIMEOUT,
        cmark_executable: str | None = None,
    ) -> None:
        """Initialize a renderer and resolve its conversion backend.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"monokai"``.
        converter : str, optional
            ``"auto"``, ``"markdown"`` or ``"cmark-gfm"``.
        timeout : float, optional
            Deadline in seconds for a single ``cmark-gfm`` invocation.
        cmark_executable : str, optional
            Explicit path to the ``cmark-gfm`` binary; looked up on ``PATH``
            when omitted.

        Raises
        ------
        ConversionError
            If ``cmark-gfm`` is requested explicitly but cannot be found.
        """
        if converter not in CONVERTERS:
            msg = f"Unknown converter {converter!r}; expected one of {CONVERTERS}."
            raise ConversionError(msg)
        self.pygments_style = pygments_style
        self.timeout = timeout
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        executable = cmark_executable or shutil.which(CMARK_BINARY)
        if converter == "cmark-gfm" and not executable:
            msg = f"'{CMARK_BINARY}' was requested but is not on PATH."
            raise ConversionError(msg)
        self._cmark = executable if converter != "markdown" else None

    @property
    def backend(self) -> str:
        """Return the name of the backend that ``convert`` uses."""
        return CMARK_BINARY if self._cmark else "markdown"

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def convert(self, source: bytes) -> str:
        """Convert Markdown ``source`` into an HTML block fragment.

        Raises
        ------
        ConversionError
            If the source is not UTF-8, or the external converter fails or
            exceeds its deadline.
        """
        if self._cmark:
            return self._convert_cmark(source)
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Markdown source is not valid UTF-8: {exc}"
            raise ConversionError(msg) from exc
        return self.markdown(text)

    def convert_file(self, path: Path) -> str:
        """Read ``path`` and convert its contents; read failures are conversion errors."""
        try:
            source = path.read_bytes()
        except OSError as exc:
            msg = f"Cannot read '{path}': {exc}"
            raise ConversionError(msg) from exc
        try:
            return self.convert(source)
        except ConversionError as exc:
            msg = f"Converting '{path}' failed: {exc}"
            raise ConversionError(msg) from exc

    def markdown(self, text: str) -> str:
        """Render Markdown into HTML using Python-Markdown."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists", "footnotes"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
            output_format="html",
        )
        return md.convert(text)

    def _convert_cmark(self, source: bytes) -> str:
        """Render ``source`` with the ``cmark-gfm`` binary under a deadline."""
        try:
            result = subprocess.run(  # noqa: S603
                [typ.cast("str", self._cmark), *CMARK_ARGS],
                input=source,
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"{CMARK_BINARY} did not finish within {self.timeout:g}s"
            raise ConversionError(msg) from exc
        except subprocess.CalledProcessError as exc:
            detail = exc.stderr.decode("utf-8", "replace").strip() if exc.stderr else ""
            msg = f"{CMARK_BINARY} exited with status {exc.returncode}: {detail}"
            raise ConversionError(msg) from exc
        except OSError as exc:
            msg = f"Cannot run {CMARK_BINARY}: {exc}"
            raise ConversionError(msg) from exc
        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{CMARK_BINARY} produced invalid UTF-8: {exc}"
            raise ConversionError(msg) from exc


__all__ = ["CMARK_BINARY", "CONVERTERS", "DEFAULT_TIMEOUT", "HtmlContentRenderer"]
