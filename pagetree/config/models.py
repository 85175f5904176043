"""Typed dataclasses describing a pagetree build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from pagetree.errors import BuildConfigError
from pagetree.generator.renderer import CONVERTERS, DEFAULT_TIMEOUT

DEFAULT_SOURCE_DIR = Path()
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_TEMPLATES_DIR = Path("templates")


@dc.dataclass(slots=True)
class BuildConfig:
    """Directories and converter settings for one build.

    Attributes
    ----------
    source_dir : Path
        Root of the Markdown source tree.
    output_dir : Path
        Root the rendered site is written into.
    templates_dir : Path
        Directory holding the ``*.html`` page templates.
    template : str or None
        Template file name used for every page; ``None`` selects the
        lexically first ``*.html`` template.
    converter : str
        Conversion backend: ``"auto"``, ``"markdown"`` or ``"cmark-gfm"``.
    converter_timeout : float
        Deadline in seconds for a single external conversion.
    pygments_style : str
        Pygments style used by the in-process converter.
    """

    source_dir: Path = DEFAULT_SOURCE_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    template: str | None = None
    converter: str = "auto"
    converter_timeout: float = DEFAULT_TIMEOUT
    pygments_style: str = "monokai"

    def validate(self) -> BuildConfig:
        """Return a copy with absolute roots, checking they do not coincide.

        Raises
        ------
        BuildConfigError
            If the source directory is missing or equals the output or
            templates directory, or the converter settings are invalid.
        """
        resolved = dc.replace(
            self,
            source_dir=self.source_dir.resolve(),
            output_dir=self.output_dir.resolve(),
            templates_dir=self.templates_dir.resolve(),
        )
        if resolved.source_dir == resolved.output_dir:
            msg = "Source and destination directories cannot be the same."
            raise BuildConfigError(msg)
        if resolved.source_dir == resolved.templates_dir:
            msg = "Source and templates directories cannot be the same."
            raise BuildConfigError(msg)
        if not resolved.source_dir.is_dir():
            msg = f"Source directory '{resolved.source_dir}' does not exist."
            raise BuildConfigError(msg)
        if resolved.converter not in CONVERTERS:
            msg = (
                f"Unknown converter {resolved.converter!r}; "
                f"expected one of {', '.join(CONVERTERS)}."
            )
            raise BuildConfigError(msg)
        if resolved.converter_timeout <= 0:
            msg = "Converter timeout must be a positive number of seconds."
            raise BuildConfigError(msg)
        return resolved


__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_SOURCE_DIR",
    "DEFAULT_TEMPLATES_DIR",
    "BuildConfig",
    "BuildConfigError",
]
