"""Exception hierarchy raised by the pagetree build pipeline.

Every stage wraps low-level failures (``OSError``, subprocess and template
errors) into one of these types so the CLI can report a single descriptive
message. Nothing in the pipeline catches these to continue past a failure:
the first error aborts the whole build.
"""

from __future__ import annotations


class PagetreeError(RuntimeError):
    """Base class for every failure that aborts a build."""


class TraversalError(PagetreeError):
    """Raised when a source tree entry cannot be listed or stat-ed."""


class ConversionError(PagetreeError):
    """Raised when Markdown conversion fails or exceeds its deadline."""


class MarkupError(PagetreeError):
    """Raised when an HTML fragment cannot be tokenized or parsed."""


class WriteError(PagetreeError):
    """Raised when a destination directory, link, copy, or file cannot be written."""


class TemplateRenderError(PagetreeError):
    """Raised when the page template cannot be loaded or rendered."""


class BuildConfigError(PagetreeError, ValueError):
    """Raised when the build configuration is invalid or incomplete."""


__all__ = [
    "BuildConfigError",
    "ConversionError",
    "MarkupError",
    "PagetreeError",
    "TemplateRenderError",
    "TraversalError",
    "WriteError",
]
