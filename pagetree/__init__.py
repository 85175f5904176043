"""Render a tree of Markdown documents into a tree of linked HTML pages.

This package exposes the CLI entry points used by the ``pagetree`` console
script to render a source tree, preview the output over HTTP, and scaffold
example content.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pagetree import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
