"""Cyclopts CLI entrypoint for rendering and previewing pagetree sites.

The ``pagetree`` console script defined here renders a tree of Markdown
documents into linked HTML pages, serves a rendered tree for local preview,
and scaffolds example content for a new site. Every option can also be set
through a ``PAGETREE_*`` environment variable.

Examples
--------
Render the current directory into ``output``:

>>> from pagetree.cli import main
>>> main()  # doctest: +SKIP

Render a docs tree with an explicit template directory:

>>> from pagetree.cli import app
>>> app(
...     ["render", "--src", "docs", "--dst", "site", "--templates", "tpl"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_build_config
from .config.models import DEFAULT_OUTPUT_DIR, DEFAULT_SOURCE_DIR, DEFAULT_TEMPLATES_DIR
from .errors import PagetreeError
from .generator import SiteBuilder
from .scaffold import generate_example_content
from .serve import DEFAULT_ADDR, serve as serve_directory

app = App(name="pagetree", config=cyclopts.config.Env("PAGETREE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(exc: Exception) -> typ.NoReturn:
    """Report ``exc`` as a single line on stderr and exit with status 1."""
    print(exc, file=sys.stderr)
    raise SystemExit(1) from exc


@app.command(help="Render a tree of Markdown documents into HTML pages.")
def render(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Optional YAML build configuration")
    ] = None,
    src: typ.Annotated[
        Path | None, Parameter(help="Source directory with .md files")
    ] = None,
    dst: typ.Annotated[
        Path | None, Parameter(help="Destination directory for rendered files")
    ] = None,
    templates: typ.Annotated[
        Path | None, Parameter(help="Directory with .html templates")
    ] = None,
    template: typ.Annotated[
        str | None, Parameter(help="Template file name used for every page")
    ] = None,
    converter: typ.Annotated[
        str | None, Parameter(help="Markdown converter: auto, markdown or cmark-gfm")
    ] = None,
    converter_timeout: typ.Annotated[
        float | None, Parameter(help="Deadline in seconds for cmark-gfm")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log every build step")] = False,
) -> None:
    """Render the source tree and synthesize directory indexes.

    Parameters
    ----------
    config : Path or None, optional
        YAML file providing defaults for the other options.
    src : Path or None, optional
        Source root; defaults to the current directory.
    dst : Path or None, optional
        Output root; defaults to ``output``.
    templates : Path or None, optional
        Templates directory; defaults to ``templates``.
    template : str or None, optional
        Template name; defaults to the lexically first ``*.html`` template.
    converter : str or None, optional
        Conversion backend; defaults to ``auto``.
    converter_timeout : float or None, optional
        Deadline for one external conversion; defaults to two seconds.
    verbose : bool, optional
        Enable INFO logging of every build step.

    Returns
    -------
    None
        Writes the output tree and prints the generated index paths.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        build_config = load_build_config(
            config,
            source_dir=src,
            output_dir=dst,
            templates_dir=templates,
            template=template,
            converter=converter,
            converter_timeout=converter_timeout,
        )
        builder = SiteBuilder(build_config)
        report = builder.run()
    except (PagetreeError, FileNotFoundError) as exc:
        _fail(exc)
    for path in report.indexes:
        print(f"wrote {_format_path(path)}")
    output_dir = _format_path(builder.config.output_dir)
    print(f"rendered {len(report.written)} files into {output_dir}")


@app.command(help="Serve a rendered output directory over HTTP for local preview.")
def serve(
    *,
    dst: typ.Annotated[
        Path, Parameter(help="Directory with rendered files")
    ] = DEFAULT_OUTPUT_DIR,
    addr: typ.Annotated[str, Parameter(help="host:port to listen on")] = DEFAULT_ADDR,
) -> None:
    """Serve ``dst`` until interrupted."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        serve_directory(addr, dst)
    except (OSError, ValueError) as exc:
        _fail(exc)


@app.command(help="Generate example content and a default template.")
def example(
    *,
    src: typ.Annotated[
        Path, Parameter(help="Directory to receive example .md files")
    ] = DEFAULT_SOURCE_DIR,
    templates: typ.Annotated[
        Path, Parameter(help="Directory to receive the default template")
    ] = DEFAULT_TEMPLATES_DIR,
) -> None:
    """Scaffold example content, refusing to overwrite existing files."""
    try:
        written = generate_example_content(src, templates)
    except PagetreeError as exc:
        _fail(exc)
    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pagetree` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
