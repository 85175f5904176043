"""Scaffold an example source tree and page template for a new site.

The example content ships inside the package (``pagetree/example``) and
shows the reserved file names at work: a ``README.md`` that seeds the root
index, a top-level page, and a subdirectory that becomes a category.
Existing files are never overwritten.
"""

from __future__ import annotations

import typing as typ
from importlib import resources
from pathlib import Path

from pagetree.errors import BuildConfigError, WriteError

if typ.TYPE_CHECKING:
    from importlib.resources.abc import Traversable

EXAMPLE_TEMPLATE_NAME = "default.html"


def generate_example_content(root_dir: Path, templates_dir: Path) -> list[Path]:
    """Write the packaged example tree and default template.

    Parameters
    ----------
    root_dir : Path
        Source directory that receives the example Markdown documents.
    templates_dir : Path
        Directory that receives ``default.html``.

    Returns
    -------
    list[Path]
        Files written, content first and the template last.

    Raises
    ------
    BuildConfigError
        If both directories resolve to the same path.
    WriteError
        If a target file already exists or cannot be written.
    """
    if root_dir.resolve() == templates_dir.resolve():
        msg = "Source and templates directories cannot be the same."
        raise BuildConfigError(msg)

    example = resources.files("pagetree") / "example"
    written: list[Path] = []
    for relative, resource in _iter_resources(example / "content"):
        target = root_dir.joinpath(*relative)
        _write_if_not_exists(target, resource.read_bytes())
        written.append(target)
    template = example / "templates" / EXAMPLE_TEMPLATE_NAME
    target = templates_dir / EXAMPLE_TEMPLATE_NAME
    _write_if_not_exists(target, template.read_bytes())
    written.append(target)
    return written


def _iter_resources(
    node: Traversable, prefix: tuple[str, ...] = ()
) -> typ.Iterator[tuple[tuple[str, ...], Traversable]]:
    """Yield ``(relative parts, resource)`` for every file under ``node``."""
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        parts = (*prefix, child.name)
        if child.is_dir():
            yield from _iter_resources(child, parts)
        else:
            yield parts, child


def _write_if_not_exists(target: Path, payload: bytes) -> None:
    """Create ``target`` with ``payload``, failing when it already exists."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("xb") as handle:
            handle.write(payload)
    except FileExistsError as exc:
        msg = f"Refusing to overwrite existing file '{target}'."
        raise WriteError(msg) from exc
    except OSError as exc:
        msg = f"Cannot write '{target}': {exc}"
        raise WriteError(msg) from exc


__all__ = ["EXAMPLE_TEMPLATE_NAME", "generate_example_content"]
