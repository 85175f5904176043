"""Materialize build outputs on disk with stable modification times.

Mirrored files are hard-linked when possible and copied otherwise; generated
pages are written fresh. Both paths stamp the destination's mtime so that
re-running a build over an unchanged tree leaves timestamps untouched, while
a template edit (tracked through the watermark) marks every generated page
as newer.
"""

from __future__ import annotations

import os
import shutil
import typing as typ

from pagetree.errors import TraversalError, WriteError

if typ.TYPE_CHECKING:
    from pathlib import Path


def latest_mtime(paths: typ.Iterable[Path]) -> int:
    """Return the most recent mtime of ``paths`` in nanoseconds (0 when empty).

    Raises
    ------
    TraversalError
        If any path cannot be stat-ed.
    """
    latest = 0
    for path in paths:
        try:
            mtime = path.stat().st_mtime_ns
        except OSError as exc:
            msg = f"Cannot stat '{path}': {exc}"
            raise TraversalError(msg) from exc
        latest = max(latest, mtime)
    return latest


def mirror_file(destination: Path, source: Path) -> None:
    """Make ``destination`` mirror ``source`` via a hard link or a byte copy.

    An existing destination that is already the same file as ``source`` is
    left alone. Otherwise the destination is removed, a hard link is tried,
    and a full copy is made when linking fails (for example across devices).
    The destination's mtime is set to the source's afterwards.

    Raises
    ------
    WriteError
        If ``source`` and ``destination`` are the same path, or any
        filesystem operation fails.
    """
    if source == destination:
        msg = f"Source and destination cannot be the same: '{source}'"
        raise WriteError(msg)
    if _same_file(source, destination):
        return
    try:
        source_stat = source.stat()
        destination.unlink(missing_ok=True)
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.link(source, destination)
        except OSError:
            shutil.copyfile(source, destination)
        _stamp(destination, source_stat.st_mtime_ns)
    except OSError as exc:
        msg = f"Cannot mirror '{source}' to '{destination}': {exc}"
        raise WriteError(msg) from exc


def write_generated(
    destination: Path,
    content: str,
    *,
    watermark: int = 0,
    source: Path | None = None,
) -> None:
    """Write generated ``content`` to ``destination`` and stamp its mtime.

    Parameters
    ----------
    destination : Path
        File to create or truncate; parent directories are created.
    content : str
        Rendered page, written as UTF-8.
    watermark : int, optional
        Run watermark in nanoseconds; the stamped mtime never goes below it.
    source : Path, optional
        Source document whose own mtime is also considered. Synthetic index
        pages have no source.

    Raises
    ------
    WriteError
        If the destination equals the source or cannot be written.
    """
    if source is not None and source == destination:
        msg = f"Source and destination cannot be the same: '{source}'"
        raise WriteError(msg)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        # a previous run may have left a hard link to a source file here
        destination.unlink(missing_ok=True)
        destination.write_text(content, encoding="utf-8")
        mtime = watermark
        if source is not None:
            mtime = max(mtime, source.stat().st_mtime_ns)
        if mtime:
            _stamp(destination, mtime)
    except OSError as exc:
        msg = f"Cannot write '{destination}': {exc}"
        raise WriteError(msg) from exc


def _same_file(source: Path, destination: Path) -> bool:
    try:
        return os.path.samefile(source, destination)
    except OSError:
        return False


def _stamp(path: Path, mtime_ns: int) -> None:
    os.utime(path, ns=(mtime_ns, mtime_ns))


__all__ = ["latest_mtime", "mirror_file", "write_generated"]
