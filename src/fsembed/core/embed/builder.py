"""Build-time snapshotting of directory trees into :class:`EmbeddedTable`s."""

from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Iterator, List, Optional

from fsembed.core.exceptions import EmbedError

from .table import EmbeddedEntry, EmbeddedTable

logger = logging.getLogger(__name__)


def _iter_tree(root: Path) -> Iterator[Path]:
    # Sorted, symlinks skipped, deterministic across platforms.
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if not os.path.islink(os.path.join(dirpath, d)))
        for name in sorted(filenames):
            full = Path(dirpath) / name
            if full.is_symlink() or not full.is_file():
                continue
            yield full


def embed_dir(path: Path | str, *, include_metadata: bool = True) -> EmbeddedTable:
    """Snapshot the directory at ``path`` into an :class:`EmbeddedTable`.

    The table records the resolved absolute ``path`` as its ``source_root`` so
    an embedded directory can later be switched back to reading from disk.

    Args:
        path: Directory to capture.
        include_metadata: When False, files are stored without modification
            times and ``File.metadata()`` reports them as unavailable.

    Raises:
        EmbedError: ``path`` does not exist or is not a directory.
    """
    root = Path(path).expanduser()
    try:
        root = root.resolve(strict=True)
    except OSError as exc:
        raise EmbedError(
            f"Cannot embed {path}: directory not found",
            context={"path": str(path)},
        ) from exc
    if not root.is_dir():
        raise EmbedError(f"Cannot embed {path}: not a directory", context={"path": str(root)})

    files: List[EmbeddedEntry] = []
    for full in _iter_tree(root):
        try:
            contents = full.read_bytes()
            modified: Optional[float] = full.stat().st_mtime if include_metadata else None
        except OSError as exc:
            raise EmbedError(
                f"Cannot embed {full}: {exc}",
                context={"path": str(full)},
            ) from exc
        files.append(
            EmbeddedEntry(
                path=full.relative_to(root).as_posix(),
                contents=contents,
                modified=modified,
            )
        )

    table = EmbeddedTable.from_files(str(root), files)
    logger.info("Embedded %d file(s) from %s", len(table), root)
    return table


def _walk_traversable(node: Any, prefix: str) -> Iterator[tuple[str, Any]]:
    children = sorted(node.iterdir(), key=lambda c: c.name)
    for child in children:
        rel = f"{prefix}/{child.name}" if prefix else child.name
        if child.is_dir():
            if child.name == "__pycache__":
                continue
            yield from _walk_traversable(child, rel)
        elif child.is_file():
            yield rel, child


def embed_package(package: str, subpath: str = "", *, include_metadata: bool = True) -> EmbeddedTable:
    """Snapshot data bundled inside an importable package.

    Uses ``importlib.resources`` so it also works for packages installed as
    zip archives. Modification times are only recorded when the resource lives
    on a real filesystem.

    Example:
        >>> table = embed_package("myapp.data", "templates")
    """
    try:
        base = resources.files(package)
    except ModuleNotFoundError as exc:
        raise EmbedError(
            f"Cannot embed package data: package '{package}' not found",
            context={"package": package},
        ) from exc

    for part in [p for p in subpath.replace("\\", "/").split("/") if p]:
        base = base / part
    if not base.is_dir():
        raise EmbedError(
            f"Cannot embed package data: '{subpath}' is not a directory in '{package}'",
            context={"package": package, "subpath": subpath},
        )

    files: List[EmbeddedEntry] = []
    for rel, node in _walk_traversable(base, ""):
        modified: Optional[float] = None
        if include_metadata and isinstance(node, Path):
            modified = node.stat().st_mtime
        files.append(EmbeddedEntry(path=rel, contents=node.read_bytes(), modified=modified))

    source_root = str(base) if isinstance(base, Path) else f"{package}:{subpath}"
    table = EmbeddedTable.from_files(source_root, files)
    logger.info("Embedded %d file(s) from package %s", len(table), package)
    return table


__all__ = ["embed_dir", "embed_package"]
