"""Directory handles and traversal entries.

Directories never hold their children; every listing is computed on demand
from the embedded table or from one OS directory read. Hierarchy is derived
purely from relative path strings, so handles are cheap to copy and compare.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, List, Optional, Union

from .config import dynamic_mode_enabled
from .embed.table import EmbeddedTable, join_relpath, normalize_relpath
from .file import File, relative_posix

if TYPE_CHECKING:
    from .walk import Walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class EmbeddedDirBacking:
    table: EmbeddedTable
    path: str


@dataclass(frozen=True, eq=False)
class DiskDirBacking:
    root: Path
    path: Path


DirBacking = Union[EmbeddedDirBacking, DiskDirBacking]


def _lookup_name(name: str) -> Optional[str]:
    rel = normalize_relpath(name)
    return rel or None


class Directory:
    """A directory, embedded or on disk."""

    __slots__ = ("_backing",)

    def __init__(self, backing: DirBacking) -> None:
        self._backing = backing

    @classmethod
    def from_embedded(cls, table: EmbeddedTable, path: str = "") -> "Directory":
        """Root (or sub-directory ``path``) of an embedded table."""
        rel = normalize_relpath(path)
        if rel is None:
            raise ValueError(f"Embedded directory path escapes its root: {path!r}")
        return cls(EmbeddedDirBacking(table=table, path=rel))

    @classmethod
    def from_path(cls, path: Path | str) -> "Directory":
        """A filesystem root at ``path``; relative paths resolve against the cwd."""
        root = Path(path).expanduser().resolve()
        return cls(DiskDirBacking(root=root, path=root))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        kind = "embedded" if self.is_embedded else "disk"
        return f"Directory({str(self.path)!r}, {kind})"

    @property
    def path(self) -> PurePosixPath:
        backing = self._backing
        if isinstance(backing, EmbeddedDirBacking):
            return PurePosixPath(backing.path)
        return relative_posix(backing.root, backing.path)

    @property
    def absolute_path(self) -> Union[Path, PurePosixPath]:
        backing = self._backing
        if isinstance(backing, EmbeddedDirBacking):
            return PurePosixPath(backing.path)
        return backing.path

    @property
    def is_embedded(self) -> bool:
        return isinstance(self._backing, EmbeddedDirBacking)

    def entries(self) -> List["Entry"]:
        """Immediate children: files first, then sub-directories, by name.

        An unreadable on-disk directory lists as empty.
        """
        backing = self._backing
        if isinstance(backing, EmbeddedDirBacking):
            table = backing.table
            result: List[Entry] = []
            for rel in table.child_files(backing.path):
                entry = table.get_file(rel)
                if entry is not None:
                    result.append(Entry.from_file(File.from_embedded(entry)))
            for rel in table.child_dirs(backing.path):
                result.append(Entry.from_dir(Directory(EmbeddedDirBacking(table=table, path=rel))))
            return result

        files: List[Entry] = []
        dirs: List[Entry] = []
        try:
            with os.scandir(backing.path) as it:
                children = sorted(it, key=lambda c: c.name)
        except OSError as exc:
            logger.debug("Treating unreadable directory %s as empty: %s", backing.path, exc)
            return []

        for child in children:
            child_path = backing.path / child.name
            try:
                if child.is_symlink():
                    continue
                is_file = child.is_file()
                is_dir = not is_file and child.is_dir()
            except OSError as exc:
                logger.debug("Skipping unreadable entry %s: %s", child_path, exc)
                continue
            if is_file:
                files.append(Entry.from_file(File.from_disk(backing.root, child_path)))
            elif is_dir:
                dirs.append(Entry.from_dir(Directory(DiskDirBacking(root=backing.root, path=child_path))))
        return files + dirs

    def get_file(self, name: str) -> Optional[File]:
        """Return the regular file at ``name`` (relative to this directory)."""
        rel = _lookup_name(name)
        if rel is None:
            return None
        backing = self._backing
        if isinstance(backing, EmbeddedDirBacking):
            full = join_relpath(backing.path, rel)
            entry = backing.table.get_file(full) if full else None
            return File.from_embedded(entry) if entry is not None else None

        candidate = backing.path / rel
        if candidate.is_file() and not candidate.is_symlink():
            return File.from_disk(backing.root, candidate)
        return None

    def get_dir(self, name: str) -> Optional["Directory"]:
        """Return the sub-directory at ``name`` (relative to this directory)."""
        rel = _lookup_name(name)
        if rel is None:
            return None
        backing = self._backing
        if isinstance(backing, EmbeddedDirBacking):
            full = join_relpath(backing.path, rel)
            if full and backing.table.has_dir(full):
                return Directory(EmbeddedDirBacking(table=backing.table, path=full))
            return None

        candidate = backing.path / rel
        if candidate.is_dir() and not candidate.is_symlink():
            return Directory(DiskDirBacking(root=backing.root, path=candidate))
        return None

    def walk(self) -> "Walk":
        """Lazily yield every file below this directory, breadth-first."""
        from .walk import Walk

        return Walk([self])

    def into_dynamic(self) -> "Directory":
        """Read from the source tree the embedded table was captured from.

        On-disk directories are returned unchanged.
        """
        backing = self._backing
        if isinstance(backing, DiskDirBacking):
            return self
        root = Path(backing.table.source_root)
        if not root.is_dir():
            logger.warning(
                "Embedded source root %s is not a directory on this machine; dynamic reads will find nothing",
                root,
            )
        path = root.joinpath(*backing.path.split("/")) if backing.path else root
        logger.debug("Switching embedded directory %r to disk at %s", backing.path, path)
        return Directory(DiskDirBacking(root=root, path=path))

    def auto_dynamic(self) -> "Directory":
        """``into_dynamic()`` when dynamic mode is on, otherwise ``self``."""
        if dynamic_mode_enabled():
            return self.into_dynamic()
        return self


class Entry:
    """A file or a directory, as found while listing or walking."""

    __slots__ = ("_node",)

    def __init__(self, node: Union[File, Directory]) -> None:
        self._node = node

    @classmethod
    def from_file(cls, file: File) -> "Entry":
        return cls(file)

    @classmethod
    def from_dir(cls, directory: Directory) -> "Entry":
        return cls(directory)

    def _key(self) -> tuple:
        return (self.is_file, self._node.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Entry({self._node!r})"

    @property
    def is_file(self) -> bool:
        return isinstance(self._node, File)

    @property
    def is_dir(self) -> bool:
        return isinstance(self._node, Directory)

    @property
    def is_embedded(self) -> bool:
        return self._node.is_embedded

    @property
    def path(self) -> PurePosixPath:
        return self._node.path

    @property
    def absolute_path(self) -> Union[Path, PurePosixPath]:
        return self._node.absolute_path

    def as_file(self) -> Optional[File]:
        node = self._node
        return node if isinstance(node, File) else None

    def as_dir(self) -> Optional[Directory]:
        node = self._node
        return node if isinstance(node, Directory) else None


__all__ = [
    "Directory",
    "Entry",
    "DirBacking",
    "EmbeddedDirBacking",
    "DiskDirBacking",
]
