"""Static path tables backing embedded directories.

An :class:`EmbeddedTable` is what the embedding build step produces: every
file of a directory tree keyed by its root-relative POSIX path, together with
the absolute path the tree was captured from. Directory membership is
precomputed once so listing and lookup never touch the filesystem.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


def normalize_relpath(name: str) -> Optional[str]:
    """Normalize ``name`` into a root-relative POSIX path.

    Returns ``""`` for the root itself and ``None`` when the name escapes
    the root.
    """
    text = str(name).replace("\\", "/")
    text = text.lstrip("/")
    if not text:
        return ""
    norm = posixpath.normpath(text)
    if norm == ".":
        return ""
    if norm == ".." or norm.startswith("../"):
        return None
    return norm


def join_relpath(base: str, name: str) -> Optional[str]:
    """Join ``name`` onto the relative directory ``base`` and normalize."""
    if not base:
        return normalize_relpath(name)
    return normalize_relpath(f"{base}/{name}")


@dataclass(frozen=True)
class EmbeddedEntry:
    """Contents and baked-in metadata of one embedded file."""

    path: str
    contents: bytes
    modified: Optional[float] = None

    @property
    def size(self) -> int:
        return len(self.contents)


@dataclass(frozen=True)
class _DirIndex:
    files: Tuple[str, ...]
    dirs: Tuple[str, ...]


_EMPTY_INDEX = _DirIndex(files=(), dirs=())


@dataclass(frozen=True)
class EmbeddedTable:
    """Immutable mapping of relative path -> :class:`EmbeddedEntry`."""

    source_root: str
    entries: Mapping[str, EmbeddedEntry]
    _index: Mapping[str, _DirIndex] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        files: Dict[str, EmbeddedEntry] = {}
        for key, entry in self.entries.items():
            rel = normalize_relpath(key)
            if not rel:
                raise ValueError(f"Invalid embedded path: {key!r}")
            if rel != entry.path:
                entry = EmbeddedEntry(path=rel, contents=entry.contents, modified=entry.modified)
            files[rel] = entry

        child_files: Dict[str, List[str]] = {"": []}
        child_dirs: Dict[str, set] = {"": set()}
        for rel in files:
            parent = posixpath.dirname(rel)
            child_files.setdefault(parent, []).append(rel)
            # Register every ancestor so intermediate directories are listable.
            while parent:
                grand = posixpath.dirname(parent)
                child_dirs.setdefault(grand, set()).add(parent)
                child_files.setdefault(parent, [])
                parent = grand

        index = {
            d: _DirIndex(
                files=tuple(sorted(child_files.get(d, ()))),
                dirs=tuple(sorted(child_dirs.get(d, ()))),
            )
            for d in set(child_files) | set(child_dirs)
        }
        object.__setattr__(self, "entries", MappingProxyType(dict(sorted(files.items()))))
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_files(
        cls, source_root: str, files: Iterable[EmbeddedEntry]
    ) -> "EmbeddedTable":
        return cls(source_root=str(source_root), entries={e.path: e for e in files})

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[EmbeddedEntry]:
        return iter(self.entries.values())

    def get_file(self, path: str) -> Optional[EmbeddedEntry]:
        rel = normalize_relpath(path)
        if not rel:
            return None
        return self.entries.get(rel)

    def has_dir(self, path: str) -> bool:
        rel = normalize_relpath(path)
        if rel is None:
            return False
        return rel in self._index

    def child_files(self, path: str) -> Tuple[str, ...]:
        """Relative paths of files exactly one level below ``path``."""
        rel = normalize_relpath(path)
        if rel is None:
            return ()
        return self._index.get(rel, _EMPTY_INDEX).files

    def child_dirs(self, path: str) -> Tuple[str, ...]:
        """Relative paths of directories exactly one level below ``path``."""
        rel = normalize_relpath(path)
        if rel is None:
            return ()
        return self._index.get(rel, _EMPTY_INDEX).dirs


__all__ = [
    "EmbeddedEntry",
    "EmbeddedTable",
    "normalize_relpath",
    "join_relpath",
]
