"""Ordered overlays of directories.

A :class:`DirSet` holds roots in low -> high precedence order: a file in a
later root shadows the file with the same relative path in every earlier
root, much like a union filesystem.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .directory import Directory, Entry
from .file import File
from .walk import OverrideWalk, Walk


class DirSet:
    """Directories layered with override precedence (last wins)."""

    __slots__ = ("_dirs",)

    def __init__(self, dirs: Iterable[Directory] = ()) -> None:
        self._dirs: Tuple[Directory, ...] = tuple(dirs)

    @property
    def dirs(self) -> Tuple[Directory, ...]:
        """Roots in low -> high precedence order."""
        return self._dirs

    def __len__(self) -> int:
        return len(self._dirs)

    def __iter__(self) -> Iterator[Directory]:
        return iter(self._dirs)

    def __repr__(self) -> str:
        return f"DirSet({list(self._dirs)!r})"

    def entries(self) -> List[Entry]:
        """Immediate entries of every root, in root order, not deduplicated."""
        result: List[Entry] = []
        for directory in self._dirs:
            result.extend(directory.entries())
        return result

    def get_file(self, name: str) -> Optional[File]:
        """Return ``name`` from the highest-precedence root that has it."""
        for directory in reversed(self._dirs):
            file = directory.get_file(name)
            if file is not None:
                return file
        return None

    def get_dir(self, name: str) -> Optional[Directory]:
        """Return sub-directory ``name`` from the highest-precedence root."""
        for directory in reversed(self._dirs):
            sub = directory.get_dir(name)
            if sub is not None:
                return sub
        return None

    def walk(self) -> Walk:
        """Every file of every root, in root order, duplicates included."""
        return Walk(self._dirs)

    def walk_override(self) -> OverrideWalk:
        """One file per relative path, taken from the highest-precedence root."""
        return OverrideWalk(self._dirs)

    def into_dynamic(self) -> "DirSet":
        return DirSet(d.into_dynamic() for d in self._dirs)

    def auto_dynamic(self) -> "DirSet":
        return DirSet(d.auto_dynamic() for d in self._dirs)


__all__ = ["DirSet"]
