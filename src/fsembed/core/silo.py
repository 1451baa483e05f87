"""Flat file tables layered with override precedence.

A :class:`Silo` treats a root as a flat mapping of relative path -> file
rather than a tree: embedded silos iterate their table directly, on-disk
silos walk the directory. :class:`SiloSet` layers silos the same way
:class:`~fsembed.core.dirset.DirSet` layers directories.
"""

from __future__ import annotations

import itertools
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .config import dynamic_mode_enabled
from .directory import Directory, Entry
from .embed.table import EmbeddedTable, normalize_relpath
from .file import File
from .walk import FirstByPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class EmbeddedSiloBacking:
    table: EmbeddedTable


@dataclass(frozen=True, eq=False)
class DiskSiloBacking:
    root: Path


SiloBacking = Union[EmbeddedSiloBacking, DiskSiloBacking]


class Silo:
    """One root of a :class:`SiloSet`, embedded or on disk."""

    __slots__ = ("_backing",)

    def __init__(self, backing: SiloBacking) -> None:
        self._backing = backing

    @classmethod
    def from_embedded(cls, table: EmbeddedTable) -> "Silo":
        return cls(EmbeddedSiloBacking(table))

    @classmethod
    def from_path(cls, path: Path | str) -> "Silo":
        return cls(DiskSiloBacking(Path(path).expanduser().resolve()))

    def __repr__(self) -> str:
        backing = self._backing
        if isinstance(backing, EmbeddedSiloBacking):
            return f"Silo(embedded {backing.table.source_root!r})"
        return f"Silo({str(backing.root)!r})"

    @property
    def is_embedded(self) -> bool:
        return isinstance(self._backing, EmbeddedSiloBacking)

    @property
    def is_dynamic(self) -> bool:
        return isinstance(self._backing, DiskSiloBacking)

    def get_file(self, path: str) -> Optional[File]:
        rel = normalize_relpath(path)
        if not rel:
            return None
        backing = self._backing
        if isinstance(backing, EmbeddedSiloBacking):
            entry = backing.table.get_file(rel)
            return File.from_embedded(entry) if entry is not None else None
        candidate = backing.root / rel
        if candidate.is_file() and not candidate.is_symlink():
            return File.from_disk(backing.root, candidate)
        return None

    def files(self) -> Iterator[File]:
        """Every file in the silo, sorted by relative path for embedded silos
        and in sorted depth-first order on disk. Unreadable directories are
        skipped."""
        backing = self._backing
        if isinstance(backing, EmbeddedSiloBacking):
            return (File.from_embedded(entry) for entry in backing.table)
        return self._disk_files(backing.root)

    @staticmethod
    def _disk_files(root: Path) -> Iterator[File]:
        for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
            dirnames.sort()
            for name in sorted(filenames):
                full = Path(dirpath) / name
                if full.is_file() and not full.is_symlink():
                    yield File.from_disk(root, full)

    def as_directory(self) -> Directory:
        """The silo's root viewed as a :class:`Directory` tree."""
        backing = self._backing
        if isinstance(backing, EmbeddedSiloBacking):
            return Directory.from_embedded(backing.table)
        return Directory.from_path(backing.root)

    def entries(self) -> List[Entry]:
        """Top-level entries of the silo."""
        return self.as_directory().entries()

    def into_dynamic(self) -> "Silo":
        backing = self._backing
        if isinstance(backing, EmbeddedSiloBacking):
            root = Path(backing.table.source_root)
            if not root.is_dir():
                logger.warning("Embedded source root %s is not a directory on this machine", root)
            return Silo(DiskSiloBacking(root))
        return self

    def auto_dynamic(self) -> "Silo":
        if dynamic_mode_enabled():
            return self.into_dynamic()
        return self


class SiloSet:
    """Silos layered with override precedence (last wins)."""

    __slots__ = ("_silos",)

    def __init__(self, silos: Iterable[Silo] = ()) -> None:
        self._silos: Tuple[Silo, ...] = tuple(silos)

    @property
    def silos(self) -> Tuple[Silo, ...]:
        """Silos in low -> high precedence order."""
        return self._silos

    def __len__(self) -> int:
        return len(self._silos)

    def __repr__(self) -> str:
        return f"SiloSet({list(self._silos)!r})"

    def get_file(self, name: str) -> Optional[File]:
        for silo in reversed(self._silos):
            file = silo.get_file(name)
            if file is not None:
                return file
        return None

    def entries(self) -> List[Entry]:
        """Top-level entries of every silo, in silo order, not deduplicated."""
        result: List[Entry] = []
        for silo in self._silos:
            result.extend(silo.entries())
        return result

    def walk(self) -> Iterator[File]:
        """Every file of every silo, highest precedence first, duplicates included."""
        return itertools.chain.from_iterable(silo.files() for silo in reversed(self._silos))

    def walk_override(self) -> FirstByPath:
        """One file per relative path, taken from the highest-precedence silo."""
        return FirstByPath(self.walk())

    def into_dynamic(self) -> "SiloSet":
        return SiloSet(s.into_dynamic() for s in self._silos)

    def auto_dynamic(self) -> "SiloSet":
        return SiloSet(s.auto_dynamic() for s in self._silos)


__all__ = ["Silo", "SiloSet", "SiloBacking", "EmbeddedSiloBacking", "DiskSiloBacking"]
