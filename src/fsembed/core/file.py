"""File handles over embedded tables or the live filesystem.

A :class:`File` is identified by its root-relative path alone: an embedded
``alpha.txt`` and an on-disk ``alpha.txt`` compare equal and hash the same,
whatever their contents. This is what lets overlay walks deduplicate files
coming from different roots.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional, Union

from .embed.table import EmbeddedEntry
from .exceptions import DecodeError, FileReadError, MetadataUnavailableError


@dataclass(frozen=True)
class FileMetadata:
    """Modification time (POSIX timestamp) and size in bytes."""

    modified: float
    size: int


@dataclass(frozen=True, eq=False)
class EmbeddedFileBacking:
    entry: EmbeddedEntry


@dataclass(frozen=True, eq=False)
class DiskFileBacking:
    root: Path
    path: Path


FileBacking = Union[EmbeddedFileBacking, DiskFileBacking]


def relative_posix(root: Path, path: Path) -> PurePosixPath:
    """Strip ``root`` from ``path``; fall back to ``path`` when unrelated."""
    try:
        return PurePosixPath(path.relative_to(root).as_posix())
    except ValueError:
        return PurePosixPath(path.as_posix())


class File:
    """A single file, embedded or on disk."""

    __slots__ = ("_backing",)

    def __init__(self, backing: FileBacking) -> None:
        self._backing = backing

    @classmethod
    def from_embedded(cls, entry: EmbeddedEntry) -> "File":
        return cls(EmbeddedFileBacking(entry))

    @classmethod
    def from_disk(cls, root: Path, path: Path) -> "File":
        return cls(DiskFileBacking(root=Path(root), path=Path(path)))

    # -- identity -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, File):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        kind = "embedded" if self.is_embedded else "disk"
        return f"File({str(self.path)!r}, {kind})"

    # -- paths --------------------------------------------------------------

    @property
    def path(self) -> PurePosixPath:
        """Path relative to the root this file was found under."""
        backing = self._backing
        if isinstance(backing, EmbeddedFileBacking):
            return PurePosixPath(backing.entry.path)
        return relative_posix(backing.root, backing.path)

    @property
    def absolute_path(self) -> Union[Path, PurePosixPath]:
        """Location on disk; embedded files have none and report ``path``."""
        backing = self._backing
        if isinstance(backing, EmbeddedFileBacking):
            return PurePosixPath(backing.entry.path)
        return backing.path

    @property
    def file_name(self) -> Optional[str]:
        return self.path.name or None

    @property
    def extension(self) -> Optional[str]:
        """Extension without the leading dot, e.g. ``"txt"``."""
        suffix = self.path.suffix
        return suffix[1:] if suffix else None

    @property
    def is_embedded(self) -> bool:
        return isinstance(self._backing, EmbeddedFileBacking)

    # -- content ------------------------------------------------------------

    def read_bytes(self) -> bytes:
        """Return the file contents.

        On-disk files are read on every call.

        Raises:
            FileReadError: the on-disk file cannot be read.
        """
        backing = self._backing
        if isinstance(backing, EmbeddedFileBacking):
            return backing.entry.contents
        try:
            return backing.path.read_bytes()
        except OSError as exc:
            raise FileReadError(
                f"Failed to read {backing.path}: {exc.strerror or exc}",
                path=str(backing.path),
                errno=exc.errno,
            ) from exc

    def read_text(self) -> str:
        """Return the contents decoded as UTF-8.

        Raises:
            DecodeError: the contents are not valid UTF-8.
            FileReadError: the on-disk file cannot be read.
        """
        data = self.read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"Failed to decode file contents: {exc}",
                path=str(self.path),
            ) from exc

    def open(self) -> BinaryIO:
        """Return a binary reader over the contents; close it when done."""
        backing = self._backing
        if isinstance(backing, EmbeddedFileBacking):
            return io.BytesIO(backing.entry.contents)
        try:
            return open(backing.path, "rb")
        except OSError as exc:
            raise FileReadError(
                f"Failed to open {backing.path}: {exc.strerror or exc}",
                path=str(backing.path),
                errno=exc.errno,
            ) from exc

    def metadata(self) -> FileMetadata:
        """Return modification time and size.

        Raises:
            MetadataUnavailableError: embedded without baked-in metadata.
            FileReadError: the on-disk file cannot be stat-ed.
        """
        backing = self._backing
        if isinstance(backing, EmbeddedFileBacking):
            entry = backing.entry
            if entry.modified is None:
                raise MetadataUnavailableError(
                    "Failed to get embedded file metadata",
                    context={"path": entry.path},
                )
            return FileMetadata(modified=entry.modified, size=entry.size)
        try:
            st = backing.path.stat()
        except OSError as exc:
            raise FileReadError(
                f"Failed to stat {backing.path}: {exc.strerror or exc}",
                path=str(backing.path),
                errno=exc.errno,
            ) from exc
        return FileMetadata(modified=st.st_mtime, size=st.st_size)


__all__ = [
    "File",
    "FileMetadata",
    "FileBacking",
    "EmbeddedFileBacking",
    "DiskFileBacking",
    "relative_posix",
]
