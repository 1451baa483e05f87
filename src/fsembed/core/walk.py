"""Lazy, queue-driven traversals producing :class:`File` handles.

Each walker owns its queue (and, for override walks, the set of file paths
already produced). Nothing is listed until ``next()`` needs it, so stopping
early skips the remaining directory reads. A walker is single-use: iterate a
fresh one to start over.
"""

from __future__ import annotations

from collections import deque
from pathlib import PurePosixPath
from typing import Deque, Iterable, Iterator, Sequence, Set

from .directory import Directory, Entry
from .file import File


class Walk(Iterator[File]):
    """Breadth-first walk over one or more roots, one root after another.

    Files shared between roots are produced once per root.
    """

    def __init__(self, roots: Iterable[Directory]) -> None:
        self._roots: Deque[Directory] = deque(roots)
        self._queue: Deque[Entry] = deque()

    def __iter__(self) -> "Walk":
        return self

    def __next__(self) -> File:
        while True:
            if not self._queue:
                if not self._roots:
                    raise StopIteration
                self._queue.extend(self._roots.popleft().entries())
                continue
            entry = self._queue.popleft()
            file = entry.as_file()
            if file is not None:
                return file
            directory = entry.as_dir()
            if directory is not None:
                self._queue.extend(directory.entries())


class OverrideWalk(Iterator[File]):
    """Walk roots from highest to lowest precedence, one file per path.

    ``roots`` are given low -> high precedence. Sub-directories are expanded
    at the front of the queue so a root is exhausted before the next one
    starts; the first file seen for a relative path wins. Directories are
    always expanded, only file paths are deduplicated.
    """

    def __init__(self, roots: Sequence[Directory]) -> None:
        self._queue: Deque[Entry] = deque()
        for root in roots:
            self._queue.appendleft(Entry.from_dir(root))
        self._seen: Set[PurePosixPath] = set()

    def __iter__(self) -> "OverrideWalk":
        return self

    def __next__(self) -> File:
        while self._queue:
            entry = self._queue.popleft()
            file = entry.as_file()
            if file is not None:
                if file.path in self._seen:
                    continue
                self._seen.add(file.path)
                return file
            directory = entry.as_dir()
            if directory is not None:
                self._queue.extendleft(reversed(directory.entries()))
        raise StopIteration


class FirstByPath(Iterator[File]):
    """Filter ``files`` down to the first occurrence of each relative path."""

    def __init__(self, files: Iterable[File]) -> None:
        self._files = iter(files)
        self._seen: Set[PurePosixPath] = set()

    def __iter__(self) -> "FirstByPath":
        return self

    def __next__(self) -> File:
        for file in self._files:
            if file.path not in self._seen:
                self._seen.add(file.path)
                return file
        raise StopIteration


__all__ = ["Walk", "OverrideWalk", "FirstByPath"]
