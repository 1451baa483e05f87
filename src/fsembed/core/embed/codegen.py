"""Emit embedded tables as importable Python modules.

A generated module holds every file as a bytes literal, so importing it gives
back the :class:`EmbeddedTable` without any filesystem access beyond the
import itself.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import List, TextIO

from fsembed.core.exceptions import EmbedError
from fsembed.core.utils.io import atomic_write

from .table import EmbeddedTable

logger = logging.getLogger(__name__)

DEFAULT_ATTR = "EMBEDDED"

_HEADER = "# Generated by fsembed. Do not edit.\n"


def render_module(table: EmbeddedTable, *, attr: str = DEFAULT_ATTR) -> str:
    """Return Python source defining ``attr`` as a copy of ``table``."""
    if not attr.isidentifier():
        raise EmbedError(f"Invalid attribute name for generated table: {attr!r}")

    lines: List[str] = [
        _HEADER,
        "from fsembed.core.embed.table import EmbeddedEntry, EmbeddedTable",
        "",
        f"{attr} = EmbeddedTable.from_files(",
        f"    {table.source_root!r},",
        "    [",
    ]
    for entry in table:
        lines.append(
            f"        EmbeddedEntry(path={entry.path!r}, contents={entry.contents!r}, "
            f"modified={entry.modified!r}),"
        )
    lines.extend(["    ],", ")", ""])
    return "\n".join(lines)


def write_module(table: EmbeddedTable, target: Path | str, *, attr: str = DEFAULT_ATTR) -> Path:
    """Atomically write the generated module for ``table`` to ``target``."""
    target = Path(target)
    source = render_module(table, attr=attr)

    def _write(f: TextIO) -> None:
        f.write(source)

    atomic_write(target, _write)
    logger.info("Wrote embedded table (%d file(s)) to %s", len(table), target)
    return target


def load_module_table(module: str, attr: str = DEFAULT_ATTR) -> EmbeddedTable:
    """Import ``module`` and return its embedded table attribute."""
    try:
        mod = importlib.import_module(module)
    except ImportError as exc:
        raise EmbedError(
            f"Cannot import embedded module '{module}'",
            context={"module": module},
        ) from exc
    table = getattr(mod, attr, None)
    if not isinstance(table, EmbeddedTable):
        raise EmbedError(
            f"Module '{module}' does not define an embedded table named '{attr}'",
            context={"module": module, "attr": attr},
        )
    return table


__all__ = ["DEFAULT_ATTR", "render_module", "write_module", "load_module_table"]
