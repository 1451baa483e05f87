"""Embedding build step: capture directory trees as static path tables.

Tables are produced by :func:`embed_dir` (a directory on disk) or
:func:`embed_package` (data bundled in a package), and can be frozen into an
importable module with :func:`write_module`.
"""

from .builder import embed_dir, embed_package
from .codegen import DEFAULT_ATTR, load_module_table, render_module, write_module
from .table import EmbeddedEntry, EmbeddedTable, join_relpath, normalize_relpath

__all__ = [
    "EmbeddedEntry",
    "EmbeddedTable",
    "normalize_relpath",
    "join_relpath",
    "embed_dir",
    "embed_package",
    "DEFAULT_ATTR",
    "render_module",
    "write_module",
    "load_module_table",
]
