"""
fsembed - embedded and on-disk file trees behind one interface

Files and directories may be baked into the application ahead of time or read
live from disk; ordered root sets layer several trees so later roots shadow
earlier ones at the same relative path.
"""

from fsembed.core import (
    DirSet,
    Directory,
    Entry,
    File,
    FileMetadata,
    Silo,
    SiloSet,
)
from fsembed.core.embed import EmbeddedEntry, EmbeddedTable, embed_dir, embed_package

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "DirSet",
    "Directory",
    "Entry",
    "File",
    "FileMetadata",
    "Silo",
    "SiloSet",
    "EmbeddedEntry",
    "EmbeddedTable",
    "embed_dir",
    "embed_package",
]
