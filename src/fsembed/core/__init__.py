"""Overlay resolution and traversal over embedded and on-disk file trees."""

from .config import DYNAMIC_ENV, dynamic_mode_enabled
from .directory import Directory, Entry
from .dirset import DirSet
from .exceptions import (
    ConfigError,
    DecodeError,
    EmbedError,
    FileReadError,
    FsEmbedError,
    MetadataUnavailableError,
)
from .file import File, FileMetadata
from .silo import Silo, SiloSet
from .walk import FirstByPath, OverrideWalk, Walk

__all__ = [
    "DYNAMIC_ENV",
    "dynamic_mode_enabled",
    "Directory",
    "Entry",
    "DirSet",
    "File",
    "FileMetadata",
    "Silo",
    "SiloSet",
    "Walk",
    "OverrideWalk",
    "FirstByPath",
    "FsEmbedError",
    "DecodeError",
    "FileReadError",
    "MetadataUnavailableError",
    "ConfigError",
    "EmbedError",
]
