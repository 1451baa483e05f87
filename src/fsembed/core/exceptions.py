from __future__ import annotations

from typing import Any, Dict, Mapping


class FsEmbedError(Exception):
    """Base exception for fsembed."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class DecodeError(FsEmbedError, ValueError):
    """Raised when file contents are not valid UTF-8."""

    def __init__(
        self,
        message: str = "",
        *,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        FsEmbedError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class FileReadError(FsEmbedError, OSError):
    """Raised when reading or stat-ing an on-disk file fails."""

    def __init__(
        self,
        message: str = "",
        *,
        path: str | None = None,
        errno: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if errno is not None:
            ctx["errno"] = errno
        FsEmbedError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)
        self.errno = errno


class MetadataUnavailableError(FsEmbedError):
    """Raised when an embedded file was captured without metadata."""


class ConfigError(FsEmbedError, ValueError):
    """Raised for malformed environment flags or roots configuration."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FsEmbedError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class EmbedError(FsEmbedError):
    """Raised when the embedding build step cannot produce a table."""


__all__ = [
    "FsEmbedError",
    "DecodeError",
    "FileReadError",
    "MetadataUnavailableError",
    "ConfigError",
    "EmbedError",
]
