from __future__ import annotations

from fsembed.core.exceptions import (
    ConfigError,
    DecodeError,
    EmbedError,
    FileReadError,
    FsEmbedError,
    MetadataUnavailableError,
)


def test_to_json_error_payload() -> None:
    err = MetadataUnavailableError("no metadata", context={"path": "a.txt"})
    assert err.to_json_error() == {
        "message": "no metadata",
        "code": "MetadataUnavailableError",
        "context": {"path": "a.txt"},
    }


def test_context_is_copied() -> None:
    ctx = {"module": "pkg"}
    err = EmbedError("boom", context=ctx)
    ctx["module"] = "changed"
    assert err.context == {"module": "pkg"}


def test_builtin_bases() -> None:
    assert issubclass(DecodeError, ValueError)
    assert issubclass(ConfigError, ValueError)
    assert issubclass(FileReadError, OSError)
    for cls in (DecodeError, ConfigError, FileReadError, MetadataUnavailableError, EmbedError):
        assert issubclass(cls, FsEmbedError)


def test_file_read_error_fields() -> None:
    err = FileReadError("denied", path="/tmp/x", errno=13)
    assert err.errno == 13
    assert err.context == {"path": "/tmp/x", "errno": 13}
    assert str(err) == "denied"
