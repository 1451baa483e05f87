from __future__ import annotations

from pathlib import Path

import pytest

from fsembed.core import Directory
from fsembed.core.embed import EmbeddedEntry, EmbeddedTable, embed_dir, join_relpath, normalize_relpath
from fsembed.core.exceptions import EmbedError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("alpha.txt", "alpha.txt"),
        ("/alpha.txt", "alpha.txt"),
        ("a//b/./c.txt", "a/b/c.txt"),
        ("a\\b.txt", "a/b.txt"),
        ("a/../b.txt", "b.txt"),
        ("", ""),
        (".", ""),
        ("..", None),
        ("../x", None),
        (" a.txt", " a.txt"),
        ("b.txt ", "b.txt "),
    ],
)
def test_normalize_relpath(raw: str, expected) -> None:
    assert normalize_relpath(raw) == expected


def test_join_relpath() -> None:
    assert join_relpath("", "a.txt") == "a.txt"
    assert join_relpath("sub", "a.txt") == "sub/a.txt"
    assert join_relpath("sub", "../a.txt") == "a.txt"
    assert join_relpath("sub", "../../a.txt") is None


def test_table_indexes_immediate_children() -> None:
    table = EmbeddedTable.from_files(
        "/src",
        [
            EmbeddedEntry("b.txt", b"b"),
            EmbeddedEntry("a.txt", b"a"),
            EmbeddedEntry("deep/er/x.txt", b"x"),
        ],
    )
    assert table.child_files("") == ("a.txt", "b.txt")
    assert table.child_dirs("") == ("deep",)
    # Intermediate directories exist even without files of their own.
    assert table.child_files("deep") == ()
    assert table.child_dirs("deep") == ("deep/er",)
    assert table.child_files("deep/er") == ("deep/er/x.txt",)
    assert table.has_dir("deep/er")
    assert not table.has_dir("a.txt")
    assert table.child_files("nowhere") == ()


def test_table_lookup_and_iteration() -> None:
    table = EmbeddedTable.from_files("/src", [EmbeddedEntry("z.txt", b"zz", 1.5), EmbeddedEntry("a.txt", b"")])
    assert len(table) == 2
    assert [e.path for e in table] == ["a.txt", "z.txt"]
    assert table.get_file("z.txt").size == 2
    assert table.get_file("z.txt").modified == 1.5
    assert table.get_file("") is None
    assert table.get_file("../z.txt") is None


def test_table_normalizes_keys() -> None:
    table = EmbeddedTable(source_root="/src", entries={"./dir//f.txt": EmbeddedEntry("./dir//f.txt", b"f")})
    assert table.get_file("dir/f.txt").path == "dir/f.txt"


def test_table_rejects_escaping_keys() -> None:
    with pytest.raises(ValueError):
        EmbeddedTable.from_files("/src", [EmbeddedEntry("../evil.txt", b"")])


def test_table_entries_are_read_only(base_table: EmbeddedTable) -> None:
    with pytest.raises(TypeError):
        base_table.entries["new.txt"] = EmbeddedEntry("new.txt", b"")  # type: ignore[index]


def test_embed_dir_captures_tree(base_root: Path, base_table: EmbeddedTable) -> None:
    assert base_table.source_root == str(base_root.resolve())
    assert list(base_table.entries) == ["alpha.txt", "beta.txt", "subdir/delta.txt", "subdir/gamma.txt"]
    assert base_table.get_file("alpha.txt").contents == (base_root / "alpha.txt").read_bytes()
    assert base_table.get_file("alpha.txt").modified is not None


def test_embed_dir_without_metadata(base_root: Path) -> None:
    table = embed_dir(base_root, include_metadata=False)
    assert all(entry.modified is None for entry in table)


def test_embed_dir_rejects_missing_and_non_directories(tmp_path: Path) -> None:
    with pytest.raises(EmbedError):
        embed_dir(tmp_path / "missing")
    regular = tmp_path / "file.txt"
    regular.write_text("x", encoding="utf-8")
    with pytest.raises(EmbedError) as excinfo:
        embed_dir(regular)
    assert "not a directory" in str(excinfo.value)


def test_embed_dir_empty_directory(tmp_path: Path) -> None:
    table = embed_dir(tmp_path)
    assert len(table) == 0
    assert table.child_files("") == ()
    assert table.child_dirs("") == ()


def test_embed_dir_keeps_whitespace_in_file_names(make_tree) -> None:
    root = make_tree({"a.txt": "plain", " a.txt": "leading", "b.txt ": "trailing"})
    table = embed_dir(root)
    assert list(table.entries) == [" a.txt", "a.txt", "b.txt "]
    assert table.get_file(" a.txt").contents == b"leading"
    assert table.get_file("a.txt").contents == b"plain"

    embedded = Directory.from_embedded(table)
    disk = Directory.from_path(root)
    assert [str(f.path) for f in embedded.walk()] == [str(f.path) for f in disk.walk()]
    assert [str(f.path) for f in embedded.into_dynamic().walk()] == [" a.txt", "a.txt", "b.txt "]
    assert disk.get_file(" a.txt").read_text() == "leading"
    assert embedded.get_file("b.txt ").read_text() == "trailing"
