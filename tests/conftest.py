import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"
FIXTURES_ROOT = TESTS_ROOT / "fixtures"

# Make src/ importable as 'fsembed'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from fsembed.core import Directory, DirSet
from fsembed.core.config import DYNAMIC_ENV
from fsembed.core.embed import EmbeddedTable, embed_dir


@pytest.fixture(autouse=True)
def _isolate_dynamic_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never let a developer's FSEMBED_DYNAMIC leak into tests."""
    monkeypatch.delenv(DYNAMIC_ENV, raising=False)


@pytest.fixture
def base_root() -> Path:
    return FIXTURES_ROOT / "base"


@pytest.fixture
def override_root() -> Path:
    return FIXTURES_ROOT / "override"


@pytest.fixture
def base_dir(base_root: Path) -> Directory:
    return Directory.from_path(base_root)


@pytest.fixture
def override_dir(override_root: Path) -> Directory:
    return Directory.from_path(override_root)


@pytest.fixture
def base_table(base_root: Path) -> EmbeddedTable:
    return embed_dir(base_root)


@pytest.fixture
def override_table(override_root: Path) -> EmbeddedTable:
    return embed_dir(override_root)


@pytest.fixture
def embedded_base(base_table: EmbeddedTable) -> Directory:
    return Directory.from_embedded(base_table)


@pytest.fixture
def embedded_override(override_table: EmbeddedTable) -> Directory:
    return Directory.from_embedded(override_table)


@pytest.fixture
def overlay(base_dir: Directory, override_dir: Directory) -> DirSet:
    return DirSet([base_dir, override_dir])


@pytest.fixture
def make_tree(tmp_path: Path):
    """Create a directory tree from a ``{relpath: bytes | str}`` mapping."""

    def _make(files: dict, name: str = "tree") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make
