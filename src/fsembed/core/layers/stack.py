from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from fsembed.core.dirset import DirSet
from fsembed.core.directory import Directory
from fsembed.core.embed.codegen import DEFAULT_ATTR, load_module_table
from fsembed.core.exceptions import ConfigError
from fsembed.core.utils.io import read_yaml
from fsembed.core.utils.merge import merge_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootLayer:
    """A single overlay root: a directory on disk or a generated embedded module."""

    id: str
    path: Optional[Path] = None
    module: Optional[str] = None
    attr: str = DEFAULT_ATTR

    @property
    def is_embedded(self) -> bool:
        return self.module is not None

    def to_directory(self) -> Directory:
        if self.module is not None:
            return Directory.from_embedded(load_module_table(self.module, self.attr))
        if self.path is None:
            raise ConfigError(
                f"Root '{self.id}' defines neither 'path' nor 'module'.",
                context={"id": self.id},
            )
        if not self.path.is_dir():
            logger.warning("Root layer '%s' points at a missing directory: %s", self.id, self.path)
        return Directory.from_path(self.path)


def _load_roots_cfg(config_paths: List[Path]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for path in config_paths:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise ConfigError(f"Roots config not found: {path}", context={"path": str(path)}) from exc
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(
                f"Invalid roots config {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Roots config {path} must be a mapping", context={"path": str(path)})
        merged = merge_config(merged, data)
    return merged


def _expand_root_path(raw: str, *, base_dir: Path) -> Path:
    s = os.path.expandvars(str(raw)).strip()
    p = Path(s).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return p.resolve()


def _parse_roots(cfg: Dict[str, Any], *, base_dir: Path) -> List[Dict[str, Any]]:
    roots = cfg.get("roots", [])
    if not isinstance(roots, list):
        raise ConfigError("'roots' must be a list")
    parsed: List[Dict[str, Any]] = []
    for item in roots:
        if not isinstance(item, dict):
            raise ConfigError(f"Root entries must be mappings, got {item!r}")
        root_id = str(item.get("id") or "").strip()
        if not root_id:
            raise ConfigError(f"Root entry is missing an id: {item!r}")
        path_raw = item.get("path")
        module = item.get("module")
        if bool(path_raw) == bool(module):
            raise ConfigError(
                f"Root '{root_id}' must define exactly one of 'path' or 'module'.",
                context={"id": root_id},
            )
        parsed.append(
            {
                "id": root_id,
                "path": _expand_root_path(path_raw, base_dir=base_dir) if path_raw else None,
                "module": str(module).strip() if module else None,
                "attr": str(item.get("attr") or DEFAULT_ATTR),
                "before": (str(item.get("before")).strip() if item.get("before") else None),
                "after": (str(item.get("after")).strip() if item.get("after") else None),
                "enabled": bool(item.get("enabled", True)),
            }
        )
    return parsed


def _insert_layer(
    base: List[RootLayer],
    layer: RootLayer,
    *,
    before: Optional[str],
    after: Optional[str],
) -> None:
    target = before or after
    if target is None:
        base.append(layer)
        return
    try:
        idx = next(i for i, l in enumerate(base) if l.id == target)
    except StopIteration as exc:
        raise ValueError(f"Root '{layer.id}' references unknown target root '{target}'.") from exc
    if after:
        idx += 1
    base.insert(idx, layer)


def resolve_root_layers(*config_paths: Path | str, base_dir: Path | str | None = None) -> List[RootLayer]:
    """Resolve roots declared in one or more YAML files (low -> high precedence).

    Files are merged in the order given; a roots list starting with ``"+"``
    extends the earlier roots, otherwise it replaces them. Roots without
    ``before``/``after`` keep their listed order; the others are placed next
    to the root they name.
    Relative paths resolve against ``base_dir``, defaulting to the directory of
    the last config file.

    Raises:
        ConfigError: malformed entries, duplicate ids, unknown targets or
            placement cycles.
    """
    paths = [Path(p) for p in config_paths]
    if not paths:
        return []
    base = Path(base_dir) if base_dir is not None else paths[-1].resolve().parent

    cfg = _load_roots_cfg(paths)
    declared = [e for e in _parse_roots(cfg, base_dir=base) if e["enabled"]]

    seen: set = set()
    for e in declared:
        if e["id"] in seen:
            raise ConfigError(f"Duplicate root id '{e['id']}' in roots config.", context={"id": e["id"]})
        if e["before"] and e["after"]:
            raise ConfigError(
                f"Root '{e['id']}' cannot specify both before and after.",
                context={"id": e["id"]},
            )
        seen.add(e["id"])

    def _layer(e: Dict[str, Any]) -> RootLayer:
        return RootLayer(id=e["id"], path=e["path"], module=e["module"], attr=e["attr"])

    stack: List[RootLayer] = [_layer(e) for e in declared if not (e["before"] or e["after"])]
    pending = [e for e in declared if e["before"] or e["after"]]

    # Place anchored roots in passes so they may reference each other.
    placed_any = True
    while pending and placed_any:
        placed_any = False
        remaining: List[Dict[str, Any]] = []
        for e in pending:
            try:
                _insert_layer(stack, _layer(e), before=e["before"], after=e["after"])
                placed_any = True
            except ValueError:
                remaining.append(e)
        pending = remaining

    if pending:
        missing = sorted({str(e["before"] or e["after"]) for e in pending} - seen)
        if missing:
            raise ConfigError(
                "Unknown target root(s) referenced in roots config: " + ", ".join(missing) + ".",
                context={"targets": missing},
            )
        unresolved = ", ".join(sorted(str(e["id"]) for e in pending))
        raise ConfigError(f"Could not place root(s): {unresolved}. Check before/after targets for cycles.")

    return stack


def load_root_set(*config_paths: Path | str, base_dir: Path | str | None = None) -> DirSet:
    """Build a :class:`DirSet` from the roots declared in YAML config files."""
    return DirSet(layer.to_directory() for layer in resolve_root_layers(*config_paths, base_dir=base_dir))


__all__ = ["RootLayer", "resolve_root_layers", "load_root_set"]
