"""Runtime switches read from the environment.

``FSEMBED_DYNAMIC`` decides whether ``auto_dynamic()`` swaps embedded trees
for their on-disk sources. When unset the interpreter's debug mode decides:
``__debug__`` is true unless Python runs with ``-O``.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .exceptions import ConfigError

DYNAMIC_ENV = "FSEMBED_DYNAMIC"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(value: str) -> Optional[bool]:
    s = value.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return None


def dynamic_mode_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when embedded trees should be read from disk instead.

    Raises:
        ConfigError: ``FSEMBED_DYNAMIC`` is set to something that is not a
            boolean.
    """
    env = os.environ if environ is None else environ
    raw = env.get(DYNAMIC_ENV)
    if raw is None or not raw.strip():
        return __debug__
    value = _as_bool(raw)
    if value is None:
        raise ConfigError(
            f"Malformed {DYNAMIC_ENV} value: {raw!r} (expected a boolean)",
            context={"env": DYNAMIC_ENV, "value": raw},
        )
    return value


__all__ = ["DYNAMIC_ENV", "dynamic_mode_enabled"]
