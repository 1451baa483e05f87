"""Layered root sets declared in YAML.

A roots file lists overlay roots from low to high precedence::

    roots:
      - id: defaults
        module: myapp._embedded_defaults
      - id: site
        path: ./site
      - id: local
        path: ~/.myapp/overrides
        after: site

Each root is either a directory on disk (``path``) or a module generated by
``fsembed.core.embed.write_module`` (``module``/``attr``).
"""

from .stack import RootLayer, load_root_set, resolve_root_layers

__all__ = ["RootLayer", "load_root_set", "resolve_root_layers"]
