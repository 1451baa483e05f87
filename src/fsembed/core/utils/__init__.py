from .io import atomic_write, read_yaml
from .merge import merge_config

__all__ = ["atomic_write", "read_yaml", "merge_config"]
