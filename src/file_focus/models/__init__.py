"""Configuration models."""

from .config import (
    Config,
    create_default_config,
    default_config_path,
    load_config,
    resolve_root,
    save_config,
)

__all__ = [
    "Config",
    "create_default_config",
    "default_config_path",
    "load_config",
    "resolve_root",
    "save_config",
]
