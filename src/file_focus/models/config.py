"""Configuration model for file focus."""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigurationError

STORAGE_DIRNAME = ".file-focus"
STORAGE_FILENAME = "groups.json"
CONFIG_FILENAME = "config.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_root(path: Union[str, Path]) -> Path:
    """Resolve the workspace root to an existing absolute directory."""
    root = Path(path).expanduser().resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Workspace root {root} is not a directory")
    return root


@dataclass
class Config:
    """Main configuration model."""
    root_path: Path
    storage_path: Optional[Path] = None
    favourite_glyph: str = "⭐"
    show_location_hint: bool = True
    max_workers: int = 4
    log_level: str = "WARNING"

    def __post_init__(self):
        self.root_path = Path(self.root_path)
        if self.storage_path is None:
            self.storage_path = self.root_path / STORAGE_DIRNAME / STORAGE_FILENAME
        else:
            self.storage_path = Path(self.storage_path)
            if not self.storage_path.is_absolute():
                self.storage_path = self.root_path / self.storage_path

        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level '{self.log_level}'")

    @classmethod
    def default(cls, root_path: Union[str, Path] = ".") -> "Config":
        """Create a default configuration for a workspace root."""
        return cls(root_path=resolve_root(root_path))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_path": str(self.root_path),
            "storage_path": str(self.storage_path),
            "favourite_glyph": self.favourite_glyph,
            "show_location_hint": self.show_location_hint,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
        }


def _dict_to_config(data: Dict[str, Any], root_path: Optional[Path] = None) -> Config:
    """Build a Config, ignoring unknown keys and letting ``root_path`` override."""
    known = {f.name for f in fields(Config)}
    kwargs = {key: value for key, value in data.items() if key in known}
    if root_path is not None:
        kwargs["root_path"] = root_path
    if "root_path" not in kwargs:
        raise ConfigurationError("Configuration is missing 'root_path'")
    try:
        return Config(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(config_path: Path, root_path: Optional[Path] = None) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot load configuration {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a JSON object")

    return _dict_to_config(config_data, root_path)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def create_default_config(config_path: Path, root_path: Union[str, Path] = ".") -> Config:
    """Create a default configuration file."""
    config = Config.default(root_path)
    save_config(config, config_path)
    return config


def default_config_path(root_path: Path) -> Path:
    return Path(root_path) / STORAGE_DIRNAME / CONFIG_FILENAME
