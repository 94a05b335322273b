"""Configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from launchdb.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "Settings", "default_database_path"]

DATABASE_SUBPATH = Path("launch") / "launch.db"


def default_database_path() -> Path:
    """Return ``$XDG_DATA_HOME/launch/launch.db`` (``~/.local/share`` fallback)."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        base = Path(data_home)
    else:
        base = Path.home() / ".local" / "share"
    return base / DATABASE_SUBPATH


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, config_path: str | Path) -> Config:
        """Load a YAML configuration file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not a YAML mapping.
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        content = path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}", cause=e) from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


class Settings(BaseModel):
    """Validated settings consumed by LaunchDB."""

    model_config = ConfigDict(frozen=True)

    database_path: Path
    attribute_key: str = "can-open"
    probe_path: Path = Path("/usr")
    secondary_suffix: str = ".desktop"

    @classmethod
    def from_config(cls, config: Config | None = None) -> Settings:
        """Build settings from a Config, falling back to defaults for missing keys."""
        config = config or Config()
        raw: dict[str, Any] = {
            "database_path": config.get("database.path") or default_database_path(),
        }
        for field_name, key in (
            ("attribute_key", "attributes.key"),
            ("probe_path", "attributes.probe_path"),
            ("secondary_suffix", "registry.secondary_suffix"),
        ):
            value = config.get(key)
            if value is not None:
                raw[field_name] = value
        try:
            settings = cls(**raw)
        except ValidationError as e:
            raise ConfigError(message=f"Invalid launchdb configuration: {e}", cause=e) from e
        return settings.model_copy(update={"database_path": settings.database_path.expanduser()})
