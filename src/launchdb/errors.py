"""Error hierarchy for launchdb."""

from __future__ import annotations

from typing import Any

__all__ = [
    "LaunchError",
    "ConfigNotFoundError",
    "ConfigError",
    "StoreUnavailableError",
]


class LaunchError(Exception):
    """Base error for all launchdb errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(LaunchError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(LaunchError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class StoreUnavailableError(LaunchError):
    """Raised when the application database has no open connection."""

    def __init__(self, database_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="STORE_UNAVAILABLE",
            message=f"Application database is not open: {database_path}",
            details={"database_path": database_path},
            **kwargs,
        )

    @property
    def database_path(self) -> str:
        """Path of the database that could not be used."""
        return self.details["database_path"]
