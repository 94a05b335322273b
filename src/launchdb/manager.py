"""LaunchDB: the application database used by launchers and file watchers."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from launchdb.attributes import AttributeStore, XattrStore, probe_extattr_support
from launchdb.config import Config, Settings
from launchdb.registry.resolver import CapabilityResolver, canonicalize, resolve_capability_source
from launchdb.registry.store import ApplicationStore

logger = logging.getLogger(__name__)

__all__ = ["LaunchDB", "split_mime_list"]

_MIME_SEPARATORS = re.compile(r"[;\s]+")


def split_mime_list(value: str) -> list[str]:
    """Split a can-open string into its tokens. Tokens are not normalized."""
    return [token for token in _MIME_SEPARATORS.split(value) if token]


class LaunchDB:
    """Registry of launchable applications and their can-open capabilities."""

    def __init__(
        self,
        config: Config | None = None,
        database_path: str | Path | None = None,
        attributes: AttributeStore | None = None,
        supports_extattr: bool | None = None,
    ) -> None:
        """Initialize LaunchDB. Explicit arguments win over config values.

        Args:
            config: Optional Config with ``database``, ``attributes`` and
                ``registry`` sections.
            database_path: Location of the SQLite file.
            attributes: Extended attribute store; defaults to XattrStore.
            supports_extattr: Skip the filesystem probe and use this value.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        settings = Settings.from_config(config)
        if database_path is not None:
            settings = settings.model_copy(update={"database_path": Path(database_path)})
        self._settings = settings

        self._attributes: AttributeStore = attributes if attributes is not None else XattrStore()
        if supports_extattr is None:
            supports_extattr = probe_extattr_support(self._attributes, settings.probe_path)

        self._store = ApplicationStore(settings.database_path, secondary_suffix=settings.secondary_suffix)
        self._resolver = CapabilityResolver(
            self._store,
            self._attributes,
            supports_extattr=supports_extattr,
            attribute_key=settings.attribute_key,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> ApplicationStore:
        return self._store

    @property
    def supports_extattr(self) -> bool:
        return self._resolver.supports_extattr

    # ----- Lifecycle -----

    def open(self) -> bool:
        """Open the database. Returns connectivity status."""
        return self._store.open()

    def close(self) -> None:
        self._store.close()

    @property
    def is_open(self) -> bool:
        return self._store.is_open

    def __enter__(self) -> LaunchDB:
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ----- Public operations -----

    def handle_application(self, path: str | Path) -> None:
        self._resolver.handle_application(path)

    def all_applications(self) -> list[str]:
        return self._store.list_all()

    def application_exists(self, path: str) -> bool:
        return self._store.exists(path)

    def application_count(self) -> int:
        return self._store.count()

    def remove_all_applications(self) -> bool:
        return self._store.remove_all()

    def can_open(self, path: str | Path) -> str | None:
        """Return the can-open string for ``path``, or None if it declares none.

        Uses the cached attribute when extended attributes are supported and
        reads the bundle or desktop entry otherwise.
        """
        canonical = canonicalize(path)
        key = self._settings.attribute_key
        if self.supports_extattr:
            value, ok = self._attributes.get_string(canonical, key)
            if ok:
                return value
        lookup = resolve_capability_source(canonical, key=key)
        return lookup.value if lookup.found else None

    def applications_for(self, mime_type: str) -> list[str]:
        """Return applications that can open ``mime_type``, preferred ones first."""
        matches: list[str] = []
        for app_path in self.all_applications():
            capability = self.can_open(app_path)
            if capability and mime_type in split_mime_list(capability):
                matches.append(app_path)
        return matches
