"""Reconcile application paths with the store and cache their can-open capability."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from launchdb.registry.types import (
    ApplicationKind,
    ApplicationPath,
    CapabilityLookup,
    CapabilityStatus,
)

if TYPE_CHECKING:
    from launchdb.attributes import AttributeStore
    from launchdb.registry.store import ApplicationStore

logger = logging.getLogger(__name__)

__all__ = [
    "CAN_OPEN_KEY",
    "CapabilityResolver",
    "canonicalize",
    "classify",
    "resolve_capability_source",
]

CAN_OPEN_KEY = "can-open"
BUNDLE_CAPABILITY_FILE = Path("Resources") / "can-open"
MIME_TYPE_PREFIX = "MimeType="


def canonicalize(raw_path: str | Path) -> str:
    """Resolve symlinks and relative segments. Nonexistent paths stay absolute."""
    return os.path.realpath(os.fspath(raw_path))


def classify(raw_path: str | Path) -> ApplicationPath:
    path = canonicalize(raw_path)
    return ApplicationPath(
        path=path,
        kind=ApplicationKind.from_path(path),
        live=os.path.isdir(path) or os.path.isfile(path),
    )


def _bundle_capability(app: ApplicationPath, attributes: AttributeStore | None, key: str) -> CapabilityLookup:
    capability_file = Path(app.path) / BUNDLE_CAPABILITY_FILE
    if not capability_file.is_file():
        return CapabilityLookup(CapabilityStatus.MISSING)
    try:
        # newline="" keeps the file contents byte-for-byte
        with open(capability_file, encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", capability_file, e)
        return CapabilityLookup(CapabilityStatus.MISSING)
    if not content:
        return CapabilityLookup(CapabilityStatus.EMPTY)
    return CapabilityLookup(CapabilityStatus.FOUND, content)


def _desktop_entry_capability(
    app: ApplicationPath, attributes: AttributeStore | None, key: str
) -> CapabilityLookup:
    if attributes is not None:
        _, ok = attributes.get_string(app.path, key)
        if ok:
            return CapabilityLookup(CapabilityStatus.CACHED)

    # Read line by line rather than as an INI file: XDG uses ';' as a list
    # separator, which INI parsers treat as a comment.
    mime = ""
    try:
        with open(app.path, encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if line.startswith(MIME_TYPE_PREFIX):
                    # last MimeType= line wins
                    mime = line[len(MIME_TYPE_PREFIX):]
    except OSError as e:
        logger.warning("Cannot read desktop entry %s: %s", app.path, e)
        return CapabilityLookup(CapabilityStatus.MISSING)

    if not mime:
        return CapabilityLookup(CapabilityStatus.EMPTY)
    return CapabilityLookup(CapabilityStatus.FOUND, mime)


def _unknown_capability(app: ApplicationPath, attributes: AttributeStore | None, key: str) -> CapabilityLookup:
    # TODO: read capabilities from AppDir bundles once they are registered
    return CapabilityLookup(CapabilityStatus.MISSING)


_SOURCES: dict[ApplicationKind, Callable[[ApplicationPath, AttributeStore | None, str], CapabilityLookup]] = {
    ApplicationKind.BUNDLE: _bundle_capability,
    ApplicationKind.DESKTOP_ENTRY: _desktop_entry_capability,
    ApplicationKind.UNKNOWN: _unknown_capability,
}


def resolve_capability_source(
    app: ApplicationPath | str,
    attributes: AttributeStore | None = None,
    key: str = CAN_OPEN_KEY,
) -> CapabilityLookup:
    """Find the can-open mime list declared by an application.

    Bundles declare it in ``Resources/can-open`` (returned verbatim). Desktop
    entries declare it in a ``MimeType=`` line. When ``attributes`` is given
    and a desktop entry already carries the marker, the lookup reports CACHED
    without reading the file.
    """
    if not isinstance(app, ApplicationPath):
        app = classify(app)
    return _SOURCES[app.kind](app, attributes, key)


class CapabilityResolver:
    """Keeps the store in sync with the filesystem and caches can-open markers."""

    def __init__(
        self,
        store: ApplicationStore,
        attributes: AttributeStore,
        supports_extattr: bool,
        attribute_key: str = CAN_OPEN_KEY,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Store that receives add/remove calls.
            attributes: Extended attribute collaborator used for the marker.
            supports_extattr: Result of the one-time filesystem probe. When
                False, no attribute is ever read or written.
            attribute_key: Attribute name under which the marker is cached.
        """
        self._store = store
        self._attributes = attributes
        self._supports_extattr = supports_extattr
        self._key = attribute_key

    @property
    def supports_extattr(self) -> bool:
        return self._supports_extattr

    @property
    def attribute_key(self) -> str:
        return self._key

    def handle_application(self, raw_path: str | Path) -> None:
        """Add or remove ``raw_path`` in the store and cache its capability."""
        app = classify(raw_path)

        if not app.live:
            logger.info("%s does not exist, removing from application database", app.path)
            self._store.remove(app.path)
            return

        if not self._store.add(app.path):
            logger.warning("Could not register %s; skipping capability lookup", app.path)
            return

        if not self._supports_extattr:
            return

        _, cached = self._attributes.get_string(app.path, self._key)
        if cached:
            return

        lookup = resolve_capability_source(app, self._attributes, self._key)
        if lookup.status is CapabilityStatus.CACHED:
            return
        if lookup.status is CapabilityStatus.MISSING:
            logger.debug("No '%s' source: %s", self._key, app.path)
            return
        if lookup.status is CapabilityStatus.EMPTY:
            logger.debug("Empty '%s' source: %s", self._key, app.path)
            return

        if self._attributes.set_string(app.path, self._key, lookup.value or ""):
            logger.info("Set xattr '%s' on %s", self._key, app.path)
        else:
            logger.warning("Cannot set xattr '%s' on %s", self._key, app.path)
