"""Registry types: ApplicationKind, ApplicationPath, CapabilityLookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ApplicationKind",
    "ApplicationPath",
    "CapabilityStatus",
    "CapabilityLookup",
]


class ApplicationKind(Enum):
    """Kind of launchable, decided by path suffix."""

    BUNDLE = ".app"
    DESKTOP_ENTRY = ".desktop"
    UNKNOWN = ""

    @classmethod
    def from_path(cls, path: str) -> ApplicationKind:
        """Classify ``path`` by its suffix, case-sensitively.

        ApplicationStore.list_all() groups entries with SQLite ``LIKE``, which
        ignores ASCII case, so ``X.DESKTOP`` sorts with desktop entries there
        while being classified UNKNOWN here.
        """
        for kind in (cls.BUNDLE, cls.DESKTOP_ENTRY):
            if path.endswith(kind.value):
                return kind
        return cls.UNKNOWN


@dataclass(frozen=True)
class ApplicationPath:
    """A canonicalized application path.

    Attributes:
        path: Absolute path with symlinks and relative segments resolved.
        kind: Bundle, desktop entry, or unknown.
        live: Whether the path is an existing file or directory.
    """

    path: str
    kind: ApplicationKind
    live: bool


class CapabilityStatus(Enum):
    """Outcome of looking up an application's can-open source."""

    FOUND = "found"
    EMPTY = "empty"
    MISSING = "missing"
    CACHED = "cached"


@dataclass(frozen=True)
class CapabilityLookup:
    """Result of a capability source lookup. ``value`` is set only when FOUND."""

    status: CapabilityStatus
    value: str | None = None

    @property
    def found(self) -> bool:
        return self.status is CapabilityStatus.FOUND
