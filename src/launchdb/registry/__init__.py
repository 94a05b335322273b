"""Application registry: persistent path store and capability resolution.

Usage::

    from launchdb.attributes import XattrStore
    from launchdb.registry import ApplicationStore, CapabilityResolver

    store = ApplicationStore("/tmp/launch.db")
    store.open()
    resolver = CapabilityResolver(store, XattrStore(), supports_extattr=True)
    resolver.handle_application("/Applications/Editor.app")
"""

from __future__ import annotations

from launchdb.registry.resolver import (
    CAN_OPEN_KEY,
    CapabilityResolver,
    canonicalize,
    classify,
    resolve_capability_source,
)
from launchdb.registry.store import ApplicationStore
from launchdb.registry.types import (
    ApplicationKind,
    ApplicationPath,
    CapabilityLookup,
    CapabilityStatus,
)

__all__ = [
    "CAN_OPEN_KEY",
    "ApplicationKind",
    "ApplicationPath",
    "ApplicationStore",
    "CapabilityLookup",
    "CapabilityResolver",
    "CapabilityStatus",
    "canonicalize",
    "classify",
    "resolve_capability_source",
]
