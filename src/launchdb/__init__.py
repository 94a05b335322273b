"""launchdb - Registry of launchable applications and what they can open."""

from __future__ import annotations

# Core
from launchdb.manager import LaunchDB, split_mime_list

# Registry
from launchdb.registry import (
    CAN_OPEN_KEY,
    ApplicationKind,
    ApplicationPath,
    ApplicationStore,
    CapabilityLookup,
    CapabilityResolver,
    CapabilityStatus,
    classify,
    resolve_capability_source,
)

# Attributes
from launchdb.attributes import AttributeStore, XattrStore, probe_extattr_support

# Config
from launchdb.config import Config, Settings, default_database_path

# Errors
from launchdb.errors import (
    ConfigError,
    ConfigNotFoundError,
    LaunchError,
    StoreUnavailableError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "LaunchDB",
    "split_mime_list",
    # Registry
    "CAN_OPEN_KEY",
    "ApplicationKind",
    "ApplicationPath",
    "ApplicationStore",
    "CapabilityLookup",
    "CapabilityResolver",
    "CapabilityStatus",
    "classify",
    "resolve_capability_source",
    # Attributes
    "AttributeStore",
    "XattrStore",
    "probe_extattr_support",
    # Config
    "Config",
    "Settings",
    "default_database_path",
    # Errors
    "LaunchError",
    "ConfigError",
    "ConfigNotFoundError",
    "StoreUnavailableError",
]
