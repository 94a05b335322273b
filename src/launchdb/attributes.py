"""Extended attribute access for application paths.

Every accessor returns an ``ok`` flag instead of raising: ``ok`` is False when
the attribute is absent or the filesystem does not support the operation,
which keeps it distinguishable from a successful read of an empty value.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

__all__ = [
    "AttributeStore",
    "XattrStore",
    "probe_extattr_support",
    "SUPPORT_PROBE_KEY",
]

SUPPORT_PROBE_KEY = "filesystemSupportsExtattr"


@runtime_checkable
class AttributeStore(Protocol):
    """Named string/bool attributes attached to filesystem paths."""

    def get_bool(self, path: str, key: str) -> tuple[bool, bool]: ...

    def set_bool(self, path: str, key: str, value: bool) -> bool: ...

    def get_string(self, path: str, key: str) -> tuple[str, bool]: ...

    def set_string(self, path: str, key: str, value: str) -> bool: ...


class XattrStore:
    """AttributeStore backed by ``os.getxattr``/``os.setxattr``.

    Keys are stored in the ``user.`` namespace. Booleans are written as
    ``"1"``/``"0"``. On platforms without xattr support in :mod:`os`, every
    call reports ``ok=False``.
    """

    def __init__(self, namespace: str = "user.") -> None:
        self._namespace = namespace

    def _name(self, key: str) -> str:
        return f"{self._namespace}{key}"

    def get_string(self, path: str, key: str) -> tuple[str, bool]:
        if not hasattr(os, "getxattr"):
            return "", False
        try:
            raw = os.getxattr(path, self._name(key))
        except OSError as e:
            logger.debug("No xattr '%s' on %s: %s", key, path, e)
            return "", False
        return raw.decode("utf-8", errors="replace"), True

    def set_string(self, path: str, key: str, value: str) -> bool:
        if not hasattr(os, "setxattr"):
            return False
        try:
            os.setxattr(path, self._name(key), value.encode("utf-8"))
        except OSError as e:
            logger.debug("Cannot set xattr '%s' on %s: %s", key, path, e)
            return False
        return True

    def get_bool(self, path: str, key: str) -> tuple[bool, bool]:
        value, ok = self.get_string(path, key)
        if not ok:
            return False, False
        return value.strip() not in ("", "0", "false"), True

    def set_bool(self, path: str, key: str, value: bool) -> bool:
        return self.set_string(path, key, "1" if value else "0")


def probe_extattr_support(attributes: AttributeStore, probe_path: str | Path = "/usr") -> bool:
    """Check once whether extended attributes can be written at ``probe_path``.

    Callers use the result to skip attribute reads and writes entirely on
    filesystems (e.g. live ISOs) that do not support them.
    """
    ok = attributes.set_bool(str(probe_path), SUPPORT_PROBE_KEY, True)
    if ok:
        logger.info("Extended attributes are supported on %s; using them", probe_path)
    else:
        logger.info(
            "Extended attributes are not supported on %s or cannot be written; "
            "capability caching is disabled",
            probe_path,
        )
    return ok
