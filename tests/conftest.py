"""Shared test fixtures for the launchdb test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from launchdb.registry.store import ApplicationStore


# === Attribute store double ===


class RecordingAttributeStore:
    """In-memory AttributeStore that records every write."""

    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.values: dict[tuple[str, str], str] = {}
        self.get_calls: list[tuple[str, str]] = []
        self.set_calls: list[tuple[str, str, str]] = []

    def get_string(self, path: str, key: str) -> tuple[str, bool]:
        self.get_calls.append((path, key))
        if not self.supported or (path, key) not in self.values:
            return "", False
        return self.values[(path, key)], True

    def set_string(self, path: str, key: str, value: str) -> bool:
        self.set_calls.append((path, key, value))
        if not self.supported:
            return False
        self.values[(path, key)] = value
        return True

    def get_bool(self, path: str, key: str) -> tuple[bool, bool]:
        value, ok = self.get_string(path, key)
        return (value == "1", ok)

    def set_bool(self, path: str, key: str, value: bool) -> bool:
        return self.set_string(path, key, "1" if value else "0")


# === Fixtures ===


@pytest.fixture
def attributes() -> RecordingAttributeStore:
    """Attribute store on a filesystem that supports extended attributes."""
    return RecordingAttributeStore()


@pytest.fixture
def unsupported_attributes() -> RecordingAttributeStore:
    """Attribute store whose every read and write fails."""
    return RecordingAttributeStore(supported=False)


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    """Canonical directory holding application fixtures."""
    apps = (tmp_path / "apps").resolve()
    apps.mkdir()
    return apps


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "launch" / "launch.db"


@pytest.fixture
def store(db_path: Path) -> Iterator[ApplicationStore]:
    """An opened ApplicationStore backed by a temporary file."""
    s = ApplicationStore(db_path)
    assert s.open()
    yield s
    s.close()


@pytest.fixture
def bundle_factory(apps_dir: Path):
    """Factory creating ``<name>.app`` bundles, optionally with a can-open file."""

    def factory(name: str, can_open: str | None = None) -> Path:
        bundle = apps_dir / f"{name}.app"
        (bundle / "Resources").mkdir(parents=True)
        if can_open is not None:
            (bundle / "Resources" / "can-open").write_text(can_open, newline="")
        return bundle

    return factory


@pytest.fixture
def desktop_factory(apps_dir: Path):
    """Factory creating ``<name>.desktop`` entries from a list of lines."""

    def factory(name: str, lines: list[str]) -> Path:
        entry = apps_dir / f"{name}.desktop"
        entry.write_text("\n".join(lines) + "\n")
        return entry

    return factory
