"""Tests for the launchdb command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from launchdb import cli


@pytest.fixture
def run(db_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run the CLI against a temporary database with extattr probing disabled."""
    monkeypatch.setattr(cli, "LaunchDB", _NoProbeLaunchDB)

    def runner(*args: str) -> int:
        return cli.main(["--database", str(db_path), *args])

    return runner


class _NoProbeLaunchDB(cli.LaunchDB):
    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("supports_extattr", False)
        super().__init__(*args, **kwargs)


class TestCommands:
    def test_handle_then_list(self, run, bundle_factory, desktop_factory, capsys) -> None:
        entry = desktop_factory("viewer", ["MimeType=image/png;"])
        bundle = bundle_factory("Editor")
        assert run("handle", str(entry), str(bundle)) == 0
        capsys.readouterr()
        assert run("list") == 0
        assert capsys.readouterr().out.splitlines() == [str(bundle), str(entry)]

    def test_exists(self, run, bundle_factory) -> None:
        bundle = bundle_factory("Editor")
        assert run("exists", str(bundle)) == 1
        run("handle", str(bundle))
        assert run("exists", str(bundle)) == 0

    def test_exists_relative_path(self, run, bundle_factory, apps_dir, monkeypatch: pytest.MonkeyPatch) -> None:
        """A relative path is canonicalized before the lookup, as it is when handled."""
        bundle_factory("Editor")
        monkeypatch.chdir(apps_dir)
        assert run("handle", "Editor.app") == 0
        assert run("exists", "Editor.app") == 0
        assert run("exists", "./sub/../Editor.app") == 0

    def test_count_and_clear(self, run, bundle_factory, capsys) -> None:
        run("handle", str(bundle_factory("Editor")))
        capsys.readouterr()
        run("count")
        assert capsys.readouterr().out.strip() == "1"
        assert run("clear") == 0
        run("count")
        assert capsys.readouterr().out.strip() == "0"

    def test_can_open(self, run, bundle_factory, capsys) -> None:
        bundle = bundle_factory("Editor", can_open="text/plain")
        assert run("can-open", str(bundle)) == 0
        assert capsys.readouterr().out == "text/plain\n"

    def test_can_open_without_source(self, run, bundle_factory) -> None:
        assert run("can-open", str(bundle_factory("Editor"))) == 1

    def test_for_mime(self, run, bundle_factory, capsys) -> None:
        bundle = bundle_factory("Editor", can_open="text/plain\n")
        run("handle", str(bundle))
        capsys.readouterr()
        assert run("for", "text/plain") == 0
        assert capsys.readouterr().out.splitlines() == [str(bundle)]
        assert run("for", "image/png") == 1


class TestErrors:
    def test_missing_config(self, run, tmp_path: Path, capsys) -> None:
        assert cli.main(["--config", str(tmp_path / "missing.yaml"), "list"]) == 2
        assert "CONFIG_NOT_FOUND" in capsys.readouterr().err

    def test_database_from_config(self, run, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        db_file = tmp_path / "cfg" / "launch.db"
        config = tmp_path / "launchdb.yaml"
        config.write_text(yaml.dump({"database": {"path": str(db_file)}}))
        assert cli.main(["--config", str(config), "count"]) == 0
        assert db_file.exists()

    def test_unopenable_database(self, run, tmp_path: Path, capsys) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert cli.main(["--database", str(blocker / "launch.db"), "list"]) == 1
        assert "cannot open database" in capsys.readouterr().err

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            cli.main([])
