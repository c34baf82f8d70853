"""Tests for the ``skelgen`` command line (skelgen.cli)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from skelgen.cli import build_parser, main


pytestmark = pytest.mark.unit


def _identity(src: bytes) -> bytes:
    return src


@pytest.fixture(autouse=True)
def no_format():
    with patch("skelgen.scaffolder.files.ruff_format", _identity):
        yield


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("SKELGEN_OVERWRITE", "SKELGEN_DRY_RUN", "SKELGEN_WORKDIR"):
        monkeypatch.delenv(var, raising=False)


class TestParser:
    def test_app_flags(self):
        args = build_parser().parse_args(
            ["app", "-n", "demo", "-c", "note", "-V", "2.0", "--color", "--http", "-C", "out"]
        )
        assert args.command == "app"
        assert args.name == "demo"
        assert args.comment == "note"
        assert args.app_version == "2.0"
        assert args.color and args.http and not args.table
        assert args.directory == "out"
        assert args.dry_run is False

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_defaults_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SKELGEN_DRY_RUN", "1")
        monkeypatch.setenv("SKELGEN_WORKDIR", "gen")
        args = build_parser().parse_args(["app"])
        assert args.dry_run is True
        assert args.directory == "gen"


class TestMain:
    def test_creates_app(self, workdir: Path, capsys):
        main(["app", "-n", "demo", "--license"])

        out = capsys.readouterr().out
        assert (workdir / "demo" / "__main__.py").is_file()
        assert (workdir / "demo" / "LICENSE.txt").is_file()
        assert "create  demo/__main__.py" in out
        assert "Created app demo" in out

    def test_name_defaults_to_directory(self, workdir: Path, capsys):
        main(["app"])
        assert (workdir / "project" / "__main__.py").is_file()

    def test_dry_run(self, workdir: Path, capsys):
        main(["app", "-n", "demo", "--dry-run"])

        out = capsys.readouterr().out
        assert list(workdir.iterdir()) == []
        assert "create  demo/__main__.py (dry-run)" in out
        assert "Dry run" in out

    def test_dry_run_from_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv("SKELGEN_DRY_RUN", "yes")
        main(["app", "-n", "demo"])
        assert list(workdir.iterdir()) == []

    def test_directory(self, workdir: Path, capsys):
        (workdir / "out").mkdir()
        main(["app", "-n", "demo", "-C", "out"])
        assert (workdir / "out" / "demo" / "__main__.py").is_file()

    def test_error_exits_1(self, workdir: Path, capsys):
        (workdir / "demo").write_text("not a directory", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            main(["app", "-n", "demo"])

        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_dependency_failure_exits_1(self, workdir: Path, capsys):
        with patch("skelgen.scaffolder.deps_gen.run_command", return_value=(1, b"", "nope")):
            with pytest.raises(SystemExit) as excinfo:
                main(["app", "-n", "demo", "--color"])

        assert excinfo.value.code == 1
        out = capsys.readouterr().out
        assert "error  pyproject.toml" in out
        assert not (workdir / "demo").exists()


class TestInit:
    def test_runs_uv_add_in_directory(self, workdir: Path, capsys):
        (workdir / "proj").mkdir()
        with patch("skelgen.scaffolder.deps_gen.run_command", return_value=(0, b"", "")) as mock_run:
            main(["init", "-C", "proj"])

        assert mock_run.call_args.args[0] == ["uv", "add", "skelgen"]
        assert mock_run.call_args.kwargs["cwd"] == "proj"
        assert "Project initialized for skelgen" in capsys.readouterr().out

    def test_dry_run(self, workdir: Path, capsys):
        with patch("skelgen.scaffolder.deps_gen.run_command") as mock_run:
            main(["init", "--dry-run"])

        mock_run.assert_not_called()
        out = capsys.readouterr().out
        assert "overwrite  pyproject.toml (dry-run)" in out
        assert list(workdir.iterdir()) == []

    def test_failure_exits_1(self, workdir: Path, capsys):
        with patch("skelgen.scaffolder.deps_gen.run_command", return_value=(2, b"", "")):
            with pytest.raises(SystemExit) as excinfo:
                main(["init"])
        assert excinfo.value.code == 1
