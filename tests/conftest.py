"""Shared pytest fixtures for the skelgen test suite.

Provides reusable fixtures for:
- Running inside a temporary working directory
- Capturing the change report without colour
- Filesystems that record the calls made through them
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from skelgen.scaffolder import LocalFileSystem, OutputContext, Root


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory made the current directory for the test.

    Generated paths are relative to ".", so report lines read ``new.txt``
    rather than an absolute temp path.
    """
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    yield project_dir


@pytest.fixture
def existing_file(workdir: Path) -> Path:
    """``existing.txt`` containing ``"existing contents"``."""
    path = workdir / "existing.txt"
    path.write_text("existing contents", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Report capture
# ---------------------------------------------------------------------------

@pytest.fixture
def report() -> io.StringIO:
    """Buffer the change report is written to."""
    return io.StringIO()


@pytest.fixture
def report_console(report: io.StringIO) -> Console:
    """A colourless console writing into ``report``."""
    return Console(file=report, color_system=None, width=200, highlight=False)


@pytest.fixture
def run(report: io.StringIO, report_console: Console):
    """Execute a ``Root`` and return the report text it produced."""

    def _run(root: Root, fs=None) -> str:
        root.execute(fs, console=report_console)
        return report.getvalue()

    return _run


@pytest.fixture
def make_context(report_console: Console):
    """Factory for an ``OutputContext`` reporting into ``report``."""

    def _make(fs=None, **kwargs) -> OutputContext:
        return OutputContext(fs, console=report_console, **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Filesystem doubles
# ---------------------------------------------------------------------------

@pytest.fixture
def spy_fs() -> MagicMock:
    """The local filesystem wrapped so every call is recorded."""
    return MagicMock(wraps=LocalFileSystem())
