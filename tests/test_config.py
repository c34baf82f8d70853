"""Unit tests for GenerateOptions (skelgen.config).

Tests cover:
- Defaults and the resolved working directory
- Validation
- from_env
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skelgen.config import GenerateOptions


class TestDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        opts = GenerateOptions()
        assert opts.overwrite is False
        assert opts.dry_run is False
        assert opts.working_directory == ""

    @pytest.mark.unit
    def test_empty_work_dir_is_current_directory(self):
        assert GenerateOptions().work_dir == "."

    @pytest.mark.unit
    def test_work_dir(self):
        assert GenerateOptions(working_directory="out/app").work_dir == "out/app"

    @pytest.mark.unit
    def test_rejects_bad_types(self):
        with pytest.raises(ValidationError):
            GenerateOptions(dry_run="sometimes")


class TestFromEnv:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch):
        for var in ("SKELGEN_OVERWRITE", "SKELGEN_DRY_RUN", "SKELGEN_WORKDIR"):
            monkeypatch.delenv(var, raising=False)

    @pytest.mark.unit
    def test_unset(self):
        assert GenerateOptions.from_env() == GenerateOptions()

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on"])
    def test_truthy_values(self, monkeypatch: pytest.MonkeyPatch, value: str):
        monkeypatch.setenv("SKELGEN_DRY_RUN", value)
        monkeypatch.setenv("SKELGEN_OVERWRITE", value)
        opts = GenerateOptions.from_env()
        assert opts.dry_run is True
        assert opts.overwrite is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_falsy_values(self, monkeypatch: pytest.MonkeyPatch, value: str):
        monkeypatch.setenv("SKELGEN_DRY_RUN", value)
        assert GenerateOptions.from_env().dry_run is False

    @pytest.mark.unit
    def test_workdir(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SKELGEN_WORKDIR", "build")
        assert GenerateOptions.from_env().work_dir == "build"
