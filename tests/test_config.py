"""Unit tests for Settings (repo_scaffold.config).

Tests cover:
- Settings defaults and validation
- save/load round trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from repo_scaffold.config import Settings


class TestSettingsDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings()
        assert settings.output_dir == Path(".")
        assert settings.author == ""
        assert settings.license == "MIT"
        assert settings.default_python_version == "3.12"
        assert settings.template_dir is None

    @pytest.mark.unit
    def test_unknown_license_rejected(self):
        with pytest.raises(ValidationError):
            Settings(license="WTFPL")

    @pytest.mark.unit
    def test_newest_python_accepted(self):
        assert Settings(default_python_version="3.14").default_python_version == "3.14"

    @pytest.mark.unit
    def test_unsupported_python_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_python_version="3.8")


class TestSettingsPersistence:
    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        settings = Settings(author="Ada Lovelace", author_email="ada@example.com", license="Apache-2.0")
        path = settings.save(tmp_path / "nested" / "settings.json")
        assert path.exists()

        loaded = Settings.load(path)
        assert loaded == settings

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text('{"license": "nope"}', encoding="utf-8")
        with pytest.raises(ValidationError):
            Settings.load(path)


class TestSettingsFromEnv:
    @pytest.mark.unit
    def test_empty_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()

    @pytest.mark.unit
    def test_all_variables(self, tmp_path: Path):
        env = {
            "SCAFFOLD_OUTPUT_DIR": str(tmp_path),
            "SCAFFOLD_AUTHOR": "Grace Hopper",
            "SCAFFOLD_AUTHOR_EMAIL": "grace@example.com",
            "SCAFFOLD_LICENSE": "BSD-3-Clause",
            "SCAFFOLD_PYTHON_VERSION": "3.10",
            "SCAFFOLD_TEMPLATE_DIR": str(tmp_path / "templates"),
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        assert settings.output_dir == tmp_path
        assert settings.author == "Grace Hopper"
        assert settings.author_email == "grace@example.com"
        assert settings.license == "BSD-3-Clause"
        assert settings.default_python_version == "3.10"
        assert settings.template_dir == tmp_path / "templates"

    @pytest.mark.unit
    def test_invalid_variable(self):
        with patch.dict(os.environ, {"SCAFFOLD_LICENSE": "nope"}, clear=True):
            with pytest.raises(ValidationError):
                Settings.from_env()
