"""Shared pytest fixtures for the repo-scaffold test suite.

Provides reusable fixtures for:
- Temporary project directories
- Raw and validated project configurations
- A factory for configs with selected fields overridden
- Bound catalogue entries for the demo library project
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from repo_scaffold.intake import (
    ProjectConfig,
    validate_config,
)
from repo_scaffold.scaffolder import TemplateEntry, entries_for


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty temporary directory to scaffold into (auto-cleanup)."""
    project_dir = tmp_path / "demo"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def demo_config_raw() -> dict[str, Any]:
    """The reference library configuration, spelled the way users type it."""
    return {
        "name": "demo",
        "kind": "library",
        "language-version": "3.11",
        "framework": "none",
        "team-size": 1,
        "deployment-target": "none",
    }


@pytest.fixture
def demo_config(demo_config_raw: dict[str, Any]) -> ProjectConfig:
    return validate_config(demo_config_raw)


@pytest.fixture
def make_config() -> Callable[..., ProjectConfig]:
    """Factory building a valid config with selected fields overridden.

    Usage::

        def test_something(make_config):
            config = make_config(framework="django", team_size=4)
    """

    def factory(**overrides: Any) -> ProjectConfig:
        raw: dict[str, Any] = {
            "name": "demo",
            "kind": "library",
            "python_version": "3.11",
            "framework": "none",
            "team_size": 1,
            "deployment_target": "none",
        }
        raw.update(overrides)
        return validate_config(raw)

    return factory


@pytest.fixture
def demo_entries(demo_config: ProjectConfig) -> list[TemplateEntry]:
    return entries_for(demo_config)

