"""repo-scaffold settings.

Centralised, typed settings for the scaffolder that are not part of a
project's own description: author details, licence, default Python version
and template overrides.  Pydantic v2 models validate them at construction
time and serialise them to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from repo_scaffold.intake.models import DEFAULT_PYTHON_VERSION, check_python_version

LicenseName = Literal["MIT", "Apache-2.0", "BSD-3-Clause", "Proprietary"]


class Settings(BaseModel):
    """Global scaffolder settings.

    Instances are typically created once by the CLI entry point (usually via
    :meth:`from_env`) and passed to ``ProjectGenerator``.
    """

    output_dir: Path = Field(default=Path("."), description="Parent directory for new projects")
    author: str = Field(default="", description="Author name written into pyproject.toml and LICENSE")
    author_email: str = Field(default="")
    license: LicenseName = Field(default="MIT")
    default_python_version: str = Field(default=DEFAULT_PYTHON_VERSION)
    template_dir: Path | None = Field(
        default=None, description="Directory of .j2 templates overriding the packaged ones"
    )

    @field_validator("default_python_version", mode="before")
    @classmethod
    def _check_python_version(cls, value: object) -> str:
        return check_python_version(value)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_OUTPUT_DIR, SCAFFOLD_AUTHOR, SCAFFOLD_AUTHOR_EMAIL,
            SCAFFOLD_LICENSE, SCAFFOLD_PYTHON_VERSION, SCAFFOLD_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SCAFFOLD_OUTPUT_DIR"])
        if os.environ.get("SCAFFOLD_AUTHOR"):
            kwargs["author"] = os.environ["SCAFFOLD_AUTHOR"]
        if os.environ.get("SCAFFOLD_AUTHOR_EMAIL"):
            kwargs["author_email"] = os.environ["SCAFFOLD_AUTHOR_EMAIL"]
        if os.environ.get("SCAFFOLD_LICENSE"):
            kwargs["license"] = os.environ["SCAFFOLD_LICENSE"]
        if os.environ.get("SCAFFOLD_PYTHON_VERSION"):
            kwargs["default_python_version"] = os.environ["SCAFFOLD_PYTHON_VERSION"]
        if os.environ.get("SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SCAFFOLD_TEMPLATE_DIR"])
        return cls(**kwargs)
