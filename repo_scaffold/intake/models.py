"""Pydantic v2 models for the scaffolding configuration.

Defines the enumerated domains a project can be described with and the
immutable ``ProjectConfig`` record that drives template selection.
"""

from __future__ import annotations

import keyword
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repo_scaffold.utils import python_slugify, slugify


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ProjectKind(str, Enum):
    """What sort of project is being scaffolded."""
    LIBRARY = "library"
    CLI = "cli"
    WEB = "web"
    DATA_SCIENCE = "data-science"
    API = "api"


class Framework(str, Enum):
    """Web framework the project is built on, if any."""
    NONE = "none"
    DJANGO = "django"
    FLASK = "flask"
    FASTAPI = "fastapi"


class DeploymentTarget(str, Enum):
    """Where the project ends up running or being published."""
    NONE = "none"
    DOCKER = "docker"
    CLOUD = "cloud"
    PYPI = "pypi"
    K8S = "k8s"


SUPPORTED_PYTHON_VERSIONS: tuple[str, ...] = ("3.9", "3.10", "3.11", "3.12", "3.13", "3.14")
DEFAULT_PYTHON_VERSION = "3.12"
MINIMUM_PYTHON_MINOR = 9

_PYTHON_VERSION_PATTERN = re.compile(r"^3\.(\d+)$")

_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9 ._-]*$")


def check_python_version(value: object) -> str:
    """Return *value* as a ``3.N`` version string (N >= 9) or raise ``ValueError``.

    Only strings are accepted: YAML reads ``3.10`` as the float ``3.1``.
    """
    text = value.strip() if isinstance(value, str) else None
    match = _PYTHON_VERSION_PATTERN.match(text) if text else None
    if match is None or int(match.group(1)) < MINIMUM_PYTHON_MINOR:
        raise ValueError(
            f"python version must be a string of the form 3.N with N >= {MINIMUM_PYTHON_MINOR}, "
            f"e.g. {', '.join(SUPPORTED_PYTHON_VERSIONS)}"
        )
    return text


def python_versions_from(minimum: str) -> list[str]:
    """All ``3.N`` versions from *minimum* up to the newest known release.

    A minimum newer than every known release yields just that version.
    """
    low = int(check_python_version(minimum).split(".")[1])
    high = max(low, int(SUPPORTED_PYTHON_VERSIONS[-1].split(".")[1]))
    return [f"3.{minor}" for minor in range(low, high + 1)]


# ---------------------------------------------------------------------------
# ProjectConfig
# ---------------------------------------------------------------------------

class ProjectConfig(BaseModel):
    """Validated, immutable description of the project to scaffold."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., description="Project name (used for the package and distribution names)")
    kind: ProjectKind = Field(default=ProjectKind.LIBRARY, description="Project type")
    python_version: str = Field(
        default=DEFAULT_PYTHON_VERSION,
        alias="language-version",
        description="Minimum supported Python version",
    )
    framework: Framework = Field(default=Framework.NONE, description="Web framework")
    team_size: int = Field(default=1, ge=1, alias="team-size", description="Number of developers")
    deployment_target: DeploymentTarget = Field(
        default=DeploymentTarget.NONE,
        alias="deployment-target",
        description="Deployment or publishing target",
    )
    description: str = Field(default="", description="One-line project description")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value:
            raise ValueError("name must not be empty")
        if not _NAME_PATTERN.match(value):
            raise ValueError(
                "name must start with a letter and contain only letters, digits, "
                "spaces, '.', '-' or '_'"
            )
        package = python_slugify(value)
        if keyword.iskeyword(package):
            raise ValueError(f"package name {package!r} is a Python keyword")
        return value

    @field_validator("python_version", mode="before")
    @classmethod
    def _check_python_version(cls, value: object) -> str:
        return check_python_version(value)

    # ------------------------------------------------------------------
    # Derived names
    # ------------------------------------------------------------------

    @property
    def package_name(self) -> str:
        """Import package name, e.g. ``'My Tool'`` -> ``'my_tool'``."""
        return python_slugify(self.name)

    @property
    def dist_name(self) -> str:
        """Distribution name, e.g. ``'My Tool'`` -> ``'my-tool'``."""
        return slugify(self.name)

    @property
    def is_service(self) -> bool:
        """Whether the project runs as a network service."""
        return self.kind in (ProjectKind.WEB, ProjectKind.API)
