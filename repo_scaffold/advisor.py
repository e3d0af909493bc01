"""Tooling recommendations for a scaffolded project.

Maps a ``ProjectConfig`` to the linters, test plugins, process tooling and
runtime dependencies the generated repository is set up for.  The same
recommendations feed ``pyproject.toml`` (via :func:`dev_dependencies` and
:func:`runtime_dependencies`) and the table the CLI prints.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.table import Table

from repo_scaffold.intake.models import DeploymentTarget, Framework, ProjectConfig, ProjectKind


@dataclass(frozen=True)
class ToolRecommendation:
    """A recommended tool and the reason it applies to this project."""

    category: str
    tool: str
    reason: str
    package: str | None = None  # pip requirement for dev tools, None for non-Python tooling


_CONTAINER_TARGETS = (DeploymentTarget.DOCKER, DeploymentTarget.CLOUD, DeploymentTarget.K8S)

_FRAMEWORK_REQUIREMENTS: dict[Framework, tuple[str, ...]] = {
    Framework.NONE: (),
    Framework.DJANGO: ("django>=4.2",),
    Framework.FLASK: ("flask>=3.0",),
    Framework.FASTAPI: ("fastapi>=0.110", "uvicorn[standard]>=0.29"),
}


def recommend_tooling(config: ProjectConfig) -> list[ToolRecommendation]:
    """Return the tooling recommended for *config*, grouped by category."""
    recs = [
        ToolRecommendation("lint", "ruff", "Linting and import sorting in a single fast tool", "ruff>=0.5"),
        ToolRecommendation("format", "ruff format", "Black-compatible formatting without a second tool"),
        ToolRecommendation("types", "mypy", "Static type checking in CI", "mypy>=1.10"),
        ToolRecommendation("test", "pytest", "Test runner used by the generated test suite", "pytest>=8.0"),
        ToolRecommendation("test", "pytest-cov", "Coverage reporting in CI", "pytest-cov>=5.0"),
        ToolRecommendation("ci", "GitHub Actions", "Lint, type-check and test on every push"),
    ]

    if config.framework is Framework.DJANGO:
        recs.append(ToolRecommendation("test", "pytest-django", "Django settings and database fixtures for pytest", "pytest-django>=4.8"))
        recs.append(ToolRecommendation("types", "django-stubs", "Type information for Django APIs", "django-stubs>=5.0"))
    elif config.framework is Framework.FASTAPI:
        recs.append(ToolRecommendation("test", "httpx", "Required by FastAPI's TestClient", "httpx>=0.27"))

    if config.kind is ProjectKind.DATA_SCIENCE:
        recs.append(ToolRecommendation("notebooks", "jupyterlab", "Exploratory analysis next to the pipeline code", "jupyterlab>=4.0"))
        recs.append(ToolRecommendation("notebooks", "nbstripout", "Keep notebook outputs out of version control", "nbstripout>=0.7"))

    if config.team_size >= 2:
        recs.append(ToolRecommendation("hooks", "pre-commit", "Run ruff and mypy before every commit", "pre-commit>=3.7"))
    if config.team_size >= 3:
        recs.append(ToolRecommendation("process", "CODEOWNERS", "Automatic review requests on pull requests"))

    if config.deployment_target is DeploymentTarget.PYPI:
        recs.append(ToolRecommendation("packaging", "build", "Build sdists and wheels", "build>=1.2"))
        recs.append(ToolRecommendation("packaging", "twine", "Check distributions before upload", "twine>=5.0"))
    if config.deployment_target in _CONTAINER_TARGETS:
        recs.append(ToolRecommendation("container", "Docker", "Reproducible runtime image"))
        recs.append(ToolRecommendation("container", "hadolint", "Lint the Dockerfile in CI"))
    if config.deployment_target is DeploymentTarget.K8S:
        recs.append(ToolRecommendation("deploy", "kubectl", "Apply the manifests under deploy/k8s"))

    return recs


def dev_dependencies(config: ProjectConfig) -> list[str]:
    """Pip requirements for the ``dev`` extra of the generated project."""
    return [r.package for r in recommend_tooling(config) if r.package]


def runtime_dependencies(config: ProjectConfig) -> list[str]:
    """Pip requirements the generated project needs at runtime."""
    deps = list(_FRAMEWORK_REQUIREMENTS[config.framework])
    if config.kind is ProjectKind.DATA_SCIENCE:
        deps.append("pandas>=2.0")
    if (
        config.framework in (Framework.DJANGO, Framework.FLASK)
        and config.deployment_target in _CONTAINER_TARGETS
    ):
        deps.append("gunicorn>=22.0")
    return deps


def recommendations_table(recs: list[ToolRecommendation], title: str = "Recommended tooling") -> Table:
    """Render recommendations as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Category", style="dim", no_wrap=True)
    table.add_column("Tool", style="bold")
    table.add_column("Why")
    for rec in recs:
        table.add_row(rec.category, rec.tool, rec.reason)
    return table
