"""Static catalogue of files and directories a project can be scaffolded with.

Each :class:`TemplateEntry` pairs a (possibly templated) relative path with
its content source and a :class:`Condition` over ``ProjectConfig``.
:func:`entries_for` selects the entries that apply to a config, binds them to
the Jinja2 render context and returns them in a deterministic order:
a directory sorts before anything it contains, and siblings sort
lexicographically.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import partial
from pathlib import PurePosixPath
from typing import Any

from repo_scaffold.advisor import dev_dependencies, runtime_dependencies
from repo_scaffold.config import Settings
from repo_scaffold.errors import CatalogError
from repo_scaffold.intake.models import (
    DeploymentTarget,
    Framework,
    ProjectConfig,
    ProjectKind,
    python_versions_from,
)

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Condition:
    """A labelled predicate over ``ProjectConfig``."""

    label: str
    test: Callable[[ProjectConfig], bool]

    def __call__(self, config: ProjectConfig) -> bool:
        return self.test(config)


always = Condition("always", lambda config: True)


def kind_is(*kinds: ProjectKind | str) -> Condition:
    kinds = tuple(ProjectKind(k) for k in kinds)
    values = ", ".join(k.value for k in kinds)
    return Condition(f"kind in ({values})", lambda config: config.kind in kinds)


def framework_is(*frameworks: Framework | str) -> Condition:
    frameworks = tuple(Framework(f) for f in frameworks)
    values = ", ".join(f.value for f in frameworks)
    return Condition(f"framework in ({values})", lambda config: config.framework in frameworks)


def deploys_to(*targets: DeploymentTarget | str) -> Condition:
    targets = tuple(DeploymentTarget(t) for t in targets)
    values = ", ".join(t.value for t in targets)
    return Condition(
        f"deployment_target in ({values})",
        lambda config: config.deployment_target in targets,
    )


def team_at_least(size: int) -> Condition:
    return Condition(f"team_size >= {size}", lambda config: config.team_size >= size)


def all_of(*conditions: Condition) -> Condition:
    return Condition(
        " and ".join(c.label for c in conditions),
        lambda config: all(c(config) for c in conditions),
    )


def any_of(*conditions: Condition) -> Condition:
    return Condition(
        " or ".join(f"({c.label})" for c in conditions),
        lambda config: any(c(config) for c in conditions),
    )


# ---------------------------------------------------------------------------
# TemplateEntry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """A single file or directory rule in the catalogue.

    ``content`` is either the literal file body or a zero-argument callable
    producing it.  Catalogue entries that name a ``template`` leave
    ``content`` unset until :meth:`bind` attaches a lazy renderer.
    """

    relative_path: str
    content: str | Callable[[], str] | None = ""
    condition: Condition = always
    template: str | None = None
    is_directory: bool = False
    executable: bool = False

    def applies_to(self, config: ProjectConfig) -> bool:
        return self.condition(config)

    def bind(self, renderer: TemplateRenderer, context: dict[str, Any]) -> "TemplateEntry":
        """Return a copy with a concrete path and lazily rendered content."""
        path = self.relative_path
        if "{" in path:
            path = renderer.render_string(path, context)

        content = self.content
        if self.template is not None:
            content = partial(renderer.render, self.template, context)
        elif isinstance(content, str) and ("{{" in content or "{%" in content):
            content = partial(renderer.render_string, content, context)
        return replace(self, relative_path=path, content=content)

    def render(self) -> str:
        """Produce the file body. Template errors propagate to the caller."""
        if self.content is None or (self.template is not None and not callable(self.content)):
            raise CatalogError(f"{self.relative_path}: template entry used before bind()")
        if callable(self.content):
            return self.content()
        return self.content


def path_sort_key(path: str) -> tuple[str, ...]:
    """Sort key putting a directory before its contents, siblings lexicographic."""
    return PurePosixPath(path).parts


# ---------------------------------------------------------------------------
# The catalogue
# ---------------------------------------------------------------------------

_PKG = "src/{{ package_name }}"
_CONTAINER = deploys_to(DeploymentTarget.DOCKER, DeploymentTarget.CLOUD, DeploymentTarget.K8S)

CATALOG: tuple[TemplateEntry, ...] = (
    # -- Always -------------------------------------------------------------
    TemplateEntry(".editorconfig", template="editorconfig.j2"),
    TemplateEntry(".gitignore", template="gitignore.j2"),
    TemplateEntry("CHANGELOG.md", template="CHANGELOG.md.j2"),
    TemplateEntry("LICENSE", template="LICENSE.j2"),
    TemplateEntry("Makefile", template="Makefile.j2"),
    TemplateEntry("README.md", template="README.md.j2"),
    TemplateEntry("pyproject.toml", template="pyproject.toml.j2"),
    TemplateEntry(".github/workflows/ci.yml", template="github/ci.yml.j2"),
    TemplateEntry(f"{_PKG}/__init__.py", template="package/__init__.py.j2"),
    TemplateEntry("tests/__init__.py", content=""),
    TemplateEntry("tests/conftest.py", template="tests/conftest.py.j2"),
    TemplateEntry("tests/test_smoke.py", template="tests/test_smoke.py.j2"),
    # -- Project kind ---------------------------------------------------------
    TemplateEntry(f"{_PKG}/py.typed", content="", condition=kind_is(ProjectKind.LIBRARY)),
    TemplateEntry("docs/index.md", template="docs/index.md.j2", condition=kind_is(ProjectKind.LIBRARY)),
    TemplateEntry(f"{_PKG}/cli.py", template="package/cli.py.j2", condition=kind_is(ProjectKind.CLI)),
    TemplateEntry(
        f"{_PKG}/__main__.py",
        content="from {{ package_name }}.cli import main\n\nraise SystemExit(main())\n",
        condition=kind_is(ProjectKind.CLI),
    ),
    TemplateEntry("tests/test_cli.py", template="tests/test_cli.py.j2", condition=kind_is(ProjectKind.CLI)),
    TemplateEntry("data/raw", is_directory=True, condition=kind_is(ProjectKind.DATA_SCIENCE)),
    TemplateEntry("data/processed", is_directory=True, condition=kind_is(ProjectKind.DATA_SCIENCE)),
    TemplateEntry("notebooks", is_directory=True, condition=kind_is(ProjectKind.DATA_SCIENCE)),
    TemplateEntry(
        "notebooks/README.md",
        content=(
            "# Notebooks\n\n"
            "Exploratory notebooks for {{ project_name }}.  Move code that other\n"
            "notebooks depend on into `src/{{ package_name }}/`.  Outputs are\n"
            "stripped on commit by `nbstripout`.\n"
        ),
        condition=kind_is(ProjectKind.DATA_SCIENCE),
    ),
    TemplateEntry(
        f"{_PKG}/pipeline.py",
        template="package/pipeline.py.j2",
        condition=kind_is(ProjectKind.DATA_SCIENCE),
    ),
    TemplateEntry(".env.example", template="env.example.j2", condition=kind_is(ProjectKind.WEB, ProjectKind.API)),
    # -- Framework ------------------------------------------------------------
    TemplateEntry(f"{_PKG}/core.py", template="package/core.py.j2", condition=framework_is(Framework.NONE)),
    TemplateEntry("tests/test_core.py", template="tests/test_core.py.j2", condition=framework_is(Framework.NONE)),
    TemplateEntry("manage.py", template="django/manage.py.j2", condition=framework_is(Framework.DJANGO), executable=True),
    TemplateEntry(f"{_PKG}/settings.py", template="django/settings.py.j2", condition=framework_is(Framework.DJANGO)),
    TemplateEntry(f"{_PKG}/urls.py", template="django/urls.py.j2", condition=framework_is(Framework.DJANGO)),
    TemplateEntry(f"{_PKG}/wsgi.py", template="django/wsgi.py.j2", condition=framework_is(Framework.DJANGO)),
    TemplateEntry(f"{_PKG}/asgi.py", template="django/asgi.py.j2", condition=framework_is(Framework.DJANGO)),
    TemplateEntry("tests/test_urls.py", template="django/test_urls.py.j2", condition=framework_is(Framework.DJANGO)),
    TemplateEntry(f"{_PKG}/app.py", template="flask/app.py.j2", condition=framework_is(Framework.FLASK)),
    TemplateEntry("tests/test_app.py", template="flask/test_app.py.j2", condition=framework_is(Framework.FLASK)),
    TemplateEntry(f"{_PKG}/main.py", template="fastapi/main.py.j2", condition=framework_is(Framework.FASTAPI)),
    TemplateEntry("tests/test_main.py", template="fastapi/test_main.py.j2", condition=framework_is(Framework.FASTAPI)),
    # -- Team size ------------------------------------------------------------
    TemplateEntry(".pre-commit-config.yaml", template="pre-commit-config.yaml.j2", condition=team_at_least(2)),
    TemplateEntry("CONTRIBUTING.md", template="CONTRIBUTING.md.j2", condition=team_at_least(2)),
    TemplateEntry(".github/CODEOWNERS", template="github/CODEOWNERS.j2", condition=team_at_least(3)),
    TemplateEntry(
        ".github/pull_request_template.md",
        template="github/pull_request_template.md.j2",
        condition=team_at_least(3),
    ),
    # -- Deployment -----------------------------------------------------------
    TemplateEntry("Dockerfile", template="deploy/Dockerfile.j2", condition=_CONTAINER),
    TemplateEntry(".dockerignore", template="deploy/dockerignore.j2", condition=_CONTAINER),
    TemplateEntry(
        "docker-compose.yml",
        template="deploy/docker-compose.yml.j2",
        condition=all_of(deploys_to(DeploymentTarget.DOCKER), kind_is(ProjectKind.WEB, ProjectKind.API)),
    ),
    TemplateEntry(
        ".github/workflows/deploy.yml",
        template="github/deploy.yml.j2",
        condition=deploys_to(DeploymentTarget.CLOUD),
    ),
    TemplateEntry(
        "deploy/k8s/deployment.yaml",
        template="deploy/k8s-deployment.yaml.j2",
        condition=deploys_to(DeploymentTarget.K8S),
    ),
    TemplateEntry(
        "deploy/k8s/service.yaml",
        template="deploy/k8s-service.yaml.j2",
        condition=deploys_to(DeploymentTarget.K8S),
    ),
    TemplateEntry(
        ".github/workflows/publish.yml",
        template="github/publish.yml.j2",
        condition=deploys_to(DeploymentTarget.PYPI),
    ),
)


def validate_catalog(entries: Iterable[TemplateEntry]) -> None:
    """Check catalogue invariants: unique, relative, non-escaping paths.

    Raises:
        CatalogError: On the first violated invariant.
    """
    seen: set[str] = set()
    for entry in entries:
        path = PurePosixPath(entry.relative_path)
        if path.is_absolute() or ".." in path.parts:
            raise CatalogError(f"catalog path must be relative to the project root: {entry.relative_path}")
        if entry.relative_path in seen:
            raise CatalogError(f"duplicate catalog path: {entry.relative_path}")
        if entry.is_directory and entry.template is not None:
            raise CatalogError(f"directory entry cannot have a template: {entry.relative_path}")
        seen.add(entry.relative_path)


validate_catalog(CATALOG)


# ---------------------------------------------------------------------------
# Context building & selection
# ---------------------------------------------------------------------------


def build_context(config: ProjectConfig, settings: Settings | None = None) -> dict[str, Any]:
    """Build the Jinja2 template context from the project config and settings."""
    settings = settings or Settings()

    return {
        "project_name": config.name,
        "package_name": config.package_name,
        "dist_name": config.dist_name,
        "description": config.description or f"{config.name} project",
        "kind": config.kind.value,
        "framework": config.framework.value,
        "deployment_target": config.deployment_target.value,
        "python_version": config.python_version,
        "python_version_nodot": config.python_version.replace(".", ""),
        "ci_python_versions": python_versions_from(config.python_version),
        "team_size": config.team_size,
        "is_service": config.is_service,
        "is_cli": config.kind is ProjectKind.CLI,
        "is_container": _CONTAINER(config),
        "dependencies": runtime_dependencies(config),
        "dev_dependencies": dev_dependencies(config),
        "author": settings.author or "Your Name",
        "author_email": settings.author_email or "you@example.com",
        "license": settings.license,
        "year": datetime.date.today().year,
    }


def entries_for(
    config: ProjectConfig,
    renderer: TemplateRenderer | None = None,
    context: dict[str, Any] | None = None,
) -> list[TemplateEntry]:
    """Select, bind and order the catalogue entries that apply to *config*.

    Pure with respect to the filesystem: content is rendered lazily when the
    emitter asks for it.
    """
    renderer = renderer or TemplateRenderer()
    context = context if context is not None else build_context(config)

    bound = [entry.bind(renderer, context) for entry in CATALOG if entry.applies_to(config)]
    bound.sort(key=lambda entry: path_sort_key(entry.relative_path))

    paths = [entry.relative_path for entry in bound]
    if len(paths) != len(set(paths)):
        duplicates = sorted({p for p in paths if paths.count(p) > 1})
        raise CatalogError(f"entries resolve to the same path: {', '.join(duplicates)}")
    return bound
