"""Tests for the template catalogue (repo_scaffold.scaffolder.catalog).

Covers:
- Catalogue invariants (unique, relative paths)
- Condition helpers
- Selection per kind, framework, team size and deployment target
- Ordering and determinism of entries_for
- Binding and lazy rendering
"""

from __future__ import annotations

import itertools
from pathlib import PurePosixPath

import pytest

from repo_scaffold.errors import CatalogError
from repo_scaffold.intake import (
    DeploymentTarget,
    Framework,
    ProjectConfig,
    ProjectKind,
)
from repo_scaffold.scaffolder.catalog import (
    CATALOG,
    TemplateEntry,
    all_of,
    always,
    any_of,
    build_context,
    deploys_to,
    entries_for,
    framework_is,
    kind_is,
    path_sort_key,
    team_at_least,
    validate_catalog,
)
from repo_scaffold.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


def _paths(entries: list[TemplateEntry]) -> list[str]:
    return [e.relative_path for e in entries]


def all_config_combinations() -> list[ProjectConfig]:
    return [
        ProjectConfig(name="demo", kind=kind, framework=framework, deployment_target=target, team_size=team)
        for kind, framework, target, team in itertools.product(
            ProjectKind, Framework, DeploymentTarget, (1, 5)
        )
    ]


# ---------------------------------------------------------------------------
# Catalogue invariants
# ---------------------------------------------------------------------------


class TestCatalogInvariants:
    def test_paths_unique(self):
        paths = [e.relative_path for e in CATALOG]
        assert len(paths) == len(set(paths))

    def test_catalog_validates(self):
        validate_catalog(CATALOG)

    def test_duplicate_rejected(self):
        with pytest.raises(CatalogError, match="duplicate"):
            validate_catalog([TemplateEntry("README.md"), TemplateEntry("README.md")])

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.txt", "src/../../x"])
    def test_escaping_path_rejected(self, path):
        with pytest.raises(CatalogError, match="relative"):
            validate_catalog([TemplateEntry(path)])

    def test_directory_with_template_rejected(self):
        with pytest.raises(CatalogError, match="directory"):
            validate_catalog([TemplateEntry("data", template="x.j2", is_directory=True)])

    def test_every_template_exists(self):
        available = set(TemplateRenderer().list_templates())
        missing = [e.template for e in CATALOG if e.template and e.template not in available]
        assert missing == []

    @pytest.mark.parametrize("config", all_config_combinations(), ids=lambda c: f"{c.kind.value}-{c.framework.value}-{c.deployment_target.value}-{c.team_size}")
    def test_bound_paths_unique_for_every_config(self, config):
        paths = _paths(entries_for(config))
        assert len(paths) == len(set(paths))


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestConditions:
    def test_always(self, demo_config):
        assert always(demo_config)
        assert always.label == "always"

    def test_kind_is(self, make_config):
        cond = kind_is("web", "api")
        assert cond(make_config(kind="web"))
        assert not cond(make_config(kind="cli"))

    def test_framework_is_label(self):
        assert framework_is(Framework.DJANGO).label == "framework in (django)"

    def test_team_at_least(self, make_config):
        cond = team_at_least(3)
        assert not cond(make_config(team_size=2))
        assert cond(make_config(team_size=3))

    def test_combinators(self, make_config):
        both = all_of(deploys_to("docker"), kind_is("web"))
        either = any_of(deploys_to("docker"), kind_is("web"))
        web_docker = make_config(kind="web", deployment_target="docker")
        cli_docker = make_config(kind="cli", deployment_target="docker")
        cli_plain = make_config(kind="cli")
        assert both(web_docker) and not both(cli_docker)
        assert either(cli_docker) and not either(cli_plain)
        assert " and " in both.label and " or " in either.label


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_demo_library(self, demo_entries):
        paths = set(_paths(demo_entries))
        assert {
            "pyproject.toml",
            "README.md",
            "src/demo/__init__.py",
            "tests/__init__.py",
            "src/demo/py.typed",
            "src/demo/core.py",
        } <= paths
        assert "Dockerfile" not in paths
        assert ".pre-commit-config.yaml" not in paths
        assert "src/demo/cli.py" not in paths

    @pytest.mark.parametrize("framework", list(Framework))
    def test_every_framework_has_specific_entries(self, make_config, framework):
        config = make_config(kind="web", framework=framework.value)
        specific = [e for e in CATALOG if e.condition.label.startswith("framework") and e.applies_to(config)]
        assert specific, f"no framework-specific entry for {framework.value}"
        selected = set(_paths(entries_for(config)))
        for entry in specific:
            assert entry.bind(TemplateRenderer(), build_context(config)).relative_path in selected

    @pytest.mark.parametrize(
        ("framework", "expected"),
        [
            ("django", {"manage.py", "src/demo/settings.py", "src/demo/urls.py", "src/demo/wsgi.py", "src/demo/asgi.py"}),
            ("flask", {"src/demo/app.py", "tests/test_app.py"}),
            ("fastapi", {"src/demo/main.py", "tests/test_main.py"}),
        ],
    )
    def test_framework_files(self, make_config, framework, expected):
        paths = set(_paths(entries_for(make_config(kind="web", framework=framework))))
        assert expected <= paths
        assert "src/demo/core.py" not in paths

    def test_cli_kind(self, make_config):
        paths = set(_paths(entries_for(make_config(kind="cli"))))
        assert {"src/demo/cli.py", "src/demo/__main__.py", "tests/test_cli.py"} <= paths
        assert "src/demo/py.typed" not in paths

    def test_data_science_directories(self, make_config):
        entries = {e.relative_path: e for e in entries_for(make_config(kind="data-science"))}
        for directory in ("data/raw", "data/processed", "notebooks"):
            assert entries[directory].is_directory
        assert "notebooks/README.md" in entries
        assert "src/demo/pipeline.py" in entries

    def test_team_size_entries(self, make_config):
        solo = set(_paths(entries_for(make_config(team_size=1))))
        pair = set(_paths(entries_for(make_config(team_size=2))))
        team = set(_paths(entries_for(make_config(team_size=5))))
        assert ".pre-commit-config.yaml" not in solo
        assert {".pre-commit-config.yaml", "CONTRIBUTING.md"} <= pair
        assert ".github/CODEOWNERS" not in pair
        assert {".github/CODEOWNERS", ".github/pull_request_template.md"} <= team

    @pytest.mark.parametrize(
        ("target", "present", "absent"),
        [
            ("docker", {"Dockerfile", ".dockerignore"}, {"deploy/k8s/deployment.yaml"}),
            ("cloud", {"Dockerfile", ".github/workflows/deploy.yml"}, {"docker-compose.yml"}),
            ("k8s", {"Dockerfile", "deploy/k8s/deployment.yaml", "deploy/k8s/service.yaml"}, set()),
            ("pypi", {".github/workflows/publish.yml"}, {"Dockerfile"}),
            ("none", set(), {"Dockerfile", ".github/workflows/publish.yml"}),
        ],
    )
    def test_deployment_entries(self, make_config, target, present, absent):
        paths = set(_paths(entries_for(make_config(deployment_target=target))))
        assert present <= paths
        assert not (absent & paths)

    def test_compose_only_for_services(self, make_config):
        assert "docker-compose.yml" in _paths(entries_for(make_config(kind="api", deployment_target="docker")))
        assert "docker-compose.yml" not in _paths(entries_for(make_config(kind="library", deployment_target="docker")))


# ---------------------------------------------------------------------------
# Ordering & determinism
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_sorted_by_path_components(self, demo_entries):
        keys = [path_sort_key(p) for p in _paths(demo_entries)]
        assert keys == sorted(keys)

    def test_directory_before_contents(self, make_config):
        paths = _paths(entries_for(make_config(kind="data-science")))
        assert paths.index("notebooks") < paths.index("notebooks/README.md")

    def test_parent_entries_precede_children(self, make_config):
        paths = _paths(entries_for(make_config(kind="data-science", team_size=4)))
        for i, path in enumerate(paths):
            for parent in PurePosixPath(path).parents:
                if str(parent) in paths:
                    assert paths.index(str(parent)) < i

    def test_deterministic(self, make_config):
        config = make_config(kind="web", framework="django", team_size=4, deployment_target="k8s")
        first = entries_for(config)
        second = entries_for(config)
        assert _paths(first) == _paths(second)
        assert [e.render() for e in first if not e.is_directory] == [
            e.render() for e in second if not e.is_directory
        ]


# ---------------------------------------------------------------------------
# Binding & rendering
# ---------------------------------------------------------------------------


class TestBinding:
    def test_path_templated(self, make_config):
        config = make_config(name="My Tool")
        paths = _paths(entries_for(config))
        assert "src/my_tool/__init__.py" in paths
        assert not any("{{" in p for p in paths)

    def test_literal_content_unchanged(self):
        entry = TemplateEntry("tests/__init__.py", content="")
        bound = entry.bind(TemplateRenderer(), {})
        assert bound.render() == ""

    def test_inline_template_content(self, demo_config):
        entry = TemplateEntry("x.txt", content="name={{ package_name }}")
        bound = entry.bind(TemplateRenderer(), build_context(demo_config))
        assert bound.render() == "name=demo"

    def test_template_content_is_lazy(self):
        entry = TemplateEntry("x.txt", template="does-not-exist.j2")
        bound = entry.bind(TemplateRenderer(), {})
        assert callable(bound.content)

    def test_unbound_template_entry_cannot_render(self):
        with pytest.raises(CatalogError):
            TemplateEntry("x.txt", template="README.md.j2").render()

    def test_applies_to(self, demo_config):
        assert TemplateEntry("x", condition=kind_is("library")).applies_to(demo_config)
        assert not TemplateEntry("x", condition=kind_is("cli")).applies_to(demo_config)


class TestBuildContext:
    def test_names(self, make_config):
        ctx = build_context(make_config(name="My Tool", description="Does things"))
        assert ctx["project_name"] == "My Tool"
        assert ctx["package_name"] == "my_tool"
        assert ctx["dist_name"] == "my-tool"
        assert ctx["description"] == "Does things"

    def test_default_description(self, demo_config):
        assert build_context(demo_config)["description"] == "demo project"

    def test_ci_versions_start_at_minimum(self, make_config):
        ctx = build_context(make_config(python_version="3.11"))
        assert ctx["ci_python_versions"][0] == "3.11"
        assert "3.10" not in ctx["ci_python_versions"]

    def test_ci_versions_for_newest_release(self, make_config):
        ctx = build_context(make_config(python_version="3.14"))
        assert ctx["ci_python_versions"] == ["3.14"]

    def test_flags(self, make_config):
        ctx = build_context(make_config(kind="cli", deployment_target="k8s"))
        assert ctx["is_cli"] is True
        assert ctx["is_container"] is True
        assert ctx["is_service"] is False
