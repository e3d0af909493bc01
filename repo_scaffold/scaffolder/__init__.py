"""repo-scaffold scaffolder -- turns a ``ProjectConfig`` into a project tree.

Quick usage::

    from repo_scaffold.intake import validate_config
    from repo_scaffold.scaffolder import ProjectGenerator

    config = validate_config({"name": "demo", "kind": "library"})
    result = ProjectGenerator(config).generate("/tmp/demo")
    assert result.ok
"""

from repo_scaffold.scaffolder.catalog import CATALOG, TemplateEntry, build_context, entries_for
from repo_scaffold.scaffolder.emitter import EmissionResult, TreeEmitter
from repo_scaffold.scaffolder.generator import ProjectGenerator
from repo_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "CATALOG",
    "EmissionResult",
    "ProjectGenerator",
    "TemplateEntry",
    "TemplateRenderer",
    "TreeEmitter",
    "build_context",
    "entries_for",
]
