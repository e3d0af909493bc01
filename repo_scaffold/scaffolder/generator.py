"""Main scaffolding orchestrator.

Takes a validated ``ProjectConfig``, selects the catalogue entries that apply
to it and hands them to the ``TreeEmitter``.  The whole run is one
synchronous pass: validate, select, emit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console

from repo_scaffold.config import Settings
from repo_scaffold.intake.models import ProjectConfig

from .catalog import TemplateEntry, build_context, entries_for
from .emitter import EmissionResult, TreeEmitter
from .templates import TemplateRenderer


class ProjectGenerator:
    """Generates a project tree for a single ``ProjectConfig``.

    Example::

        config = validate_config({"name": "demo"})
        result = ProjectGenerator(config).generate("./demo")
        result.created  # ["pyproject.toml", "README.md", ...]
    """

    def __init__(self, config: ProjectConfig, settings: Settings | None = None) -> None:
        self.config = config
        self.settings = settings or Settings()
        self.renderer = TemplateRenderer(self.settings.template_dir)

    # -- Public API --------------------------------------------------------

    def context(self) -> dict[str, Any]:
        """The Jinja2 context every template is rendered with."""
        return build_context(self.config, self.settings)

    def plan(self) -> list[TemplateEntry]:
        """Return the ordered, bound entries this project consists of."""
        return entries_for(self.config, self.renderer, self.context())

    def generate(
        self,
        target_root: str | Path,
        *,
        dry_run: bool = False,
        verbose: bool = False,
        console: Console | None = None,
    ) -> EmissionResult:
        """Materialise the project under *target_root*.

        Existing files are never modified.  See ``TreeEmitter.emit`` for the
        failure semantics.
        """
        emitter = TreeEmitter(dry_run=dry_run, verbose=verbose, console=console)
        return emitter.emit(self.plan(), target_root)

    def default_target(self) -> Path:
        """Where the project goes when no explicit target is given."""
        return self.settings.output_dir / self.config.dist_name
