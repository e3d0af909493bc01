"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``repo_scaffold/scaffolder/templates/`` directory and renders them with
project-specific context data.  A user-supplied directory can shadow any of
the packaged templates by providing a file with the same relative name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from repo_scaffold.utils import pascal_case, python_slugify, slugify


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under the packaged template
    directory, optionally shadowed by *override_dir*.  Undefined context
    variables raise instead of rendering as empty strings, so a broken
    template surfaces as a failed entry rather than a silently wrong file.
    """

    def __init__(self, override_dir: str | Path | None = None) -> None:
        self.template_dir = _DEFAULT_TEMPLATE_DIR
        self.override_dir = Path(override_dir) if override_dir is not None else None

        search_dirs = [self.template_dir]
        if self.override_dir is not None:
            search_dirs.insert(0, self.override_dir)

        self.env = Environment(
            loader=ChoiceLoader([FileSystemLoader(str(d)) for d in search_dirs]),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["slugify"] = slugify
        self.env.filters["snake_case"] = python_slugify
        self.env.filters["pascal_case"] = pascal_case

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"pyproject.toml.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Used for templated relative paths and short inline file bodies.
        """
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template names under *prefix*."""
        return sorted(
            name
            for name in self.env.list_templates(extensions=["j2"])
            if name.startswith(prefix)
        )
