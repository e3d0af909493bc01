"""Configuration intake: presents, collects and validates project options.

Three sources feed a ``ProjectConfig``: a plain mapping (library callers and
CLI flags), a JSON/YAML file, and an interactive Rich prompt session.  All of
them end in :func:`validate_config`, which converts Pydantic validation
errors into a structured :class:`~repo_scaffold.errors.InvalidConfig`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from repo_scaffold.errors import MISSING, FieldError, InvalidConfig

from .models import (
    DEFAULT_PYTHON_VERSION,
    SUPPORTED_PYTHON_VERSIONS,
    DeploymentTarget,
    Framework,
    ProjectConfig,
    ProjectKind,
)


# ---------------------------------------------------------------------------
# Option catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConfigOption:
    """One recognised configuration option."""

    name: str
    help: str
    choices: tuple[str, ...] = ()
    default: Any = None

    @property
    def flag(self) -> str:
        """Command-line spelling of the option."""
        return "--" + self.name.replace("_", "-")


_OPTIONS: tuple[ConfigOption, ...] = (
    ConfigOption("name", "Project name; also used for the package and distribution names"),
    ConfigOption(
        "kind",
        "Project type",
        tuple(k.value for k in ProjectKind),
        ProjectKind.LIBRARY.value,
    ),
    ConfigOption(
        "python_version",
        "Minimum supported Python version",
        SUPPORTED_PYTHON_VERSIONS,
        DEFAULT_PYTHON_VERSION,
    ),
    ConfigOption(
        "framework",
        "Web framework",
        tuple(f.value for f in Framework),
        Framework.NONE.value,
    ),
    ConfigOption("team_size", "Number of developers working on the project", (), 1),
    ConfigOption(
        "deployment_target",
        "Deployment or publishing target",
        tuple(d.value for d in DeploymentTarget),
        DeploymentTarget.NONE.value,
    ),
    ConfigOption("description", "One-line project description", (), ""),
)

# Alternative spellings accepted for option keys (after '-' -> '_').
_KEY_ALIASES: dict[str, str] = {
    "language_version": "python_version",
    "python": "python_version",
    "deploy": "deployment_target",
    "deployment": "deployment_target",
}

# Pydantic reports aliased fields by alias; errors use the field name.
_FIELD_BY_ALIAS: dict[str, str] = {
    info.alias: name for name, info in ProjectConfig.model_fields.items() if info.alias
}


def describe_options() -> list[ConfigOption]:
    """Return the recognised configuration options in presentation order."""
    return list(_OPTIONS)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _normalise_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    normalised: dict[str, Any] = {}
    for key, value in raw.items():
        canonical = str(key).strip().replace("-", "_")
        canonical = _KEY_ALIASES.get(canonical, canonical)
        normalised[canonical] = value
    return normalised


def validate_config(raw: Mapping[str, Any]) -> ProjectConfig:
    """Validate *raw* option values and return a ``ProjectConfig``.

    Keys may use either underscore or hyphen spelling (``team_size`` or
    ``team-size``); ``language-version`` is accepted for ``python_version``.

    Raises:
        InvalidConfig: If any field is missing, unknown, or outside its domain.
    """
    if not isinstance(raw, Mapping):
        raise InvalidConfig(
            [FieldError("config", raw, "configuration must be a mapping of option names to values")]
        )

    try:
        return ProjectConfig.model_validate(_normalise_keys(raw))
    except ValidationError as exc:
        errors = []
        for err in exc.errors():
            loc = [_FIELD_BY_ALIAS.get(str(part), str(part)) for part in err["loc"]]
            field = ".".join(loc) or "config"
            value = MISSING if err["type"] == "missing" else err.get("input")
            reason = err["msg"].removeprefix("Value error, ")
            errors.append(FieldError(field, value, reason))
        raise InvalidConfig(errors) from exc


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON or YAML configuration file into a raw option mapping.

    Files ending in ``.yml``/``.yaml`` are parsed with PyYAML; everything
    else is treated as JSON.  Keys are normalised to field names but values
    are not validated, so the mapping can be completed (e.g. by CLI flags)
    before :func:`validate_config` runs.

    Raises:
        InvalidConfig: If the file is unreadable, malformed, or not a mapping.
    """
    file_path = Path(path)
    try:
        raw_text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfig([FieldError("config_file", str(file_path), exc.strerror or str(exc))]) from exc

    try:
        if file_path.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(raw_text)
        else:
            data = json.loads(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InvalidConfig([FieldError("config_file", str(file_path), f"cannot parse: {exc}")]) from exc

    if not isinstance(data, dict):
        raise InvalidConfig(
            [FieldError("config_file", str(file_path), "top-level value must be a mapping")]
        )
    return _normalise_keys(data)


def load_config_file(path: str | Path) -> ProjectConfig:
    """Read a JSON or YAML configuration file and validate it.

    Raises:
        InvalidConfig: If the file is unreadable, malformed, or fails validation.
    """
    return validate_config(read_config_file(path))


# ---------------------------------------------------------------------------
# Interactive intake
# ---------------------------------------------------------------------------


def prompt_for_config(
    defaults: Mapping[str, Any] | None = None,
    console: Console | None = None,
) -> ProjectConfig:
    """Ask for each option interactively and validate the answers.

    Values present in *defaults* become the suggested answers.  Enumerated
    options only accept one of their choices; the collected answers are then
    validated as a whole, so a bad name still raises ``InvalidConfig``.
    """
    console = console or Console()
    seeded = _normalise_keys(defaults or {})
    answers: dict[str, Any] = {}

    console.print("[bold cyan]Describe the project to scaffold[/bold cyan]")
    for option in _OPTIONS:
        default = seeded.get(option.name, option.default)
        if option.name == "team_size":
            answers[option.name] = IntPrompt.ask(
                option.help, default=int(default), console=console
            )
        elif option.choices:
            answers[option.name] = Prompt.ask(
                option.help,
                choices=list(option.choices),
                default=str(default),
                console=console,
            )
        else:
            answers[option.name] = Prompt.ask(
                option.help,
                default=str(default) if default else None,
                console=console,
            )

    return validate_config({k: v for k, v in answers.items() if v is not None})
