"""Command-line entry point for repo-scaffold.

Usage::

    repo-scaffold new --name demo --kind library
    repo-scaffold new --config project.yaml --output ./demo --dry-run
    repo-scaffold new --interactive
    repo-scaffold options
    repo-scaffold recommend --name demo --framework fastapi --team-size 4

Exit codes: 0 on success, 1 when some entries failed to write, 2 when the
configuration or the target directory is invalid.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.table import Table

from repo_scaffold import __version__
from repo_scaffold.advisor import recommend_tooling, recommendations_table
from repo_scaffold.config import Settings
from repo_scaffold.errors import InvalidConfig, PreconditionFailure
from repo_scaffold.intake import (
    ProjectConfig,
    describe_options,
    prompt_for_config,
    read_config_file,
    validate_config,
)
from repo_scaffold.scaffolder import EmissionResult, ProjectGenerator
from repo_scaffold.utils import console, print_error, print_success, print_summary_table, print_warning

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_INVALID = 2

# argparse dest -> ProjectConfig field
_CONFIG_FLAGS: dict[str, str] = {
    "name": "name",
    "kind": "kind",
    "python": "python_version",
    "framework": "framework",
    "team_size": "team_size",
    "deploy": "deployment_target",
    "description": "description",
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _config_arguments() -> argparse.ArgumentParser:
    """Parent parser carrying the project options shared by subcommands.

    Choices are validated by ``validate_config`` rather than argparse so that
    every entry path reports errors the same way.
    """
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("project options")
    group.add_argument("--name", help="Project name")
    group.add_argument("--kind", help="library, cli, web, data-science or api")
    group.add_argument("--python", "--language-version", "--python-version", dest="python", help="Minimum Python version, e.g. 3.12")
    group.add_argument("--framework", help="none, django, flask or fastapi")
    group.add_argument("--team-size", type=int, dest="team_size", help="Number of developers")
    group.add_argument("--deploy", "--deployment-target", dest="deploy", help="none, docker, cloud, pypi or k8s")
    group.add_argument("--description", help="One-line project description")
    group.add_argument("--config", "-c", type=Path, help="JSON or YAML file with project options")
    group.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Prompt for options not given on the command line",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-scaffold",
        description="Scaffold the repository structure of a new Python project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  repo-scaffold new --name demo\n"
            "  repo-scaffold new --name shop --kind web --framework django --deploy k8s\n"
            "  repo-scaffold new --config project.yaml --output ./shop --dry-run\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    config_args = _config_arguments()

    new = subparsers.add_parser("new", parents=[config_args], help="Create a new project tree")
    new.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Project root to write into (default: <output_dir>/<dist-name>)",
    )
    new.add_argument("--dry-run", action="store_true", help="Show what would be created without writing")
    new.add_argument("--quiet", "-q", action="store_true", help="Only print the final summary")

    subparsers.add_parser("options", help="List the recognised project options")
    subparsers.add_parser("recommend", parents=[config_args], help="Print tooling recommendations")
    return parser


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------


def resolve_config(args: argparse.Namespace, settings: Settings) -> ProjectConfig:
    """Combine file, flag and interactive input into a validated config.

    Flags override values from ``--config``; ``--interactive`` offers the
    combined values as defaults.
    """
    raw: dict[str, Any] = {}
    if args.config is not None:
        raw.update(read_config_file(args.config))
    for dest, field in _CONFIG_FLAGS.items():
        value = getattr(args, dest, None)
        if value is not None:
            raw[field] = value
    raw.setdefault("python_version", settings.default_python_version)

    if args.interactive:
        return prompt_for_config(raw, console=console)
    return validate_config(raw)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _report_invalid(exc: InvalidConfig) -> None:
    print_error("Invalid project configuration:")
    for err in exc.errors:
        console.print(f"  [red]-[/red] {err.field}: {err.reason}", highlight=False)


def _print_config(config: ProjectConfig, target: Path) -> None:
    print_summary_table(
        {
            "Name": config.name,
            "Package": config.package_name,
            "Kind": config.kind.value,
            "Python": config.python_version,
            "Framework": config.framework.value,
            "Team size": config.team_size,
            "Deployment": config.deployment_target.value,
            "Target": str(target),
        },
        title="Project",
    )


def _print_result(result: EmissionResult) -> None:
    verb = "Would create" if result.dry_run else "Created"
    print_summary_table(
        {
            verb: len(result.created),
            "Skipped (already present)": len(result.skipped),
            "Failed": len(result.failed),
        },
        title="Scaffold result",
    )
    for path, reason in result.failed.items():
        print_error(f"failed: {path}: {reason}")
    if result.ok:
        print_success("Dry run complete." if result.dry_run else "Project scaffolded.")
    else:
        print_warning("Some entries could not be written; fix the cause and re-run to fill them in.")


def cmd_new(args: argparse.Namespace, settings: Settings) -> int:
    try:
        config = resolve_config(args, settings)
    except InvalidConfig as exc:
        _report_invalid(exc)
        return EXIT_INVALID

    generator = ProjectGenerator(config, settings)
    target = args.output if args.output is not None else generator.default_target()
    if not args.quiet:
        _print_config(config, target)

    try:
        result = generator.generate(target, dry_run=args.dry_run, verbose=not args.quiet)
    except PreconditionFailure as exc:
        print_error(str(exc))
        return EXIT_INVALID

    _print_result(result)
    if not args.quiet:
        console.print(recommendations_table(recommend_tooling(config)))
    return EXIT_OK if result.ok else EXIT_PARTIAL


def cmd_options(args: argparse.Namespace, settings: Settings) -> int:
    table = Table(title="Project options", show_header=True, header_style="bold cyan")
    table.add_column("Option", style="bold", no_wrap=True)
    table.add_column("Flag", style="dim")
    table.add_column("Choices")
    table.add_column("Default")
    table.add_column("Description")
    for option in describe_options():
        choices = ", ".join(option.choices) if option.choices else "-"
        default = "-" if option.default in (None, "") else str(option.default)
        table.add_row(option.name, option.flag, choices, default, option.help)
    console.print(table)
    return EXIT_OK


def cmd_recommend(args: argparse.Namespace, settings: Settings) -> int:
    try:
        config = resolve_config(args, settings)
    except InvalidConfig as exc:
        _report_invalid(exc)
        return EXIT_INVALID
    console.print(recommendations_table(recommend_tooling(config), title=f"Recommended tooling for {config.name}"))
    return EXIT_OK


_COMMANDS = {
    "new": cmd_new,
    "options": cmd_options,
    "recommend": cmd_recommend,
}


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``repo-scaffold`` and ``python -m repo_scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        print_error(f"Invalid SCAFFOLD_* environment settings: {exc}")
        return EXIT_INVALID
    return _COMMANDS[args.command](args, settings)
