"""repo-scaffold -- scaffolds the repository structure of new Python projects.

Quick usage::

    from repo_scaffold import ProjectGenerator, validate_config

    config = validate_config({
        "name": "demo",
        "kind": "library",
        "language-version": "3.11",
        "framework": "none",
        "team-size": 1,
        "deployment-target": "none",
    })
    result = ProjectGenerator(config).generate("./demo")
    result.created  # [".editorconfig", ".github/workflows/ci.yml", ...]
"""

__version__ = "0.1.0"

from repo_scaffold.errors import (
    InvalidConfig,
    PreconditionFailure,
    ScaffoldError,
    WriteFailure,
)
from repo_scaffold.intake import ProjectConfig, validate_config
from repo_scaffold.scaffolder import EmissionResult, ProjectGenerator, TreeEmitter, entries_for

__all__ = [
    "EmissionResult",
    "InvalidConfig",
    "PreconditionFailure",
    "ProjectConfig",
    "ProjectGenerator",
    "ScaffoldError",
    "TreeEmitter",
    "WriteFailure",
    "__version__",
    "entries_for",
    "validate_config",
]
