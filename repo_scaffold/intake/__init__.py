"""Configuration intake -- collects and validates project options.

Quick usage::

    from repo_scaffold.intake import validate_config

    config = validate_config({"name": "demo", "kind": "library"})
    config.package_name  # "demo"
"""

from repo_scaffold.intake.intake import (
    ConfigOption,
    describe_options,
    load_config_file,
    prompt_for_config,
    read_config_file,
    validate_config,
)
from repo_scaffold.intake.models import (
    DEFAULT_PYTHON_VERSION,
    SUPPORTED_PYTHON_VERSIONS,
    DeploymentTarget,
    Framework,
    ProjectConfig,
    ProjectKind,
)

__all__ = [
    "DEFAULT_PYTHON_VERSION",
    "SUPPORTED_PYTHON_VERSIONS",
    "ConfigOption",
    "DeploymentTarget",
    "Framework",
    "ProjectConfig",
    "ProjectKind",
    "describe_options",
    "load_config_file",
    "prompt_for_config",
    "read_config_file",
    "validate_config",
]
