"""Exception hierarchy for repo-scaffold.

Every failure the scaffolder reports is structured: it carries a kind (the
exception class), the path or field it concerns, and a human-readable reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


class _Missing:
    """Placeholder value for a field that was not supplied at all."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class ScaffoldError(Exception):
    """Base class for all scaffolding errors."""


@dataclass(frozen=True)
class FieldError:
    """A single rejected configuration value.

    ``value`` is :data:`MISSING` when the field was not supplied at all.
    """

    field: str
    value: Any
    reason: str

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}: {self.reason}"


class InvalidConfig(ScaffoldError):
    """Raised when a project configuration fails validation.

    Nothing has been written when this is raised.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        detail = "; ".join(str(e) for e in self.errors) or "invalid configuration"
        super().__init__(f"Invalid project configuration: {detail}")

    @property
    def fields(self) -> list[str]:
        """Names of the rejected fields, in report order."""
        return [e.field for e in self.errors]


class PreconditionFailure(ScaffoldError):
    """Raised when the target root cannot receive a project tree."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot scaffold into {self.path}: {reason}")


class WriteFailure(ScaffoldError):
    """A single entry could not be materialised.

    Raised per entry inside the emitter and recorded in
    ``EmissionResult.failed``; it never escapes ``TreeEmitter.emit``.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class CatalogError(ScaffoldError):
    """Raised when the static template catalog is malformed."""
