"""Materialises bound template entries as files and directories on disk.

The emitter is the only component that writes.  It never overwrites: an
existing destination is recorded as skipped and left untouched, so running
the same scaffold twice is safe and an interrupted run can simply be
repeated.  A failure on one entry is recorded and the run moves on; only a
target root that cannot hold a project at all aborts before any write.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from jinja2 import TemplateError
from rich.console import Console

from repo_scaffold.errors import PreconditionFailure, WriteFailure
from repo_scaffold.utils import console as default_console

from .catalog import TemplateEntry


@dataclass
class EmissionResult:
    """Outcome of one emission run.

    ``created`` and ``skipped`` hold relative paths in emission order;
    ``failed`` maps a relative path to the reason it could not be written.
    """

    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def exit_code(self) -> int:
        """Process exit status for this result: 0 if nothing failed, else 1."""
        return 0 if self.ok else 1

    def summary(self) -> str:
        """Return a human-readable summary of the run."""
        verb = "Would create" if self.dry_run else "Created"
        lines = [
            f"{verb}: {len(self.created)}",
            f"Skipped (already present): {len(self.skipped)}",
            f"Failed: {len(self.failed)}",
        ]
        for path, reason in list(self.failed.items())[:5]:
            lines.append(f"  - {path}: {reason}")
        return "\n".join(lines)

    def as_dict(self) -> dict[str, object]:
        return {
            "created": list(self.created),
            "skipped": list(self.skipped),
            "failed": dict(self.failed),
            "dry_run": self.dry_run,
        }


class TreeEmitter:
    """Writes entries under a target root, skipping anything that exists.

    Args:
        dry_run: Check preconditions and report what would happen without
            touching the filesystem.
        verbose: Print one line per entry.
        console: Rich console used for verbose output.
    """

    def __init__(
        self,
        dry_run: bool = False,
        verbose: bool = False,
        console: Console | None = None,
    ) -> None:
        self.dry_run = dry_run
        self.verbose = verbose
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    def emit(self, entries: Iterable[TemplateEntry], target_root: str | Path) -> EmissionResult:
        """Materialise *entries* under *target_root*.

        Raises:
            PreconditionFailure: If *target_root* is not a usable directory.
                Raised before anything is written.
        """
        root = self._prepare_root(Path(target_root))
        result = EmissionResult(dry_run=self.dry_run)

        for entry in entries:
            rel = entry.relative_path
            try:
                destination = _resolve_destination(root, rel)
                if destination.exists() or destination.is_symlink():
                    result.skipped.append(rel)
                    self._report("skip", rel, "yellow")
                    continue
                if not self.dry_run:
                    self._write(entry, destination)
            except WriteFailure as exc:
                result.failed[rel] = exc.reason
                self._report("fail", f"{rel}: {exc.reason}", "red")
                continue
            result.created.append(rel)
            self._report("create", rel, "green")

        return result

    # -- Preconditions -----------------------------------------------------

    def _prepare_root(self, root: Path) -> Path:
        if root.exists():
            if not root.is_dir():
                raise PreconditionFailure(root, "target exists and is not a directory")
            if not os.access(root, os.W_OK | os.X_OK):
                raise PreconditionFailure(root, "target directory is not writable")
            return root

        ancestor = root.parent
        while not ancestor.exists() and ancestor != ancestor.parent:
            ancestor = ancestor.parent
        if not ancestor.is_dir():
            raise PreconditionFailure(root, f"parent {ancestor} is not a directory")
        if not os.access(ancestor, os.W_OK | os.X_OK):
            raise PreconditionFailure(root, f"parent {ancestor} is not writable")

        if not self.dry_run:
            try:
                root.mkdir(parents=True)
            except OSError as exc:
                raise PreconditionFailure(root, exc.strerror or str(exc)) from exc
        return root

    # -- Writing -----------------------------------------------------------

    def _write(self, entry: TemplateEntry, destination: Path) -> None:
        rel = entry.relative_path
        content = None if entry.is_directory else _render(entry)
        try:
            if entry.is_directory:
                destination.mkdir(parents=True)
                return

            destination.parent.mkdir(parents=True, exist_ok=True)
            # Exclusive create: never clobber a file that appeared meanwhile.
            with destination.open("x", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
            if entry.executable:
                mode = destination.stat().st_mode
                destination.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as exc:
            raise WriteFailure(rel, exc.strerror or str(exc)) from exc

    def _report(self, action: str, text: str, color: str) -> None:
        if self.verbose:
            label = f"would {action}" if self.dry_run and action == "create" else action
            self.console.print(f"  [{color}]{label:>12}[/{color}]  {text}", highlight=False)


def _render(entry: TemplateEntry) -> str:
    """Produce the entry's body; any failure becomes a ``WriteFailure``."""
    rel = entry.relative_path
    try:
        return entry.render()
    except TemplateError as exc:
        raise WriteFailure(rel, f"template error: {exc}") from exc
    except OSError as exc:
        raise WriteFailure(rel, exc.strerror or str(exc)) from exc
    except Exception as exc:
        raise WriteFailure(rel, f"cannot render content: {type(exc).__name__}: {exc}") from exc


def _resolve_destination(root: Path, relative_path: str) -> Path:
    rel = PurePosixPath(relative_path)
    if not relative_path or rel.is_absolute() or ".." in rel.parts:
        raise WriteFailure(relative_path, "path escapes the target root")
    return root.joinpath(*rel.parts)
