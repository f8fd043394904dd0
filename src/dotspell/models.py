"""Shared models and enums for dotspell."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileState(str, Enum):
    """Reconciliation state of a package file against the target root."""

    ABSENT = "ABSENT"
    PRESENT = "PRESENT"
    MISMATCH = "MISMATCH"


@dataclass(frozen=True, slots=True)
class PackageFile:
    """A file discovered inside a package.

    ``path`` is relative to the package directory and always uses ``/``.
    """

    path: str
    fingerprint: str
    state: FileState


@dataclass(slots=True)
class Package:
    """A named directory of files under the source root."""

    name: str
    files: list[PackageFile] = field(default_factory=list)

    def add_file(self, package_file: PackageFile) -> list[PackageFile]:
        self.files.append(package_file)
        return self.files


class FileAction(str, Enum):
    """Outcome of an operation for a single file."""

    INSTALLED = "installed"
    OVERWRITTEN = "overwritten"
    REMOVED = "removed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result emitted for every file an operation visits."""

    package: str
    path: str
    state: FileState
    action: FileAction
    target: Path


@dataclass(frozen=True, slots=True)
class PeerReport:
    """Read-only view of the reconciliation model."""

    packages: tuple[Package, ...]

    def counts(self) -> dict[FileState, int]:
        tally = Counter(item.state for package in self.packages for item in package.files)
        return {state: tally.get(state, 0) for state in FileState}
