"""High level orchestration for dotspell operations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from .config import Settings
from .discovery import list_files, list_packages
from .errors import DotspellError, FileAccessError
from .filesystem import copy_file, fingerprint_file, remove_file, target_exists, target_path
from .models import ActionResult, FileAction, FileState, Package, PackageFile, PeerReport

logger = logging.getLogger(__name__)

PackageCallback = Callable[[Package], None]


def classify(relative_path: str, source_fingerprint: str, target_root: Path) -> FileState:
    """Compare a source fingerprint with the file at ``target_root / relative_path``.

    Raises:
        FileAccessError: the target exists but could not be read.
    """

    target = target_path(target_root, relative_path)
    if not target_exists(target):
        return FileState.ABSENT
    if fingerprint_file(target) != source_fingerprint:
        return FileState.MISMATCH
    return FileState.PRESENT


class ReconcileManager:
    """Builds the reconciliation model and runs operations against it.

    Every operation is fail-fast and non-atomic: files handled before an
    error stay changed.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def scan(self) -> list[Package]:
        """Discover packages and classify each of their files against the target."""

        packages = list_packages(self.settings.source)
        for package in packages:
            package_root = self._package_root(package)
            for relative in list_files(package_root):
                digest = fingerprint_file(target_path(package_root, relative))
                try:
                    state = classify(relative, digest, self.settings.target)
                except FileAccessError as exc:
                    reason = exc.cause.strerror or exc.cause
                    raise DotspellError(
                        f'Error determining current state of file {relative} in package "{package.name}": {reason}'
                    ) from exc
                logger.debug("%s/%s is %s", package.name, relative, state.value)
                package.add_file(PackageFile(path=relative, fingerprint=digest, state=state))
        return packages

    def conjure(self, packages: Iterable[Package], *, on_package: PackageCallback | None = None) -> list[ActionResult]:
        """Copy every absent or mismatched file into the target root."""

        results: list[ActionResult] = []
        for package in packages:
            if on_package is not None:
                on_package(package)
            for item in package.files:
                target = target_path(self.settings.target, item.path)
                if item.state is FileState.PRESENT:
                    results.append(self._result(package, item, FileAction.SKIPPED, target))
                    continue
                copy_file(target_path(self._package_root(package), item.path), target)
                action = FileAction.INSTALLED if item.state is FileState.ABSENT else FileAction.OVERWRITTEN
                results.append(self._result(package, item, action, target))
        return results

    def expel(self, packages: Iterable[Package], *, on_package: PackageCallback | None = None) -> list[ActionResult]:
        """Delete every target file that exactly matches its source."""

        results: list[ActionResult] = []
        for package in packages:
            if on_package is not None:
                on_package(package)
            for item in package.files:
                target = target_path(self.settings.target, item.path)
                if item.state is not FileState.PRESENT:
                    results.append(self._result(package, item, FileAction.SKIPPED, target))
                    continue
                remove_file(target)
                results.append(self._result(package, item, FileAction.REMOVED, target))
        return results

    def peer(self, packages: Iterable[Package]) -> PeerReport:
        return PeerReport(packages=tuple(packages))

    # ------------------------------------------------------------------
    # Internal helpers

    def _package_root(self, package: Package) -> Path:
        return self.settings.source / package.name

    @staticmethod
    def _result(package: Package, item: PackageFile, action: FileAction, target: Path) -> ActionResult:
        return ActionResult(package=package.name, path=item.path, state=item.state, action=action, target=target)
