"""Package discovery under a source root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from .errors import DiscoveryError
from .models import Package

logger = logging.getLogger(__name__)


def list_packages(source_root: Path) -> list[Package]:
    """Return one empty ``Package`` per directory directly under ``source_root``."""

    try:
        with os.scandir(source_root) as entries:
            names = sorted(entry.name for entry in entries if entry.is_dir(follow_symlinks=False))
    except OSError as exc:
        raise DiscoveryError(source_root, exc) from exc

    logger.debug("Discovered %d package(s) in '%s'", len(names), source_root)
    return [Package(name=name) for name in names]


def list_files(package_root: Path) -> list[str]:
    """Return every file below ``package_root`` as a ``/`` separated relative path.

    Entries are walked depth first in lexical order, so a directory's files
    appear where the directory name sorts among its siblings.
    """

    return list(_walk(package_root, ""))


def _walk(directory: Path, prefix: str) -> Iterator[str]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        raise DiscoveryError(directory, exc) from exc

    for entry in entries:
        relative = f"{prefix}{entry.name}"
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise DiscoveryError(Path(entry.path), exc) from exc
        if is_dir:
            yield from _walk(Path(entry.path), f"{relative}/")
        else:
            yield relative
