"""Filesystem helpers for dotspell."""

from __future__ import annotations

import logging
import shutil
from hashlib import md5
from pathlib import Path, PurePosixPath

from .errors import FileAccessError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def fingerprint(content: bytes) -> str:
    """Return the lowercase hex MD5 digest of ``content``."""

    return md5(content, usedforsecurity=False).hexdigest()


def fingerprint_file(path: Path) -> str:
    """Return the same digest as :func:`fingerprint` for the bytes of ``path``."""

    hasher = md5(usedforsecurity=False)
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as exc:
        raise FileAccessError("reading", path, exc) from exc
    return hasher.hexdigest()


def target_path(root: Path, relative_path: str) -> Path:
    """Join a ``/`` separated package path onto ``root``."""

    return root.joinpath(*PurePosixPath(relative_path).parts)


def target_exists(path: Path) -> bool:
    """Return ``False`` only when ``path`` is reported as not found.

    Other stat failures count as existing so the caller's read surfaces them.
    """

    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("Could not stat '%s' (%s); treating it as present", path, exc)
    return True


def ensure_parent(path: Path) -> None:
    """Ensure the parent directory exists."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileAccessError("creating directory", path.parent, exc) from exc


def copy_file(source: Path, destination: Path) -> None:
    """Copy the bytes of ``source`` over ``destination``, creating parents."""

    ensure_parent(destination)
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        failed = Path(exc.filename) if exc.filename else destination
        raise FileAccessError("copying", failed, exc) from exc
    logger.debug("Copied '%s' to '%s'", source, destination)


def remove_file(path: Path) -> None:
    """Delete the file at ``path``."""

    try:
        path.unlink()
    except OSError as exc:
        raise FileAccessError("removing", path, exc) from exc
    logger.debug("Removed '%s'", path)
