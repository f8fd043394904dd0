"""Exception types raised by dotspell."""

from __future__ import annotations

from pathlib import Path


class DotspellError(RuntimeError):
    """Raised when dotspell encounters an unrecoverable state."""


class FileAccessError(DotspellError):
    """Raised when reading, writing, deleting or stat-ing a path fails."""

    def __init__(self, action: str, path: Path, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Error {action} {path}: {reason}")

    @property
    def permission_denied(self) -> bool:
        return isinstance(self.cause, PermissionError)


class DiscoveryError(DotspellError):
    """Raised when the source root or a package cannot be enumerated."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Error reading directory {path}: {reason}")
