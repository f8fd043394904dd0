"""Core package for the dotspell project."""

from .cli import app, run
from .config import ConfigError, Settings, load_settings
from .errors import DiscoveryError, DotspellError, FileAccessError
from .filesystem import fingerprint
from .manager import ReconcileManager, classify
from .models import (
    ActionResult,
    FileAction,
    FileState,
    Package,
    PackageFile,
    PeerReport,
)

__all__ = [
    "Settings",
    "load_settings",
    "ConfigError",
    "DotspellError",
    "DiscoveryError",
    "FileAccessError",
    "ReconcileManager",
    "classify",
    "fingerprint",
    "ActionResult",
    "FileAction",
    "FileState",
    "Package",
    "PackageFile",
    "PeerReport",
    "app",
    "run",
]
