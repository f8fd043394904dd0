"""Settings resolution for dotspell."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DotspellError

DEFAULT_CONFIG_FILENAME = "dotspell.toml"
DEFAULT_SOURCE_DIRECTORY = "dotfiles"


class ConfigError(DotspellError):
    """Raised when settings cannot be loaded or resolved."""


def _expand_path(raw: str | os.PathLike[str] | Path, *, base_dir: Path) -> Path:
    """Return an absolute ``Path`` by expanding env vars and user segments."""

    text = str(raw)
    expanded = Path(os.path.expandvars(text)).expanduser()
    if expanded.is_absolute():
        return expanded.resolve(strict=False)
    return (base_dir / expanded).resolve(strict=False)


def home_directory() -> Path:
    """Return the current user's home directory."""

    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Error determining home directory: {exc}") from exc


class FileSettings(BaseModel):
    """The ``[settings]`` table of a ``dotspell.toml`` file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str | None = None
    target: str | None = None


class Settings(BaseModel):
    """Resolved source and target roots for a single invocation."""

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path
    config_path: Path | None = None


def load_settings(
    source: Path | str | None = None,
    target: Path | str | None = None,
    config: Path | None = None,
    *,
    cwd: Path | None = None,
) -> Settings:
    """Resolve settings from flags, an optional config file, and defaults.

    Flags win over the config file, which wins over the defaults of
    ``./dotfiles`` for the source and the home directory for the target.
    """

    cwd = (cwd or Path.cwd()).resolve(strict=False)
    config_path = _resolve_config_path(config, cwd)
    file_settings = _read_config(config_path) if config_path is not None else FileSettings()
    config_dir = config_path.parent if config_path is not None else cwd

    if source is not None:
        resolved_source = _expand_path(source, base_dir=cwd)
    elif file_settings.source is not None:
        resolved_source = _expand_path(file_settings.source, base_dir=config_dir)
    else:
        resolved_source = cwd / DEFAULT_SOURCE_DIRECTORY

    if target is not None:
        resolved_target = _expand_path(target, base_dir=cwd)
    elif file_settings.target is not None:
        resolved_target = _expand_path(file_settings.target, base_dir=config_dir)
    else:
        resolved_target = home_directory()

    return Settings(source=resolved_source, target=resolved_target, config_path=config_path)


def _resolve_config_path(path: Path | None, cwd: Path) -> Path | None:
    if path is None:
        candidate = cwd / DEFAULT_CONFIG_FILENAME
        return candidate if candidate.is_file() else None

    path = _expand_path(path, base_dir=cwd)
    if not path.exists():
        raise ConfigError(f"Configuration file '{path}' does not exist")
    if path.is_dir():
        candidate = path / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            raise ConfigError(f"Expected to find '{DEFAULT_CONFIG_FILENAME}' inside '{path}', but none was located")
        path = candidate
    return path


def _read_config(path: Path) -> FileSettings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Error reading configuration file '{path}': {exc}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Configuration file '{path}' is not valid TOML: {exc}") from exc

    raw = data.get("settings") or {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Configuration file '{path}' must define [settings] as a table")
    return _parse_settings(raw, path)


def _parse_settings(raw: Mapping[str, Any], path: Path) -> FileSettings:
    try:
        return FileSettings.model_validate(dict(raw))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"Invalid [settings] in '{path}': {problems}") from exc
