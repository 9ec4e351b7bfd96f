# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings describing where offline data and report plugins are found."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

APPLICATION_HOME_ENV: Final[str] = "APIPORT_HOME"
EMOJI_ENV: Final[str] = "APIPORT_EMOJI"
COLOR_ENV: Final[str] = "APIPORT_COLOR"

DEFAULT_RESOURCE_PACKAGE: Final[str] = "apiport.data"
DEFAULT_PLUGIN_PREFIX: Final[str] = "apiport_report_"
DEFAULT_PLUGIN_EXTENSION: Final[str] = ".py"
DEFAULT_COMPANION_SUFFIX: Final[str] = "_views"

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def default_application_directory(environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory treated as the running program's home.

    ``APIPORT_HOME`` wins when set. Otherwise the directory holding the
    launched script is used, falling back to the current working directory
    for interactive sessions.

    Args:
        environ: Optional environment mapping; defaults to ``os.environ``.

    Returns:
        Path: Absolute application directory.
    """

    env = os.environ if environ is None else environ
    override = env.get(APPLICATION_HOME_ENV)
    if override:
        return Path(override).expanduser().resolve()
    script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if script is not None and script.is_file():
        return script.resolve().parent
    return Path.cwd()


class OfflineSettings(BaseModel):
    """Immutable settings shared by the offline loaders and plugin discovery."""

    model_config = ConfigDict(frozen=True)

    application_directory: Path = Field(default_factory=default_application_directory)
    resource_package: str = DEFAULT_RESOURCE_PACKAGE
    catalog_filename: str = "catalog.bin"
    exceptions_filename: str = "exceptions.bin"
    breaking_changes_dirname: str = "BreakingChanges"
    categories_filename: str = "BreakingChangeCategories.json"
    plugin_prefix: str = DEFAULT_PLUGIN_PREFIX
    plugin_extension: str = DEFAULT_PLUGIN_EXTENSION
    companion_suffix: str = DEFAULT_COMPANION_SUFFIX
    use_emoji: bool = False
    use_color: bool = False

    @field_validator(
        "resource_package",
        "catalog_filename",
        "exceptions_filename",
        "breaking_changes_dirname",
        "categories_filename",
        "plugin_prefix",
        "plugin_extension",
        "companion_suffix",
    )
    @classmethod
    def _require_text(cls, value: str) -> str:
        """Reject blank names that would match every file."""
        if not value.strip():
            raise ValueError("value must not be blank")
        return value

    @property
    def breaking_changes_directory(self) -> Path:
        """Return the operator override directory for breaking changes."""

        return self.application_directory / self.breaking_changes_dirname

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> OfflineSettings:
        """Build settings from ``APIPORT_*`` environment variables.

        Args:
            environ: Optional environment mapping; defaults to ``os.environ``.
            **overrides: Explicit field values taking precedence over the environment.

        Returns:
            OfflineSettings: Validated settings instance.

        Raises:
            ConfigError: If an environment value or override is invalid.
        """

        env = os.environ if environ is None else environ
        values: dict[str, object] = {
            "application_directory": default_application_directory(env),
            "use_emoji": _parse_flag(env, EMOJI_ENV),
            "use_color": _parse_flag(env, COLOR_ENV),
        }
        values.update(overrides)
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def _parse_flag(env: Mapping[str, str], key: str) -> bool:
    """Interpret a boolean environment flag, raising on unknown spellings."""

    raw = env.get(key, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean flag, got '{raw}'")


__all__ = [
    "APPLICATION_HOME_ENV",
    "ConfigError",
    "OfflineSettings",
    "default_application_directory",
]
