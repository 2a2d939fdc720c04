# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings for a tidydiff run and the layered loader that builds them.

Precedence, lowest first: built-in defaults, ``[tool.tidydiff]`` in
``pyproject.toml``, a standalone ``.tidydiff.toml``, environment variables,
then explicit overrides (usually CLI options).
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError

from .changed_ranges import PrefixMatch
from .errors import ConfigError

DEFAULT_OLD_LOG: Final[str] = "clang_tidy.old.log"
DEFAULT_NEW_LOG: Final[str] = "clang_tidy.new.log"
DEFAULT_OUT_LOG: Final[str] = "clang_tidy.diff.log"
DEFAULT_SHOW_LOG: Final[str] = "clang_tidy.log"

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "tidydiff"
STANDALONE_FILENAME: Final[str] = ".tidydiff.toml"
DEBUG_ENV_VAR: Final[str] = "TIDYDIFF_DEBUG"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")
_PATH_FIELDS: Final[tuple[str, ...]] = ("old_log", "new_log", "out_log")


class DiffSettings(BaseModel):
    """Options controlling a baseline/candidate diff run."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    old_log: Path = Path(DEFAULT_OLD_LOG)
    new_log: Path = Path(DEFAULT_NEW_LOG)
    out_log: Path = Path(DEFAULT_OUT_LOG)
    upstream_ref: str | None = None
    filter_changed_lines: bool = True
    prefix_match: PrefixMatch = PrefixMatch.FIRST
    debug: bool = False

    def resolved(self, root: Path) -> DiffSettings:
        """Return a copy whose log paths are absolute, relative paths anchored at ``root``."""

        update = {name: _anchor(getattr(self, name), root) for name in _PATH_FIELDS}
        return self.model_copy(update=update)


def _anchor(path: Path, root: Path) -> Path:
    candidate = path.expanduser()
    return candidate if candidate.is_absolute() else (root / candidate)


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path`` or an empty mapping when absent.

    Raises:
        ConfigError: When the file exists but is not valid TOML.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Substitute ``$VAR``/``${VAR}`` references inside string values."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        return env.get(key, match.group(0))

    return {
        key: _ENV_VAR_PATTERN.sub(_replace, value) if isinstance(value, str) else value for key, value in data.items()
    }


def load_pyproject_section(root: Path) -> dict[str, Any]:
    """Return the ``[tool.tidydiff]`` table from ``root/pyproject.toml``."""

    document = _read_toml(root / PYPROJECT_FILENAME)
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] must be a table")
    return _normalise_keys(section)


def load_standalone_file(root: Path) -> dict[str, Any]:
    """Return settings from ``root/.tidydiff.toml`` when present."""

    return _normalise_keys(_read_toml(root / STANDALONE_FILENAME))


def env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Return settings derived from environment variables."""

    overrides: dict[str, Any] = {}
    if env.get(DEBUG_ENV_VAR) == "1":
        overrides["debug"] = True
    return overrides


def load_settings(
    root: Path,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> DiffSettings:
    """Build :class:`DiffSettings` for a run rooted at ``root``.

    Args:
        root: Working directory used to locate config files and anchor paths.
        env: Environment mapping; defaults to :data:`os.environ`.
        overrides: Explicit values that win over every other layer. ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        DiffSettings: Validated settings with absolute log paths.

    Raises:
        ConfigError: When a configuration layer is malformed.
    """

    environment = os.environ if env is None else env
    merged: dict[str, Any] = {}
    merged.update(_expand_env(load_pyproject_section(root), environment))
    merged.update(_expand_env(load_standalone_file(root), environment))
    merged.update(env_overrides(environment))
    merged.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        settings = DiffSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid tidydiff configuration: {exc}") from exc
    return settings.resolved(root)


__all__ = [
    "DEBUG_ENV_VAR",
    "DEFAULT_NEW_LOG",
    "DEFAULT_OLD_LOG",
    "DEFAULT_OUT_LOG",
    "DEFAULT_SHOW_LOG",
    "DiffSettings",
    "env_overrides",
    "load_pyproject_section",
    "load_settings",
    "load_standalone_file",
]
