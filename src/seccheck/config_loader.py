# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import logging
import os
import re
import tomllib
from abc import abstractmethod
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from .config import Config
from .constants import CONFIG_FILENAME, PYPROJECT_FILENAME, PYPROJECT_SECTION_KEY, PYPROJECT_TOOL_KEY
from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigSource(Protocol):
    """Provide configuration data loaded from disk or other mediums."""

    name: str

    @abstractmethod
    def load(self) -> Mapping[str, Any]:
        """Return configuration values as a mapping."""

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable description of the source."""


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {key: _expand_env_value(entry, env) for key, entry in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(entry, env) for entry in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


class DefaultConfigSource(ConfigSource):
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource(ConfigSource):
    """Load configuration data from a TOML document."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        required: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self.name = name or str(path)
        self._required = required
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        if not self._path.is_file():
            if self._required:
                raise ConfigError(f"Configuration file not found: {self._path}")
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc.strerror or exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        return self._select(dict(data))

    def _select(self, document: dict[str, Any]) -> Mapping[str, Any]:
        return {key: _expand_env_value(value, self._env) for key, value in document.items()}

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.seccheck]`` within ``pyproject.toml``."""

    def _select(self, document: dict[str, Any]) -> Mapping[str, Any]:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return super()._select(dict(section))

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, root: Path, *, explicit: Path | None = None) -> ConfigLoader:
        """Return a loader reading the standard files beneath ``root``.

        Later sources win: defaults, ``pyproject.toml``, ``.seccheck.toml``,
        then ``explicit`` when supplied.
        """

        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(root / PYPROJECT_FILENAME),
            TomlConfigSource(root / CONFIG_FILENAME),
        ]
        if explicit is not None:
            sources.append(TomlConfigSource(explicit, required=True))
        return cls(sources=sources)

    def load(self, overrides: Mapping[str, Any] | None = None) -> Config:
        """Merge every source, then ``overrides``, into a validated :class:`Config`.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                LOGGER.debug("applying %s", source.describe())
            merged = _deep_merge(merged, fragment)
        if overrides:
            merged = _deep_merge(merged, overrides)
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigError(f"Invalid configuration: {details}") from exc


def load_config(
    root: Path,
    *,
    explicit: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Return the configuration for a run rooted at ``root``."""

    return ConfigLoader.for_root(root, explicit=explicit).load(overrides)


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
