# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static table mapping language tags onto external analyzer commands."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Final

from .errors import UnsupportedLanguageError


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Describe an analyzer executable and the fixed arguments it receives."""

    name: str
    language_label: str
    executable: str
    arguments: tuple[str, ...] = ()

    def command(self, path: Path, *, executable: str | None = None) -> tuple[str, ...]:
        """Return the argument vector that analyses ``path``.

        The target path is always the final element and is never interpolated
        into a shell string.
        """

        return (executable or self.executable, *self.arguments, str(path))


@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """Resolved analyzer command for one language tag and file."""

    language: str
    tool: ToolSpec
    argv: tuple[str, ...]


SPOTBUGS: Final[ToolSpec] = ToolSpec("SpotBugs", "Java", "spotbugs", ("-textui",))
BANDIT: Final[ToolSpec] = ToolSpec("Bandit", "Python", "bandit", ("-r",))
CPPCHECK: Final[ToolSpec] = ToolSpec("Cppcheck", "C/C++", "cppcheck", ("--enable=all",))
ESLINT: Final[ToolSpec] = ToolSpec("ESLint", "JavaScript", "eslint")

TOOL_SPECS: Final[Mapping[str, ToolSpec]] = MappingProxyType(
    {
        "java": SPOTBUGS,
        "python": BANDIT,
        "c": CPPCHECK,
        "c++": CPPCHECK,
        "javascript": ESLINT,
    },
)


def supported_languages() -> tuple[str, ...]:
    """Return the language tags accepted by :func:`dispatch`."""

    return tuple(TOOL_SPECS)


def lookup_tool(language: str) -> ToolSpec:
    """Return the analyzer registered for ``language`` (case-insensitive).

    Raises:
        UnsupportedLanguageError: If ``language`` has no registered analyzer.
    """

    spec = TOOL_SPECS.get(language.lower())
    if spec is None:
        raise UnsupportedLanguageError(language)
    return spec


def dispatch(
    language: str,
    path: Path,
    *,
    executables: Mapping[str, str] | None = None,
) -> ToolInvocation:
    """Select the analyzer for ``language`` and build its argument vector.

    Args:
        language: Language tag, matched case-insensitively.
        path: Verified file to analyse.
        executables: Optional per-language replacements for the executable name.

    Returns:
        ToolInvocation: Selected tool and the command to launch.

    Raises:
        UnsupportedLanguageError: If ``language`` has no registered analyzer.
    """

    spec = lookup_tool(language)
    tag = language.lower()
    override = (executables or {}).get(tag)
    return ToolInvocation(language=tag, tool=spec, argv=spec.command(path, executable=override))


__all__ = [
    "BANDIT",
    "CPPCHECK",
    "ESLINT",
    "SPOTBUGS",
    "TOOL_SPECS",
    "ToolInvocation",
    "ToolSpec",
    "dispatch",
    "lookup_tool",
    "supported_languages",
]
