# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the resolver, dispatcher and runner."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from .constants import PROG_NAME

EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2


class SecCheckError(Exception):
    """Base class for failures reported to the user instead of a traceback."""

    exit_code: int = EXIT_FAILURE


class UsageError(SecCheckError):
    """Raised when the command line does not carry exactly two positional values."""

    exit_code = EXIT_USAGE

    def __init__(self, received: int) -> None:
        super().__init__(f"Usage: {PROG_NAME} <language> <file_path>")
        self.received = received


class InvalidPathError(SecCheckError):
    """Raised when the target path is missing or is not a regular file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"INVALID File Path: Given file path does not exist: {path}")
        self.path = path


class UnsupportedLanguageError(SecCheckError):
    """Raised when no analyzer is registered for the language tag.

    Reported as information rather than a failure, so the process exits cleanly.
    """

    exit_code = 0

    def __init__(self, language: str) -> None:
        super().__init__(f"Unsupported Language: {language}")
        self.language = language


class ToolExecutionError(SecCheckError):
    """Raised when an analyzer cannot be launched or its output cannot be read."""

    def __init__(self, command: Sequence[str], detail: str) -> None:
        executable = command[0] if command else "<empty command>"
        super().__init__(f"Failed to run {executable}: {detail}")
        self.command = tuple(command)
        self.detail = detail


class ConfigError(SecCheckError):
    """Raised when configuration input is invalid."""


__all__ = [
    "EXIT_FAILURE",
    "EXIT_USAGE",
    "ConfigError",
    "InvalidPathError",
    "SecCheckError",
    "ToolExecutionError",
    "UnsupportedLanguageError",
    "UsageError",
]
