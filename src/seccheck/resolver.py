# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validate positional command-line input into an invocation request."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidPathError, UsageError

EXPECTED_ARGUMENTS = 2


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """Language tag and target file for a single analyzer run.

    ``raw_language`` keeps the user's spelling for messages, while
    ``language`` holds the lowercase tag used for dispatch.
    """

    raw_language: str
    language: str
    file_path: Path


def resolve_invocation(arguments: Sequence[str]) -> InvocationRequest:
    """Return a request for ``(language, path)`` after validating the path.

    Args:
        arguments: Positional values taken from the command line.

    Returns:
        InvocationRequest: Normalised language tag and the verified path.

    Raises:
        UsageError: If ``arguments`` does not contain exactly two values.
        InvalidPathError: If the path is missing or is not a regular file.
    """

    if len(arguments) != EXPECTED_ARGUMENTS:
        raise UsageError(len(arguments))
    raw_language, raw_path = arguments
    file_path = Path(raw_path).expanduser()
    if not file_path.is_file():
        raise InvalidPathError(file_path)
    return InvocationRequest(
        raw_language=raw_language,
        language=raw_language.lower(),
        file_path=file_path,
    )


__all__ = ["InvocationRequest", "resolve_invocation"]
