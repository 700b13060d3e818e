# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for command-line argument resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from seccheck.errors import EXIT_USAGE, InvalidPathError, UsageError
from seccheck.resolver import resolve_invocation


@pytest.mark.parametrize("arguments", [(), ("java",), ("java", "a.java", "extra")])
def test_wrong_argument_count_raises_usage_without_touching_files(monkeypatch, arguments) -> None:
    def _forbidden(self: Path) -> bool:
        raise AssertionError("filesystem accessed")

    monkeypatch.setattr(Path, "is_file", _forbidden)

    with pytest.raises(UsageError) as excinfo:
        resolve_invocation(arguments)

    assert excinfo.value.exit_code == EXIT_USAGE
    assert excinfo.value.received == len(arguments)
    assert "Usage:" in str(excinfo.value)


def test_missing_path_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidPathError) as excinfo:
        resolve_invocation(["python", str(tmp_path / "missing.py")])

    assert "INVALID File Path" in str(excinfo.value)


def test_directory_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidPathError):
        resolve_invocation(["python", str(tmp_path)])


def test_language_is_lowercased_and_original_kept(source_file: Path) -> None:
    request = resolve_invocation(["JaVa", str(source_file)])

    assert request.language == "java"
    assert request.raw_language == "JaVa"
    assert request.file_path == source_file


def test_unknown_language_is_not_rejected_by_resolver(source_file: Path) -> None:
    request = resolve_invocation(["cobol", str(source_file)])

    assert request.language == "cobol"
