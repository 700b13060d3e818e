# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Return an existing file suitable as an analysis target."""
    path = tmp_path / "Example.java"
    path.write_text("class Example {}\n", encoding="utf-8")
    return path


@pytest.fixture
def python_command() -> Callable[[str], list[str]]:
    """Return a factory building commands that run a Python snippet."""

    def _build(code: str) -> list[str]:
        return [sys.executable, "-c", code]

    return _build
