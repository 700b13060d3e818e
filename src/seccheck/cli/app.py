# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import typer

from .check import check_command

app = typer.Typer(
    help="Run a language-specific security analyzer and print remediation advice.",
    add_completion=False,
    no_args_is_help=False,
)
app.command()(check_command)

__all__ = ["app"]
