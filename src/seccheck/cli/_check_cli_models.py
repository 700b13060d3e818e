# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the check CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from .. import __version__
from ..constants import PROG_NAME
from ..tools import supported_languages


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


ARGUMENTS_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(
        metavar="LANGUAGE FILE_PATH",
        help=f"Language tag ({', '.join(supported_languages())}) followed by the file to analyse.",
        show_default=False,
    ),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Additional TOML configuration file."),
]
ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Directory searched for pyproject.toml and .seccheck.toml."),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.001, help="Kill the analyzer after this many seconds."),
]
PROPAGATE_EXIT_OPTION = Annotated[
    bool,
    typer.Option("--propagate-exit", help="Exit with the analyzer's status instead of 0."),
]
NO_EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--no-emoji", help="Disable emoji in output."),
]
NO_COLOR_OPTION = Annotated[
    bool,
    typer.Option("--no-color", help="Disable ANSI colour output."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Write diagnostic logging to stderr."),
]
VERSION_OPTION = Annotated[
    bool,
    typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
]


@dataclass(slots=True)
class CheckCLIOptions:
    """Normalised CLI inputs for the check command."""

    arguments: tuple[str, ...]
    root: Path
    config_path: Path | None
    timeout: float | None
    propagate_exit: bool
    use_emoji: bool
    use_color: bool
    verbose: bool

    def config_overrides(self) -> dict[str, Any]:
        """Return the configuration fragment contributed by explicit flags."""

        overrides: dict[str, Any] = {}
        output: dict[str, Any] = {}
        if not self.use_emoji:
            output["emoji"] = False
        if not self.use_color:
            output["color"] = False
        if output:
            overrides["output"] = output
        execution: dict[str, Any] = {}
        if self.timeout is not None:
            execution["timeout"] = self.timeout
        if self.propagate_exit:
            execution["propagate_exit_status"] = True
        if execution:
            overrides["execution"] = execution
        return overrides


def build_check_options(
    arguments: list[str] | None,
    *,
    root: Path,
    config_path: Path | None,
    timeout: float | None,
    propagate_exit: bool,
    no_emoji: bool,
    no_color: bool,
    verbose: bool,
) -> CheckCLIOptions:
    """Construct ``CheckCLIOptions`` from Typer parameters."""

    return CheckCLIOptions(
        arguments=tuple(arguments or ()),
        root=root.expanduser(),
        config_path=config_path.expanduser() if config_path is not None else None,
        timeout=timeout,
        propagate_exit=propagate_exit,
        use_emoji=not no_emoji,
        use_color=not no_color,
        verbose=verbose,
    )


__all__ = [
    "ARGUMENTS_ARGUMENT",
    "CONFIG_OPTION",
    "NO_COLOR_OPTION",
    "NO_EMOJI_OPTION",
    "PROPAGATE_EXIT_OPTION",
    "ROOT_OPTION",
    "TIMEOUT_OPTION",
    "VERBOSE_OPTION",
    "VERSION_OPTION",
    "CheckCLIOptions",
    "build_check_options",
]
