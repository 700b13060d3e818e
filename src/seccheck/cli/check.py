# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Security check CLI command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from ..advisor import annotate
from ..config_loader import load_config
from ..errors import SecCheckError, UnsupportedLanguageError, UsageError
from ..logging import fail, info, ok, warn
from ..process_utils import ToolResult, run_tool
from ..resolver import resolve_invocation
from ..tools import ToolSpec, dispatch, lookup_tool
from ._check_cli_models import (
    ARGUMENTS_ARGUMENT,
    CONFIG_OPTION,
    NO_COLOR_OPTION,
    NO_EMOJI_OPTION,
    PROPAGATE_EXIT_OPTION,
    ROOT_OPTION,
    TIMEOUT_OPTION,
    VERBOSE_OPTION,
    VERSION_OPTION,
    CheckCLIOptions,
    build_check_options,
)

LOGGER = logging.getLogger("seccheck")


def check_command(
    arguments: ARGUMENTS_ARGUMENT = None,
    root: ROOT_OPTION = Path("."),
    config_path: CONFIG_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    propagate_exit: PROPAGATE_EXIT_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    version: VERSION_OPTION = False,
) -> None:
    """Analyse FILE_PATH with the security analyzer registered for LANGUAGE."""
    options = build_check_options(
        arguments,
        root=root,
        config_path=config_path,
        timeout=timeout,
        propagate_exit=propagate_exit,
        no_emoji=no_emoji,
        no_color=no_color,
        verbose=verbose,
    )
    if options.verbose:
        _ensure_verbose_logger()
    try:
        exit_code = run_check(options)
    except SecCheckError as exc:
        LOGGER.debug("check aborted", exc_info=exc)
        _report_error(exc, use_emoji=options.use_emoji, use_color=options.use_color)
        exit_code = exc.exit_code
    raise typer.Exit(code=exit_code)


def run_check(options: CheckCLIOptions) -> int:
    """Resolve, dispatch, run and annotate one analyzer invocation.

    Returns:
        int: Process exit code; the analyzer's status when propagation is enabled.

    Raises:
        SecCheckError: For usage, path, language, configuration or launch failures.
    """

    request = resolve_invocation(options.arguments)
    # Unsupported languages are reported before any configuration is read.
    lookup_tool(request.raw_language)
    config = load_config(options.root, explicit=options.config_path, overrides=options.config_overrides())
    invocation = dispatch(request.raw_language, request.file_path, executables=config.executables)
    use_emoji = config.output.emoji
    use_color = config.output.color
    tool = invocation.tool

    if config.output.banner:
        info(
            f"Scanning {tool.language_label} code with {tool.name} for security vulnerabilities ...",
            use_emoji=use_emoji,
            use_color=use_color,
        )
    result = run_tool(invocation.argv, timeout=config.execution.timeout)
    typer.echo(result.captured_text)
    for line in annotate(result.captured_text).render():
        typer.echo(line)
    _report_exit_status(result, tool, use_emoji=use_emoji, use_color=use_color)

    if config.execution.propagate_exit_status:
        return result.exit_status
    return 0


def _report_exit_status(result: ToolResult, tool: ToolSpec, *, use_emoji: bool, use_color: bool) -> None:
    if result.reported_issues:
        warn(
            f"{tool.name} reported issues (exit status {result.exit_status})",
            use_emoji=use_emoji,
            use_color=use_color,
        )
    else:
        ok(f"{tool.name} exited with status 0", use_emoji=use_emoji, use_color=use_color)


def _report_error(exc: SecCheckError, *, use_emoji: bool, use_color: bool) -> None:
    if isinstance(exc, UsageError):
        typer.echo(str(exc))
    elif isinstance(exc, UnsupportedLanguageError):
        info(str(exc), use_emoji=use_emoji, use_color=use_color)
    else:
        fail(str(exc), use_emoji=use_emoji, use_color=use_color)


def _ensure_verbose_logger() -> None:
    """Configure the package logger to stream debug messages to stderr."""

    if getattr(LOGGER, "_seccheck_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.propagate = False
    setattr(LOGGER, "_seccheck_verbose_configured", True)


__all__ = ["check_command", "run_check"]
