# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around analyzer ``subprocess`` execution."""

from __future__ import annotations

import logging
import os
import shutil
import signal

# Bandit: subprocess usage is intentional; analyzers are launched through a
# controlled wrapper with argument vectors and ``shell=True`` disabled.
import subprocess  # nosec B404
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ToolExecutionError

LOGGER = logging.getLogger(__name__)

_USE_SESSIONS: Final[bool] = hasattr(os, "killpg")


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Output captured from one analyzer run."""

    command: tuple[str, ...]
    captured_text: str
    exit_status: int

    @property
    def reported_issues(self) -> bool:
        """Return ``True`` when the analyzer exited non-zero.

        Analyzers signal findings through their exit status, so this is a
        normal outcome rather than a failure.
        """

        return self.exit_status != 0


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise ToolExecutionError(args, f"executable '{head}' was not found on PATH")
    return [resolved, *rest]


def _kill_process_tree(process: subprocess.Popen[str]) -> None:
    """Kill ``process`` and every process sharing its session where supported."""

    if _USE_SESSIONS:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            return
        except PermissionError:
            process.kill()
        return
    process.kill()


def run_tool(args: Sequence[str], *, timeout: float | None = None) -> ToolResult:
    """Launch ``args`` and capture its combined output line by line.

    The child's stderr is merged into stdout and stdin is detached. The pipe
    and the process are released on every exit path. On POSIX the child leads
    its own session so a timeout also stops the processes it spawned, such as
    the JVM behind the ``spotbugs`` wrapper script.

    Args:
        args: Argument vector whose first element names the executable.
        timeout: Optional number of seconds after which the child is killed.

    Returns:
        ToolResult: Captured text and the exit status, which may be non-zero.

    Raises:
        ToolExecutionError: If the executable is missing, fails to start,
            its output cannot be read, or ``timeout`` elapses.
    """

    normalized = _normalize_args(args)
    LOGGER.debug("launching %s", " ".join(normalized))
    try:
        # Bandit: commands come from the fixed analyzer table and are passed
        # as argument lists without shell expansion.
        process = subprocess.Popen(  # nosec B603
            normalized,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=_USE_SESSIONS,
        )
    except OSError as exc:
        raise ToolExecutionError(normalized, f"failed to start ({exc.strerror or exc})") from exc

    expired = threading.Event()
    decision = threading.Lock()

    def _expire() -> None:
        with decision:
            # A reaped child has already finished on its own.
            if process.returncode is not None:
                return
            expired.set()
            _kill_process_tree(process)

    timer = threading.Timer(timeout, _expire) if timeout is not None else None
    lines: list[str] = []
    with process:
        if timer is not None:
            timer.start()
        stream = process.stdout
        try:
            if stream is None:
                raise OSError("stdout pipe was not created")
            for line in stream:
                lines.append(line.rstrip("\r\n"))
            exit_status = process.wait()
        except OSError as exc:
            _kill_process_tree(process)
            raise ToolExecutionError(normalized, f"could not read output ({exc.strerror or exc})") from exc
        finally:
            if timer is not None:
                with decision:
                    timer.cancel()

    if expired.is_set():
        raise ToolExecutionError(normalized, f"timed out after {timeout:.1f}s")

    LOGGER.debug("%s exited with status %d", normalized[0], exit_status)
    captured_text = "".join(f"{line}\n" for line in lines)
    return ToolResult(command=tuple(normalized), captured_text=captured_text, exit_status=exit_status)


__all__ = ["ToolResult", "run_tool"]
