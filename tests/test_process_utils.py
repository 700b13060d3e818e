# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the analyzer process runner."""

from __future__ import annotations

import os
import subprocess
import threading
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from seccheck.errors import ToolExecutionError
from seccheck.process_utils import run_tool


def test_captures_lines_in_order(python_command: Callable[[str], list[str]]) -> None:
    result = run_tool(python_command("print('alpha'); print('beta'); print('gamma')"))

    assert result.captured_text == "alpha\nbeta\ngamma\n"
    assert result.exit_status == 0
    assert result.reported_issues is False


def test_non_zero_exit_is_not_an_error(python_command: Callable[[str], list[str]]) -> None:
    result = run_tool(python_command("print('Issue: SQL Injection'); raise SystemExit(1)"))

    assert result.exit_status == 1
    assert result.reported_issues is True
    assert "SQL Injection" in result.captured_text


def test_stderr_is_merged_into_captured_text(python_command: Callable[[str], list[str]]) -> None:
    code = "import sys; print('out', flush=True); print('err', file=sys.stderr, flush=True)"

    result = run_tool(python_command(code))

    assert "out\n" in result.captured_text
    assert "err\n" in result.captured_text


def test_crlf_line_endings_are_normalised(python_command: Callable[[str], list[str]]) -> None:
    code = "import sys; sys.stdout.buffer.write(b'one\\r\\ntwo\\r\\n')"

    result = run_tool(python_command(code))

    assert result.captured_text == "one\ntwo\n"


def test_empty_output_yields_empty_text(python_command: Callable[[str], list[str]]) -> None:
    result = run_tool(python_command("pass"))

    assert result.captured_text == ""


def test_missing_executable_raises(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PATH", str(tmp_path))

    with pytest.raises(ToolExecutionError) as excinfo:
        run_tool(["spotbugs", "-textui", "A.java"])

    assert "spotbugs" in str(excinfo.value)
    assert "not found on PATH" in excinfo.value.detail


def test_launch_failure_is_wrapped(tmp_path: Path) -> None:
    not_executable = tmp_path / "analyzer"
    not_executable.write_text("plain text", encoding="utf-8")

    with pytest.raises(ToolExecutionError) as excinfo:
        run_tool([str(not_executable)])

    assert "failed to start" in excinfo.value.detail
    assert isinstance(excinfo.value.__cause__, OSError)


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_tool([])


def test_timeout_kills_child(python_command: Callable[[str], list[str]]) -> None:
    with pytest.raises(ToolExecutionError) as excinfo:
        run_tool(python_command("import time; time.sleep(30)"), timeout=0.5)

    assert "timed out" in excinfo.value.detail


def test_process_is_released_when_reading_fails(monkeypatch, python_command) -> None:
    created: list[subprocess.Popen[str]] = []
    original_popen = subprocess.Popen

    class _BrokenStream:
        def __init__(self, stream) -> None:
            self._stream = stream

        def __iter__(self):
            raise OSError(5, "Input/output error")

        def close(self) -> None:
            self._stream.close()

    def _popen(*args, **kwargs):
        process = original_popen(*args, **kwargs)
        process.stdout = _BrokenStream(process.stdout)
        created.append(process)
        return process

    monkeypatch.setattr(subprocess, "Popen", _popen)

    with pytest.raises(ToolExecutionError) as excinfo:
        run_tool(python_command("import time; time.sleep(30)"))

    assert "could not read output" in excinfo.value.detail
    assert created[0].returncode is not None


@pytest.mark.skipif(not hasattr(os, "killpg"), reason="process groups unavailable")
def test_timeout_stops_grandchildren_holding_the_pipe() -> None:
    started = time.monotonic()

    with pytest.raises(ToolExecutionError) as excinfo:
        run_tool(["sh", "-c", "echo start; sleep 8; echo done"], timeout=0.5)

    assert time.monotonic() - started < 3
    assert "timed out" in excinfo.value.detail


def test_timer_firing_after_exit_is_not_a_timeout(monkeypatch, python_command) -> None:
    timers: list[_ManualTimer] = []

    class _ManualTimer:
        def __init__(self, interval: float, function: Callable[[], None]) -> None:
            self.function = function
            timers.append(self)

        def start(self) -> None:
            return None

        def cancel(self) -> None:
            return None

    class _LateTimerPopen(subprocess.Popen):
        def wait(self, timeout=None):
            status = super().wait(timeout)
            for timer in timers:
                timer.function()
            return status

    monkeypatch.setattr(threading, "Timer", _ManualTimer)
    monkeypatch.setattr(subprocess, "Popen", _LateTimerPopen)

    result = run_tool(python_command("print('finished')"), timeout=30)

    assert timers
    assert result.exit_status == 0
    assert result.captured_text == "finished\n"


def test_undecodable_bytes_are_replaced(python_command: Callable[[str], list[str]]) -> None:
    code = "import sys; sys.stdout.buffer.write(b'\\xff\\xfe ok\\n')"

    result = run_tool(python_command(code))

    assert "\ufffd" in result.captured_text
    assert result.captured_text.endswith(" ok\n")
