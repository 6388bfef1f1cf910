"""
Pytest configuration and shared fixtures for dxlauncher tests.

Provides a fake container runtime, an isolated working directory and a
captured Rich console so launches can run end to end without a real
container runtime.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import io
import json
import os
import stat
import sys
import textwrap

import pytest
from rich.console import Console as RichConsole

from dxlauncher.core.errors import ErrorHandler, set_error_handler


# ============================================================================
# Fake Container Runtime
# ============================================================================

FAKE_RUNTIME_SCRIPT = textwrap.dedent(
    """
    import json
    import os
    import sys

    log = os.environ.get("FAKE_RUNTIME_LOG")
    if log:
        with open(log, "a") as f:
            f.write(json.dumps(sys.argv[1:]) + "\\n")

    if sys.argv[1:] == ["-v"]:
        if os.environ.get("FAKE_RUNTIME_BROKEN"):
            sys.exit(127)
        print("Docker version 99.0.0, build fake")
        sys.exit(0)

    print("container stdout")
    print("container stderr", file=sys.stderr)
    sys.exit(int(os.environ.get("FAKE_RUNTIME_EXIT", "0")))
    """
)


class FakeRuntime:
    """Handle on the fake runtime installed by the fake_runtime fixture."""

    def __init__(self, binary, log_path):
        self.binary = binary
        self.log_path = log_path

    def calls(self):
        """Argument lists the runtime was invoked with, in order."""
        if not os.path.exists(self.log_path):
            return []
        with open(self.log_path) as f:
            return [json.loads(line) for line in f if line.strip()]

    def run_calls(self):
        return [call for call in self.calls() if call and call[0] == "run"]


@pytest.fixture
def fake_runtime(tmp_path, monkeypatch):
    """Install an executable fake runtime and point CONTAINER_RUNTIME at it."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "fake_runtime.py"
    script.write_text(FAKE_RUNTIME_SCRIPT)

    binary = bin_dir / "fake-docker"
    binary.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log_path = tmp_path / "runtime_calls.jsonl"
    monkeypatch.setenv("CONTAINER_RUNTIME", str(binary))
    monkeypatch.setenv("FAKE_RUNTIME_LOG", str(log_path))
    monkeypatch.delenv("FAKE_RUNTIME_EXIT", raising=False)
    monkeypatch.delenv("FAKE_RUNTIME_BROKEN", raising=False)
    return FakeRuntime(str(binary), str(log_path))


# ============================================================================
# Working Directory and Console Fixtures
# ============================================================================

@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty current working directory with VOLUME_DIR unset."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv("VOLUME_DIR", raising=False)
    return work


@pytest.fixture
def rich_output():
    """Rich console writing to a buffer, with the error handler bound to it."""
    buffer = io.StringIO()
    console = RichConsole(file=buffer, width=200, color_system=None)
    set_error_handler(ErrorHandler(console=console))
    return console


@pytest.fixture(autouse=True)
def reset_error_handler():
    """Clear the process-wide error handler after each test."""
    yield
    set_error_handler(None)
