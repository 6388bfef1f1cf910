"""Unit tests for the container runtime driver."""

import os
from unittest.mock import MagicMock

import pytest

from dxlauncher.core.config import LauncherConfig
from dxlauncher.core.errors import DependencyError, ErrorCategory
from dxlauncher.core.runtime import ContainerRuntime


class TestCheckAvailable:
    """Test the runtime dependency check."""

    def test_available(self, fake_runtime):
        runtime = ContainerRuntime(LauncherConfig(container_runtime=fake_runtime.binary))

        version = runtime.check_available()

        assert "99.0.0" in version
        assert fake_runtime.calls() == [["-v"]]

    def test_version_query_fails(self, fake_runtime, monkeypatch):
        monkeypatch.setenv("FAKE_RUNTIME_BROKEN", "1")
        runtime = ContainerRuntime(LauncherConfig(container_runtime=fake_runtime.binary))

        with pytest.raises(DependencyError) as exc_info:
            runtime.check_available()

        assert str(exc_info.value) == f"{fake_runtime.binary} command not found"
        assert exc_info.value.category == ErrorCategory.DEPENDENCY
        assert exc_info.value.recoverable is True

    def test_binary_missing(self):
        runtime = ContainerRuntime(LauncherConfig(container_runtime="dxlauncher-no-such-runtime"))

        with pytest.raises(DependencyError) as exc_info:
            runtime.check_available()

        assert str(exc_info.value).startswith("Error checking dependencies:")
        assert isinstance(exc_info.value.cause, OSError)

    def test_uses_console(self):
        console = MagicMock()
        console.sh.return_value = "podman version 5.0.0"
        runtime = ContainerRuntime(LauncherConfig(container_runtime="podman"), console=console)

        assert runtime.check_available() == "podman version 5.0.0"
        invocation = console.sh.call_args[0][0]
        assert invocation.argv == ["podman", "-v"]


class TestRunCommand:
    """Test composition of the runtime run command."""

    def test_full_command(self):
        runtime = ContainerRuntime(LauncherConfig())

        invocation = runtime.run_command(
            ["/dxclient/store/report.txt", "--verbose"], tty=False, cwd="/home/user/project"
        )

        assert invocation.argv == [
            "docker",
            "run",
            "-e",
            "VOLUME_DIR=store",
            "-v",
            "/home/user/project/store:/dxclient/store:Z",
            "--network=host",
            "--platform",
            "linux/amd64",
            "--name",
            "dxclient",
            "--rm",
            "dxclient:local",
            "./bin/dxclient",
            "/dxclient/store/report.txt",
            "--verbose",
        ]

    def test_tty_flag(self):
        runtime = ContainerRuntime(LauncherConfig())

        with_tty = runtime.run_command([], tty=True, cwd="/w").argv
        without_tty = runtime.run_command([], tty=False, cwd="/w").argv

        assert with_tty.index("-t") == 4
        assert "-t" not in without_tty

    def test_custom_runtime_and_volume(self):
        runtime = ContainerRuntime(LauncherConfig(volume_dir="data", container_runtime="podman"))

        invocation = runtime.run_command(["x"], cwd="/w")

        assert invocation.program == "podman"
        assert "VOLUME_DIR=data" in invocation.args
        assert "/w/data:/dxclient/store:Z" in invocation.args

    def test_volume_spec_defaults_to_cwd(self, workdir):
        runtime = ContainerRuntime(LauncherConfig())

        assert runtime.volume_spec() == os.path.join(os.getcwd(), "store") + ":/dxclient/store:Z"

    def test_arguments_are_not_split(self):
        runtime = ContainerRuntime(LauncherConfig())

        invocation = runtime.run_command(["two words", "a;b"], cwd="/w")

        assert invocation.args[-2:] == ["two words", "a;b"]
