#!/usr/bin/env python3
"""
Launch Orchestrator - Runs one dxclient invocation inside a container.

Workflow:
1. Rewrite host path arguments to container paths
2. Check the container runtime is available
3. Prepare the host volume directory
4. Run the container through the host shell, relaying its output
5. Remove the mounted copies of the path arguments

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import sys
import typing
from dataclasses import dataclass, field
from enum import Enum

from rich.console import Console as RichConsole
from rich.markup import escape

from dxlauncher.core.config import LauncherConfig
from dxlauncher.core.console import Console
from dxlauncher.core.errors import (
    ContainerExitError,
    DependencyError,
    FilesystemError,
    create_error_context,
    handle_error,
)
from dxlauncher.core.paths import is_windows, rewrite_arguments
from dxlauncher.core.runtime import ContainerRuntime
from dxlauncher.core.shell import select_shell_invoker
from dxlauncher.core.volume import cleanup_mounted_files, ensure_volume_dir


logger = logging.getLogger(__name__)


class LaunchStatus(Enum):
    """Outcome of a launch."""

    SUCCESS = "success"
    DEPENDENCY_MISSING = "dependency_missing"
    VOLUME_ERROR = "volume_error"
    CONTAINER_FAILED = "container_failed"


@dataclass
class LaunchResult:
    """Result of a launch."""

    status: LaunchStatus
    args: typing.List[str] = field(default_factory=list)
    returncode: typing.Optional[int] = None
    removed_files: typing.List[str] = field(default_factory=list)
    failed_removals: typing.List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status == LaunchStatus.SUCCESS


class LaunchOrchestrator:
    """
    Orchestrates a single containerized dxclient run.

    Every failure reported here ends the launch early without raising.
    Failures to start the child or to read its output propagate.
    """

    def __init__(
        self,
        config: LauncherConfig,
        console: typing.Optional[Console] = None,
        rich_console: typing.Optional[RichConsole] = None,
        platform: typing.Optional[str] = None,
        tty: typing.Optional[bool] = None,
    ):
        """
        Initialize launch orchestrator.

        Args:
            config: Launcher configuration
            console: Console used to run commands
            rich_console: Console for user-facing messages
            platform: Host platform, as in sys.platform
            tty: Whether stdout is a terminal; detected when None
        """
        self.config = config
        self.console = console if console is not None else Console(shellVerbose=False)
        self.rich_console = rich_console if rich_console is not None else RichConsole()
        self.platform = platform if platform is not None else sys.platform
        self.tty = tty
        self.runtime = ContainerRuntime(config, console=self.console)
        self.shell = select_shell_invoker(self.platform)

    def _stdout_is_tty(self) -> bool:
        if self.tty is not None:
            return self.tty
        try:
            return sys.stdout.isatty()
        except (AttributeError, ValueError):
            return False

    def execute(self, args: typing.Sequence[str]) -> LaunchResult:
        """
        Run dxclient in a container with the given arguments.

        Args:
            args: Arguments as given on the command line

        Returns:
            LaunchResult describing the outcome

        Raises:
            ProcessError: If the shell cannot be started
            StreamError: If reading the container output fails
        """
        windows = is_windows(self.platform)
        self.rich_console.print(f"Is Windows? {str(windows).lower()}")

        rewritten = rewrite_arguments(
            args, self.config.container_mount_root, windows=windows
        )
        logger.debug("Rewritten arguments: %s", rewritten.args)

        try:
            self.runtime.check_available()
        except DependencyError as e:
            handle_error(e)
            return LaunchResult(LaunchStatus.DEPENDENCY_MISSING, args=rewritten.args)

        volume_path = self.config.volume_dir
        try:
            ensure_volume_dir(volume_path)
        except FilesystemError as e:
            handle_error(e)
            return LaunchResult(LaunchStatus.VOLUME_ERROR, args=rewritten.args)

        invocation = self.runtime.run_command(
            rewritten.args, tty=self._stdout_is_tty()
        )
        self.rich_console.print(
            f"generated docker command: {invocation.display()}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

        returncode = self.console.stream(self.shell.wrap(invocation))
        if returncode != 0:
            handle_error(
                ContainerExitError(
                    f"Error executing docker command: exit status {returncode}",
                    returncode=returncode,
                    context=create_error_context(
                        operation="run_container",
                        component="LaunchOrchestrator",
                        command=invocation.display(),
                    ),
                )
            )
            return LaunchResult(
                LaunchStatus.CONTAINER_FAILED, args=rewritten.args, returncode=returncode
            )

        removed, failures = cleanup_mounted_files(rewritten.mounted, volume_path)
        for failure in failures:
            self.rich_console.print(f"[yellow]⚠️  {escape(failure.message)}[/yellow]")

        return LaunchResult(
            LaunchStatus.SUCCESS,
            args=rewritten.args,
            returncode=returncode,
            removed_files=removed,
            failed_removals=[f.context.file_path for f in failures],
        )
