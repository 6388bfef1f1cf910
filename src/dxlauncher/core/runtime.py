#!/usr/bin/env python3
"""Module to drive the container runtime.

This module provides a class that checks the container runtime is usable and
composes the run command for the dxclient image.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import logging
import os
import typing

# user-defined modules
from dxlauncher.core.config import LauncherConfig, VOLUME_DIR_ENV
from dxlauncher.core.console import Console
from dxlauncher.core.errors import DependencyError, create_error_context
from dxlauncher.core.shell import Invocation


logger = logging.getLogger(__name__)


class ContainerRuntime:
    """Class to run the dxclient image with a container runtime.

    Attributes:
        config (LauncherConfig): The launcher configuration.
        console (Console): The console object.
    """

    def __init__(
        self,
        config: LauncherConfig,
        console: typing.Optional[Console] = None,
    ) -> None:
        """Constructor of the ContainerRuntime class.

        Args:
            config (LauncherConfig): The launcher configuration.
            console (Console): The console object.
        """
        self.config = config
        self.console = console if console is not None else Console(shellVerbose=False)

    @property
    def binary(self) -> str:
        return self.config.container_runtime

    def check_available(self) -> str:
        """Check the runtime binary answers its version query.

        Returns:
            str: The version string reported by the runtime.

        Raises:
            DependencyError: If the binary is missing or the query fails.
        """
        context = create_error_context(
            operation="check_dependencies",
            component="ContainerRuntime",
            command=f"{self.binary} -v",
        )
        try:
            version = self.console.sh(Invocation(self.binary, ["-v"]), secret=True)
        except RuntimeError as e:
            raise DependencyError(
                f"{self.binary} command not found",
                context=context,
                suggestions=[
                    f"Install {self.binary} and make sure it is on PATH",
                    "Or set CONTAINER_RUNTIME to an installed runtime",
                ],
                cause=e,
            ) from e
        except OSError as e:
            raise DependencyError(
                f"Error checking dependencies: {e}",
                context=context,
                suggestions=[f"Install {self.binary} and make sure it is on PATH"],
                cause=e,
            ) from e

        logger.debug("Container runtime: %s", version)
        return version

    def volume_spec(self, cwd: typing.Optional[str] = None) -> str:
        """Volume binding of the host volume directory to the container mount root."""
        if cwd is None:
            cwd = os.getcwd()
        host_dir = os.path.join(cwd, self.config.volume_dir)
        return host_dir + ":" + self.config.container_mount_root + ":Z"

    def run_command(
        self,
        args: typing.Sequence[str],
        tty: bool = False,
        cwd: typing.Optional[str] = None,
    ) -> Invocation:
        """Compose the runtime invocation that runs dxclient with the given arguments.

        Args:
            args (list): Arguments for the in-container executable, already rewritten.
            tty (bool): Allocate a pseudo-TTY in the container.
            cwd (str): Directory the volume directory is relative to.

        Returns:
            Invocation: The runtime invocation.
        """
        command = ["run", "-e", f"{VOLUME_DIR_ENV}={self.config.volume_dir}"]

        if tty:
            command.append("-t")

        command += ["-v", self.volume_spec(cwd)]
        command += [
            f"--network={self.config.network}",
            "--platform",
            self.config.platform,
            "--name",
            self.config.container_name,
            "--rm",
            self.config.image,
            self.config.executable,
        ]
        command += list(args)

        return Invocation(self.binary, command)
