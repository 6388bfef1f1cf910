#!/usr/bin/env python3
"""Module to resolve the launcher configuration.

The launcher reads exactly two environment variables, VOLUME_DIR and
CONTAINER_RUNTIME. Everything else about the container run is fixed.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import os
import typing
from dataclasses import dataclass


DEFAULT_VOLUME_DIR = "store"
DEFAULT_CONTAINER_RUNTIME = "docker"

VOLUME_DIR_ENV = "VOLUME_DIR"
CONTAINER_RUNTIME_ENV = "CONTAINER_RUNTIME"


@dataclass(frozen=True)
class LauncherConfig:
    """Configuration of a single launcher invocation.

    Attributes:
        volume_dir (str): Host directory mounted into the container.
        container_runtime (str): Container runtime binary.
        image_name (str): Image name.
        image_tag (str): Image tag.
        container_name (str): Name given to the container.
        platform (str): Platform passed to the runtime.
        network (str): Network mode.
        container_mount_root (str): Mount point of the volume inside the container.
        executable (str): Executable run inside the container.
    """

    volume_dir: str = DEFAULT_VOLUME_DIR
    container_runtime: str = DEFAULT_CONTAINER_RUNTIME
    image_name: str = "dxclient"
    image_tag: str = "local"
    container_name: str = "dxclient"
    platform: str = "linux/amd64"
    network: str = "host"
    container_mount_root: str = "/dxclient/store"
    executable: str = "./bin/dxclient"

    @property
    def image(self) -> str:
        """Image reference, name:tag."""
        return f"{self.image_name}:{self.image_tag}"

    @classmethod
    def from_env(
        cls, environ: typing.Optional[typing.Mapping[str, str]] = None
    ) -> "LauncherConfig":
        """Build the configuration from the environment.

        Args:
            environ (Mapping): Environment to read. Defaults to os.environ.

        Returns:
            LauncherConfig: The resolved configuration.
        """
        if environ is None:
            environ = os.environ
        return cls(
            volume_dir=environ.get(VOLUME_DIR_ENV, DEFAULT_VOLUME_DIR),
            container_runtime=environ.get(CONTAINER_RUNTIME_ENV, DEFAULT_CONTAINER_RUNTIME),
        )
