#!/usr/bin/env python3
"""Module to rewrite host paths into container paths.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import os
import sys
import typing
from dataclasses import dataclass, field


def is_windows(platform: typing.Optional[str] = None) -> bool:
    """Check whether the host is Windows.

    Args:
        platform (str): Platform string as in sys.platform. Defaults to the current one.
    """
    if platform is None:
        platform = sys.platform
    return platform.startswith("win")


@dataclass
class RewrittenArguments:
    """Result of rewriting an argument list.

    Attributes:
        args (list): Arguments with host paths replaced, order preserved.
        mounted (list): Original arguments that named existing host paths.
    """

    args: typing.List[str] = field(default_factory=list)
    mounted: typing.List[str] = field(default_factory=list)


def container_path(arg: str, mount_root: str, windows: bool = False) -> str:
    """Map a host path to its location under the container mount root."""
    separator = "\\" if windows else "/"
    return mount_root + separator + os.path.basename(os.path.normpath(arg))


def rewrite_arguments(
    args: typing.Sequence[str], mount_root: str, windows: bool = False
) -> RewrittenArguments:
    """Replace every argument naming an existing host path with its container path.

    Args:
        args (list): The arguments as given on the command line.
        mount_root (str): Mount point of the volume inside the container.
        windows (bool): Use the Windows separator.

    Returns:
        RewrittenArguments: Rewritten arguments and the arguments that were mounted.
    """
    result = RewrittenArguments()
    for arg in args:
        if arg and os.path.exists(arg):
            result.args.append(container_path(arg, mount_root, windows))
            result.mounted.append(arg)
        else:
            result.args.append(arg)
    return result
