#!/usr/bin/env python3
"""Module to manage the host volume directory.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import logging
import os
import typing

# user-defined modules
from dxlauncher.core.errors import FilesystemError, create_error_context


logger = logging.getLogger(__name__)


def ensure_volume_dir(volume_dir: str) -> None:
    """Create the volume directory and its parents if missing.

    An empty name means the current directory.

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    try:
        os.makedirs(volume_dir or os.curdir, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Error creating volume directory: {e}",
            context=create_error_context(
                operation="create_volume_dir",
                component="volume",
                file_path=volume_dir,
            ),
            suggestions=["Check permissions of the current directory", "Or set VOLUME_DIR"],
            cause=e,
        ) from e
    logger.debug("Volume directory ready: %s", volume_dir)


def mounted_file(volume_dir: str, arg: str) -> str:
    """Host path of the mounted copy of an argument."""
    return os.path.join(volume_dir, os.path.basename(os.path.normpath(arg)))


def cleanup_mounted_files(
    mounted: typing.Iterable[str], volume_dir: str
) -> typing.Tuple[typing.List[str], typing.List[FilesystemError]]:
    """Remove the mounted copy of every mounted argument.

    A failed removal does not stop the remaining ones.

    Args:
        mounted (list): Arguments that named existing host paths.
        volume_dir (str): The volume directory.

    Returns:
        tuple: Paths removed, and one FilesystemError per path that could not be removed.
    """
    removed = []
    failures = []
    for arg in mounted:
        path = mounted_file(volume_dir, arg)
        try:
            os.remove(path)
        except OSError as e:
            failures.append(FilesystemError(
                f"Error removing file {path}: {e}",
                context=create_error_context(
                    operation="cleanup", component="volume", file_path=path
                ),
                cause=e,
            ))
            continue
        logger.debug("Removed %s", path)
        removed.append(path)
    return removed, failures
