#!/usr/bin/env python3
"""
Utility functions for the dxclient launcher CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from dxlauncher.core.errors import ErrorHandler, set_error_handler


# Initialize Rich console; all launcher diagnostics go to stdout
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup Rich logging configuration and unified error handler."""
    log_level = logging.DEBUG if verbose else logging.INFO

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
    )

    error_handler = ErrorHandler(console=console, verbose=verbose)
    set_error_handler(error_handler)
