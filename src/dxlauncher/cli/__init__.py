#!/usr/bin/env python3
"""
CLI Package for the dxclient launcher

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .app import app, cli_main
from .constants import ExitCode, FORWARD_ALL_CONTEXT_SETTINGS, PROG_NAME
from .utils import console, setup_logging

__all__ = [
    "app",
    "cli_main",
    "ExitCode",
    "FORWARD_ALL_CONTEXT_SETTINGS",
    "PROG_NAME",
    "console",
    "setup_logging",
]
