#!/usr/bin/env python3
"""
Constants and configuration for the dxclient launcher CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""


# Exit codes
class ExitCode:
    """Exit codes for the launcher."""

    SUCCESS = 0
    FAILURE = 1


# Program name shown in help and messages
PROG_NAME = "dxclient"

# Click settings forwarding every argument, including ones that look like
# options, to the launcher untouched
FORWARD_ALL_CONTEXT_SETTINGS = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "help_option_names": [],
}
