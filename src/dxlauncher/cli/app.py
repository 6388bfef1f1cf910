#!/usr/bin/env python3
"""
Main CLI Application for the dxclient launcher

This module contains the Typer app and entry point. The launcher takes no
options of its own: every argument is forwarded to dxclient in the container.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import sys

import typer
from rich.traceback import install

from dxlauncher.core.config import LauncherConfig
from dxlauncher.core.errors import LauncherError, handle_error
from dxlauncher.orchestration.launch_orchestrator import LaunchOrchestrator

from .constants import ExitCode, FORWARD_ALL_CONTEXT_SETTINGS, PROG_NAME
from .utils import console, setup_logging

# Install rich traceback handler for better error displays
install(show_locals=False)

app = typer.Typer(
    name=PROG_NAME,
    help="Run dxclient inside a container, mounting file arguments through a volume.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.command(context_settings=FORWARD_ALL_CONTEXT_SETTINGS)
def launch(ctx: typer.Context) -> None:
    """
    Run dxclient in a container with the given arguments.

    Arguments naming existing host files are rewritten to their path inside
    the mounted volume. Configure with VOLUME_DIR and CONTAINER_RUNTIME.
    """
    setup_logging()

    config = LauncherConfig.from_env()
    orchestrator = LaunchOrchestrator(config, rich_console=console)

    try:
        orchestrator.execute(list(ctx.args))
    except LauncherError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.FAILURE)


def cli_main() -> None:
    """Entry point for the CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Operation cancelled by user[/yellow]")
        sys.exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        console.print_exception()
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    cli_main()
