#!/usr/bin/env python3
"""
Unified error handling for dxlauncher.

Provides a small error hierarchy with categories, an error context record and
a Rich-based handler that renders errors as panels on the shared console.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class ErrorCategory(Enum):
    """Error categories for classification and display."""

    DEPENDENCY = "dependency"
    FILESYSTEM = "filesystem"
    PROCESS = "process"
    STREAM = "stream"
    CONTAINER = "container"


@dataclass
class ErrorContext:
    """Context information attached to an error."""

    operation: str
    phase: Optional[str] = None
    component: Optional[str] = None
    file_path: Optional[str] = None
    command: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


class LauncherError(Exception):
    """Base class for all dxlauncher errors.

    Attributes:
        message (str): Human readable message.
        category (ErrorCategory): Error category.
        context (ErrorContext): Where the error happened.
        recoverable (bool): Whether the launcher can report and carry on.
        suggestions (list): Hints shown to the user.
        cause (Exception): Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        context: Optional[ErrorContext] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context
        self.recoverable = recoverable
        self.suggestions = suggestions
        self.cause = cause


class DependencyError(LauncherError):
    """Container runtime binary missing or not working."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.DEPENDENCY, recoverable=True, **kwargs)


class FilesystemError(LauncherError):
    """Volume directory creation or mounted file removal failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.FILESYSTEM, recoverable=True, **kwargs)


class ProcessError(LauncherError):
    """Child process could not be spawned or waited on."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.PROCESS, recoverable=False, **kwargs)


class StreamError(LauncherError):
    """Reading the child's output failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.STREAM, recoverable=False, **kwargs)


class ContainerExitError(LauncherError):
    """Container run exited with a non-zero status."""

    def __init__(self, message: str, returncode: int, **kwargs):
        super().__init__(message, ErrorCategory.CONTAINER, recoverable=False, **kwargs)
        self.returncode = returncode


# Emoji and title per category, used for panel titles
_CATEGORY_STYLES = {
    ErrorCategory.DEPENDENCY: ("📦", "Dependency Error", "yellow"),
    ErrorCategory.FILESYSTEM: ("📁", "Filesystem Error", "yellow"),
    ErrorCategory.PROCESS: ("⚙️", "Process Error", "red"),
    ErrorCategory.STREAM: ("📡", "Stream Error", "red"),
    ErrorCategory.CONTAINER: ("🐳", "Container Error", "red"),
}


class ErrorHandler:
    """Render errors on a Rich console and log them."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def handle_error(
        self,
        error: BaseException,
        context: Optional[ErrorContext] = None,
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Display an error as a panel.

        Args:
            error: The exception to display.
            context: Optional context, used when the error carries none.
            show_traceback: Print the traceback too. Defaults to verbose mode.
        """
        if show_traceback is None:
            show_traceback = self.verbose

        if isinstance(error, LauncherError):
            emoji, title, style = _CATEGORY_STYLES.get(
                error.category, ("❌", "Error", "red")
            )
            context = error.context or context
            suggestions = error.suggestions
            self.logger.debug(
                "%s: %s (recoverable=%s)", title, error.message, error.recoverable
            )
        else:
            emoji, title, style = "❌", type(error).__name__, "red"
            suggestions = None
            self.logger.debug("Unhandled %s: %s", title, error)

        body = Text(str(error), style="bold")
        if context is not None:
            details = [
                ("Operation", context.operation),
                ("Phase", context.phase),
                ("Component", context.component),
                ("File", context.file_path),
                ("Command", context.command),
            ]
            for label, value in details:
                if value:
                    body.append(f"\n{label}: ", style="dim")
                    body.append(str(value))
        if suggestions:
            body.append("\n\nSuggestions:", style="cyan")
            for suggestion in suggestions:
                body.append(f"\n  • {suggestion}")

        self.console.print(Panel(body, title=f"{emoji} {title}", border_style=style))

        if show_traceback:
            cause = getattr(error, "cause", None)
            if cause is not None:
                self.console.print(f"[dim]Caused by: {type(cause).__name__}: {cause}[/dim]")
            if sys.exc_info()[0] is not None:
                self.console.print_exception()


_error_handler: Optional[ErrorHandler] = None


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """Install the process-wide error handler."""
    global _error_handler
    _error_handler = handler


def get_error_handler() -> Optional[ErrorHandler]:
    """Return the process-wide error handler, if any."""
    return _error_handler


def handle_error(
    error: BaseException,
    context: Optional[ErrorContext] = None,
    show_traceback: Optional[bool] = None,
) -> None:
    """Route an error to the installed handler, or to logging if none is set."""
    if _error_handler is not None:
        _error_handler.handle_error(error, context=context, show_traceback=show_traceback)
    else:
        logging.error("%s", error)


def create_error_context(operation: str, **kwargs) -> ErrorContext:
    """Convenience constructor for ErrorContext."""
    return ErrorContext(operation=operation, **kwargs)
