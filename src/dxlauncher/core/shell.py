#!/usr/bin/env python3
"""
Shell invokers for running a command through the host shell.

Each invoker turns an argument list into an invocation of the host shell
(sh -c on Unix-like systems, cmd /C on Windows). Arguments are quoted for the
target shell, so no argument can inject shell syntax.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import shlex
import subprocess
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .paths import is_windows


# Characters cmd.exe interprets on a command line
CMD_METACHARACTERS = '()%!^"<>&|'


@dataclass(frozen=True)
class Invocation:
    """A program and its argument list.

    Attributes:
        program (str): Program to run.
        args (list): Its arguments.
        command_line (str): Complete process command line, used as is instead
            of encoding argv. Only set for Windows shell invocations.
    """

    program: str
    args: typing.List[str] = field(default_factory=list)
    command_line: typing.Optional[str] = None

    @property
    def argv(self) -> typing.List[str]:
        """Full argument vector, program first."""
        return [self.program, *self.args]

    @property
    def popen_args(self) -> typing.Union[str, typing.List[str]]:
        """What to hand subprocess.Popen."""
        if self.command_line is not None:
            return self.command_line
        return self.argv

    def display(self) -> str:
        """Shell-quoted rendering for logs."""
        if self.command_line is not None:
            return self.command_line
        return shlex.join(self.argv)


class ShellInvoker(ABC):
    """Base class for host shell invokers."""

    SHELL: str = ""
    COMMAND_FLAG: str = ""

    @abstractmethod
    def quote(self, argv: typing.Sequence[str]) -> str:
        """Render an argument vector as a single command line for this shell."""

    def wrap(self, invocation: Invocation) -> Invocation:
        """Wrap an invocation so it runs through the host shell.

        Args:
            invocation: The command to run.

        Returns:
            Invocation of the shell carrying the quoted command line.
        """
        return Invocation(self.SHELL, [self.COMMAND_FLAG, self.quote(invocation.argv)])


class UnixShellInvoker(ShellInvoker):
    """sh -c with POSIX quoting."""

    SHELL = "sh"
    COMMAND_FLAG = "-c"

    def quote(self, argv: typing.Sequence[str]) -> str:
        return shlex.join(argv)


def cmd_escape(line: str) -> str:
    """Caret-escape every cmd.exe metacharacter in a command line.

    Quotes are escaped too, so cmd never enters a quoted span and every
    metacharacter is taken literally. cmd strips the carets before the
    program parses its arguments.
    """
    return "".join("^" + c if c in CMD_METACHARACTERS else c for c in line)


class WindowsShellInvoker(ShellInvoker):
    """cmd /C with MS C runtime quoting and caret escaping."""

    SHELL = "cmd"
    COMMAND_FLAG = "/C"

    def quote(self, argv: typing.Sequence[str]) -> str:
        return cmd_escape(subprocess.list2cmdline(list(argv)))

    def wrap(self, invocation: Invocation) -> Invocation:
        # Popen would re-encode a list with backslash-escaped quotes,
        # which cmd does not understand; pass the finished line instead.
        line = self.quote(invocation.argv)
        return Invocation(
            self.SHELL,
            [self.COMMAND_FLAG, line],
            command_line=f'{self.SHELL} {self.COMMAND_FLAG} "{line}"',
        )


def select_shell_invoker(platform: typing.Optional[str] = None) -> ShellInvoker:
    """Pick the invoker for the host platform."""
    if is_windows(platform):
        return WindowsShellInvoker()
    return UnixShellInvoker()
