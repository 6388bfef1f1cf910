#!/usr/bin/env python3
"""Module to run console commands.

This module provides a class to run console commands, either capturing their
output or relaying it live line by line.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import logging
import subprocess
import sys
import threading
import typing

# user-defined modules
from dxlauncher.core.errors import ProcessError, StreamError, create_error_context
from dxlauncher.core.shell import Invocation


logger = logging.getLogger(__name__)


class Console:
    """Class to run console commands.

    Attributes:
        shellVerbose (bool): The shell verbose flag.
        out (TextIO): Stream the relayed output is written to.
    """
    def __init__(
            self,
            shellVerbose: bool=True,
            out: typing.Optional[typing.TextIO]=None,
        ) -> None:
        """Constructor of the Console class.

        Args:
            shellVerbose (bool): The shell verbose flag.
            out (TextIO): Output stream. Defaults to sys.stdout at write time.
        """
        self.shellVerbose = shellVerbose
        self.out = out
        self._print_lock = threading.Lock()

    def _write(self, text: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        with self._print_lock:
            out.write(text)
            out.flush()

    def sh(
            self,
            command: Invocation,
            timeout: int=60,
            secret: bool=False,
        ) -> str:
        """Run a command and collect its output.

        Args:
            command (Invocation): The command to run.
            timeout (int): The timeout in seconds.
            secret (bool): The flag to hide the command.

        Returns:
            str: The combined stdout and stderr of the command.

        Raises:
            RuntimeError: If the command fails or times out.
            OSError: If the program cannot be started.
        """
        if self.shellVerbose and not secret:
            self._write("> " + command.display() + "\n")

        # Run in BINARY mode to handle UTF-8 safely
        proc = subprocess.Popen(
            command.popen_args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )

        try:
            raw_outs, _ = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            proc.kill()
            proc.communicate()
            raise RuntimeError("Console script timeout") from exc
        outs = raw_outs.decode("utf-8", errors="replace")

        if proc.returncode != 0:
            shown = "<secret>" if secret else command.display()
            raise RuntimeError(
                "Subprocess '" + shown + "' failed with exit code " + str(proc.returncode)
            )

        return outs.strip()

    def _relay(
            self,
            stream: typing.BinaryIO,
            name: str,
            errors: typing.List[BaseException],
        ) -> None:
        """Print every line of a child stream until EOF."""
        try:
            for raw_line in iter(stream.readline, b""):
                line = raw_line.decode("utf-8", errors="replace")
                self._write(line.rstrip("\r\n") + "\n")
        except (OSError, ValueError) as exc:
            errors.append(StreamError(
                f"Failed to read {name.upper()}: {exc}",
                context=create_error_context("relay_output", phase=name, component="Console"),
                cause=exc,
            ))
        finally:
            stream.close()

    def stream(self, command: Invocation) -> int:
        """Run a command and relay its stdout and stderr live.

        Both streams are drained concurrently, one reader thread each, so a
        child that fills its stderr pipe cannot block while stdout is read.
        Lines of the two streams may interleave in any order. The call blocks
        until the child exits; there is no timeout.

        Args:
            command (Invocation): The command to run.

        Returns:
            int: The exit status of the command.

        Raises:
            ProcessError: If the command cannot be started.
            StreamError: If reading either stream fails.
        """
        if self.shellVerbose:
            self._write("> " + command.display() + "\n")

        try:
            proc = subprocess.Popen(
                command.popen_args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessError(
                f"Failed to execute command: {exc}",
                context=create_error_context(
                    "spawn", component="Console", command=command.display()
                ),
                cause=exc,
            ) from exc

        errors: typing.List[BaseException] = []
        readers = [
            threading.Thread(
                target=self._relay,
                args=(proc.stdout, "stdout", errors),
                name="relay-stdout",
                daemon=True,
            ),
            threading.Thread(
                target=self._relay,
                args=(proc.stderr, "stderr", errors),
                name="relay-stderr",
                daemon=True,
            ),
        ]
        for reader in readers:
            reader.start()
        for reader in readers:
            reader.join()

        returncode = proc.wait()
        logger.debug("Command exited with status %s", returncode)

        if errors:
            raise errors[0]
        return returncode
