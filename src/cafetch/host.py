"""Access to the operating system for cafetch resolvers."""

import os
import platform
import subprocess
import sys
from typing import Protocol, TextIO

import psutil

COMMAND_TIMEOUT = 5.0


class SourceUnavailable(OSError):
    """Raised when a host information source cannot be read."""


class Host(Protocol):
    """Capabilities the collector needs from the machine it describes."""

    def open_text(self, path: str) -> TextIO:
        """Open a text file for reading. Raises OSError if unavailable."""
        ...

    def run_command(self, *args: str) -> str:
        """Run a command and return its stdout."""
        ...

    def getenv(self, key: str) -> str | None:
        """Get an environment variable."""
        ...

    def disk_usage(self, path: str) -> tuple[int, int]:
        """Return (total_bytes, free_bytes) for the filesystem holding path."""
        ...

    @property
    def platform(self) -> str:
        """Generic platform identifier, e.g. 'linux'."""
        ...

    @property
    def machine(self) -> str:
        """CPU architecture identifier, e.g. 'x86_64'."""
        ...


class LocalHost:
    """Host backed by the real machine."""

    def __init__(self, command_timeout: float = COMMAND_TIMEOUT) -> None:
        self._command_timeout = command_timeout

    def open_text(self, path: str) -> TextIO:
        return open(path, encoding="utf-8", errors="replace")

    def run_command(self, *args: str) -> str:
        """
        Run a command and return its stdout.

        Raises:
            SourceUnavailable: The command exited with a non-zero status.
            OSError: The command could not be started.
            subprocess.TimeoutExpired: The command ran past the timeout.
        """
        result = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=self._command_timeout,
        )
        if result.returncode != 0:
            raise SourceUnavailable(
                f"{' '.join(args)} exited with status {result.returncode}"
            )
        return result.stdout

    def getenv(self, key: str) -> str | None:
        return os.environ.get(key)

    def disk_usage(self, path: str) -> tuple[int, int]:
        # psutil reads statvfs: total is f_blocks * f_frsize, free is f_bavail * f_frsize
        usage = psutil.disk_usage(path)
        return usage.total, usage.free

    @property
    def platform(self) -> str:
        return sys.platform

    @property
    def machine(self) -> str:
        return platform.machine()
