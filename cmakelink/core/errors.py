# SPDX-License-Identifier: MIT
"""Custom exceptions for cmakelink.

All cmakelink exceptions inherit from CMakeLinkError, which includes
the optional path of the file the error relates to for better error
messages. Every one of them aborts the build step.
"""

from __future__ import annotations

from pathlib import Path


class CMakeLinkError(Exception):
    """Base class for all cmakelink exceptions.

    Attributes:
        message: The error message.
        path: Optional path of the file involved.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class BuildGraphError(CMakeLinkError):
    """The generated build.ninja could not be read.

    Attributes:
        cause: The underlying I/O error, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        cause: OSError | None = None,
    ) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, path)


class LinkLineError(BuildGraphError):
    """An expected marker is missing from build.ninja.

    Attributes:
        marker: The literal text that could not be found.
    """

    def __init__(
        self,
        message: str,
        marker: str,
        path: Path | str | None = None,
    ) -> None:
        self.marker = marker
        super().__init__(message, path)


class UnknownLibraryFormError(CMakeLinkError):
    """A linker token is not a library form we know how to translate.

    Attributes:
        token: The raw token from the link line.
        stem: The token's file stem.
    """

    def __init__(self, token: str, stem: str) -> None:
        self.token = token
        self.stem = stem
        super().__init__(f'unknown lib form "{stem}" from "{token}"')


class CommandError(CMakeLinkError):
    """An external command failed to run or exited unsuccessfully.

    Attributes:
        command: The command line that was run.
        returncode: Exit status, or None if the process never started.
    """

    def __init__(
        self,
        message: str,
        command: list[str],
        returncode: int | None = None,
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(message)


class ToolNotFoundError(CommandError):
    """The external tool is not installed or not on PATH.

    Attributes:
        tool: The name of the program that was not found.
    """

    def __init__(self, command: list[str], cause: OSError | None = None) -> None:
        self.tool = command[0] if command else ""
        detail = "failed to execute command"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(
            f"{detail}\nis `{self.tool}` not installed or not in the path?",
            command,
        )
