# SPDX-License-Identifier: MIT
"""Effectful collaborators for cmakelink.

Everything that touches the filesystem or spawns a process goes through
a BuildHost, so the parsing and translation code stays pure and can be
tested against a fake host.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from cmakelink.core.errors import CommandError, ToolNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class BuildHost(Protocol):
    """Protocol for the filesystem and process operations cmakelink needs."""

    def read_text(self, path: Path) -> str:
        """Read a text file. Raises OSError on failure."""
        ...

    def canonicalize(self, path: Path | str) -> Path:
        """Resolve symlinks and relative segments. Raises OSError if missing."""
        ...

    def make_dirs(self, path: Path) -> None:
        """Create a directory and its parents if needed."""
        ...

    def remove_tree(self, path: Path) -> None:
        """Recursively delete a directory."""
        ...

    def run(self, cmd: list[str]) -> None:
        """Run a command to completion, raising CommandError on failure."""
        ...


class LocalHost:
    """BuildHost backed by the local filesystem and subprocess."""

    def read_text(self, path: Path) -> str:
        # CMake does not promise UTF-8 paths in its outputs
        return Path(path).read_text(encoding="utf-8", errors="replace")

    def canonicalize(self, path: Path | str) -> Path:
        # Path("") would resolve to the current directory
        if not str(path):
            raise FileNotFoundError(2, "No such file or directory", "")
        try:
            return Path(path).resolve(strict=True)
        except RuntimeError as e:
            # symlink loops on Python 3.11 and 3.12
            raise OSError(str(e)) from e

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path)

    def run(self, cmd: list[str]) -> None:
        run(cmd)

    def __repr__(self) -> str:
        return "LocalHost()"


def format_command(cmd: list[str]) -> str:
    """Format a command for log and error messages."""
    return " ".join(shlex.quote(arg) for arg in cmd)


def run(cmd: list[str]) -> None:
    """Run a command, waiting for it to finish.

    Args:
        cmd: Program and arguments.

    Raises:
        ToolNotFoundError: If the program could not be found.
        CommandError: If the program could not be started or exited
            with a non-zero status.
    """
    logger.info("running %s", format_command(cmd))
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError as e:
        raise ToolNotFoundError(cmd, e) from e
    except OSError as e:
        raise CommandError(
            f"failed to execute command: {format_command(cmd)}: {e}", cmd
        ) from e

    if result.returncode != 0:
        raise CommandError(
            "command did not execute successfully, got: "
            f"exit status {result.returncode}: {format_command(cmd)}",
            cmd,
            returncode=result.returncode,
        )
