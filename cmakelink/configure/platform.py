# SPDX-License-Identifier: MIT
"""Platform detection for cmakelink.

The host platform decides which link convention is used to translate
linker tokens into library names. Detection happens once, at the edge
(Config or the CLI); everything below that takes an explicit
LinkConvention so it can be exercised for either platform on any host.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class LinkConvention(Enum):
    """How libraries appear on a link line."""

    UNIX = "unix"
    WINDOWS = "windows"

    @classmethod
    def from_name(cls, name: str) -> LinkConvention:
        """Look up a convention by its (case-insensitive) name.

        Raises:
            ValueError: If the name is not a known convention.
        """
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(c.value for c in cls)
            raise ValueError(
                f"unknown link convention {name!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class Platform:
    """Information about the host platform.

    Attributes:
        os: Operating system name ('linux', 'darwin', 'windows', ...).
    """

    os: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def link_convention(self) -> LinkConvention:
        """The convention CMake uses for link lines on this platform."""
        return LinkConvention.WINDOWS if self.is_windows else LinkConvention.UNIX


@lru_cache(maxsize=1)
def get_platform() -> Platform:
    """Detect the host platform (cached)."""
    if sys.platform == "win32":
        os_name = "windows"
    elif sys.platform.startswith("linux"):
        os_name = "linux"
    else:
        os_name = sys.platform
    return Platform(os=os_name)
