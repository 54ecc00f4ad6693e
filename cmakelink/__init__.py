# SPDX-License-Identifier: MIT
"""
cmakelink: drive a CMake project from a Python package build.

cmakelink configures, builds and installs an external CMake project with
the Ninja generator, then recovers the project's link line from the
generated build.ninja so the host package can link against the same
libraries.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
# These imports must be after __version__ is defined but we use noqa to allow it
from cmakelink.cache import maybe_clear  # noqa: E402
from cmakelink.config import Config  # noqa: E402
from cmakelink.configure.platform import LinkConvention, get_platform  # noqa: E402
from cmakelink.core.errors import CMakeLinkError  # noqa: E402
from cmakelink.link.extract import LinkArgs, extract_link_args  # noqa: E402
from cmakelink.link.tokens import ResolvedLibrary, resolve_token  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Build driver
    "Config",
    "maybe_clear",
    # Link line
    "LinkArgs",
    "ResolvedLibrary",
    "extract_link_args",
    "resolve_token",
    # Platform
    "LinkConvention",
    "get_platform",
    # Errors
    "CMakeLinkError",
]
