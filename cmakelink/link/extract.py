# SPDX-License-Identifier: MIT
"""Extraction of the link line from a CMake-generated build.ninja.

The CMake project is expected to register an echo target named
``<project>-link-libraries.txt`` built with the ECHO_EXECUTABLE_LINKER
rule. Ninja lists that rule's link libraries as implicit dependencies,
so in build.ninja they sit between ``| `` and ``||`` on the build line:

    build demo-link-libraries.txt: ECHO_EXECUTABLE_LINKER main.o | -ldemo /usr/lib/libz.so.1 || cmake_object_order_depends

Only this one line is needed, so the file is searched as plain text
rather than parsed as ninja.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cmakelink.configure.platform import LinkConvention
from cmakelink.core.errors import BuildGraphError, LinkLineError
from cmakelink.link.tokens import ResolvedLibrary, resolve_token

if TYPE_CHECKING:
    from cmakelink.util.host import BuildHost

logger = logging.getLogger(__name__)

BUILD_NINJA = "build.ninja"
ARGS_START = "| "
ARGS_END = "||"


def echo_target_marker(project_name: str) -> str:
    """Return the build statement that starts the echo target."""
    return f"build {project_name}-link-libraries.txt: ECHO_EXECUTABLE_LINKER"


def find_link_line(
    text: str,
    project_name: str,
    source: Path | str | None = None,
) -> str:
    """Find the raw linker arguments of the echo target in build.ninja text.

    Args:
        text: Contents of build.ninja.
        project_name: Project whose echo target to look for.
        source: Path of the file, used in error messages.

    Returns:
        The text between the ``| `` and ``||`` markers, with ninja's
        escaped drive-letter colons (``C$:``) unescaped.

    Raises:
        LinkLineError: If any of the three markers is missing.
    """
    marker = echo_target_marker(project_name)
    index = text.find(marker)
    if index < 0:
        raise LinkLineError("could not find echo target", marker, source)
    rest = text[index:]

    index = rest.find(ARGS_START)
    if index < 0:
        raise LinkLineError(
            "could not find beginning of linker args", ARGS_START, source
        )
    rest = rest[index + len(ARGS_START) :]

    end = rest.find(ARGS_END)
    if end < 0:
        raise LinkLineError("could not find end of linker args", ARGS_END, source)

    return rest[:end].replace("$:", ":")


def resolve_link_line(line: str, convention: LinkConvention) -> list[ResolvedLibrary]:
    """Translate every token of a link line, preserving order."""
    return [resolve_token(token, convention) for token in line.split()]


@dataclass
class LinkArgs:
    """Linker inputs recovered from a CMake build.

    Attributes:
        build_dir: The CMake binary directory (always searched first).
        libraries: Translated tokens in link-line order.
    """

    build_dir: Path
    libraries: list[ResolvedLibrary] = field(default_factory=list)

    @property
    def search_dirs(self) -> list[str]:
        """Library search directories, build dir first, without repeats."""
        dirs: list[str] = []
        for d in [str(self.build_dir)] + [
            lib.search_dir for lib in self.libraries if lib.search_dir
        ]:
            if d not in dirs:
                dirs.append(d)
        return dirs

    @property
    def library_names(self) -> list[str]:
        """Library names in link order. Repeats are kept on purpose."""
        return [lib.name for lib in self.libraries]

    def linker_flags(self, convention: LinkConvention) -> list[str]:
        """Render search paths and libraries as linker driver flags.

        UNIX produces ``-L<dir>`` and ``-l<name>``; WINDOWS produces
        ``/LIBPATH:<dir>`` and ``<name>.lib``.
        """
        if convention is LinkConvention.WINDOWS:
            return [f"/LIBPATH:{d}" for d in self.search_dirs] + [
                f"{name}.lib" for name in self.library_names
            ]
        return [f"-L{d}" for d in self.search_dirs] + [
            f"-l{name}" for name in self.library_names
        ]

    def as_dict(self) -> dict[str, Any]:
        return {
            "build_dir": str(self.build_dir),
            "search_dirs": self.search_dirs,
            "libraries": self.library_names,
        }


def extract_link_args(
    output_root: Path | str,
    project_name: str,
    convention: LinkConvention,
    host: BuildHost | None = None,
) -> LinkArgs:
    """Read ``<output_root>/build/build.ninja`` and translate its link line.

    Args:
        output_root: Install prefix the CMake build was configured with.
        project_name: Project whose echo target holds the link line.
        convention: How to interpret library tokens.
        host: Filesystem access (defaults to the local machine).

    Raises:
        BuildGraphError: If build.ninja cannot be read.
        LinkLineError: If the echo target or its markers are missing.
        UnknownLibraryFormError: If a token cannot be translated.
    """
    if host is None:
        from cmakelink.util.host import LocalHost

        host = LocalHost()

    build_dir = Path(output_root) / "build"
    build_ninja = build_dir / BUILD_NINJA
    try:
        text = host.read_text(build_ninja)
    except OSError as e:
        raise BuildGraphError("could not read", build_ninja, cause=e) from e

    line = find_link_line(text, project_name, build_ninja)
    logger.debug("link line for %s: %s", project_name, line.strip())

    link_args = LinkArgs(build_dir, resolve_link_line(line, convention))
    for lib in link_args.libraries:
        logger.debug("  %s (search dir: %s)", lib.name, lib.search_dir)
    return link_args
