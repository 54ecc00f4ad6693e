# SPDX-License-Identifier: MIT
"""Build configuration for an external CMake project.

Config collects the settings for one CMake project and drives the whole
build: clear a stale cache, configure, build and install, then read the
link line back out of build.ninja.

Example:
    link_args = (
        Config("openusd", "../bbl-usd")
        .define("BBL_LANGUAGES", "python")
        .build_type("RelWithDebInfo")
        .build()
    )
    ext.library_dirs += link_args.search_dirs
    ext.libraries += link_args.library_names
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from cmakelink.cache import maybe_clear
from cmakelink.cmake import (
    DEFAULT_BUILD_TYPE,
    BuildDescriptor,
    build_command,
    configure_command,
)
from cmakelink.configure.platform import LinkConvention, get_platform
from cmakelink.link.extract import LinkArgs, extract_link_args

if TYPE_CHECKING:
    from cmakelink.util.host import BuildHost

logger = logging.getLogger(__name__)

OUT_DIR_ENV = "CMAKELINK_OUT_DIR"


class Config:
    """Settings for building one CMake project.

    Attributes:
        project_name: Name used for the echo target and default output dir.
        project_path: CMake source directory.
    """

    def __init__(self, project_name: str, path: Path | str) -> None:
        self.project_name = project_name
        self.project_path = Path(path)
        self._defines: list[tuple[str, str]] = []
        self._build_type: str | None = None
        self._out_dir: Path | None = None
        self._cmake = "cmake"
        self._convention: LinkConvention | None = None

    def define(self, key: str, value: object) -> Config:
        """Add a ``-D<key>=<value>`` cache entry to the configure step."""
        self._defines.append((str(key), str(value)))
        return self

    def build_type(self, build_type: str) -> Config:
        """Set CMAKE_BUILD_TYPE (default: Release)."""
        self._build_type = build_type
        return self

    def out_dir(self, path: Path | str) -> Config:
        """Set the output root (install prefix)."""
        self._out_dir = Path(path)
        return self

    def cmake(self, program: str) -> Config:
        """Use a specific cmake executable."""
        self._cmake = program
        return self

    def convention(self, convention: LinkConvention) -> Config:
        """Override the link convention detected from the host platform."""
        self._convention = convention
        return self

    @property
    def defines(self) -> list[tuple[str, str]]:
        return list(self._defines)

    def get_build_type(self) -> str:
        return self._build_type or DEFAULT_BUILD_TYPE

    def get_convention(self) -> LinkConvention:
        if self._convention is not None:
            return self._convention
        return get_platform().link_convention

    def output_root(self) -> Path:
        """Resolve the output root.

        Precedence (highest to lowest):
            1. out_dir() on this Config
            2. CMAKELINK_OUT_DIR environment variable
            3. build/<project_name> under the current directory
        """
        if self._out_dir is not None:
            return self._out_dir
        env_dir = os.environ.get(OUT_DIR_ENV)
        if env_dir:
            return Path(env_dir)
        return Path.cwd() / "build" / self.project_name

    def descriptor(self) -> BuildDescriptor:
        return BuildDescriptor(
            project_name=self.project_name,
            project_path=self.project_path,
            output_root=self.output_root(),
        )

    def build(self, host: BuildHost | None = None) -> LinkArgs:
        """Configure, build and install the project, then extract its link line.

        Args:
            host: Filesystem and process access (defaults to the local machine).

        Returns:
            The libraries and search directories to link against.

        Raises:
            CMakeLinkError: On any failure; nothing here is retried.
        """
        if host is None:
            from cmakelink.util.host import LocalHost

            host = LocalHost()

        descriptor = self.descriptor()
        build_dir = descriptor.build_dir
        host.make_dirs(build_dir)

        maybe_clear(descriptor.project_path, build_dir, host)

        logger.info(
            "configuring %s (%s) in %s",
            self.project_name,
            self.get_build_type(),
            build_dir,
        )
        host.run(
            configure_command(
                descriptor,
                build_type=self.get_build_type(),
                defines=self._defines,
                cmake=self._cmake,
            )
        )
        host.run(build_command(descriptor, cmake=self._cmake))

        return extract_link_args(
            descriptor.output_root,
            self.project_name,
            self.get_convention(),
            host,
        )

    def __repr__(self) -> str:
        return f"Config({self.project_name!r}, {str(self.project_path)!r})"
