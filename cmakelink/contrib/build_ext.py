# SPDX-License-Identifier: MIT
"""setuptools integration.

Build a CMake project while compiling a Python extension and link the
extension against everything the CMake project links against.

Usage in setup.py:
    from setuptools import setup
    from cmakelink.contrib.build_ext import CMakeExtension, build_ext

    setup(
        ext_modules=[
            CMakeExtension(
                "mypkg._native",
                sources=["src/module.c"],
                cmake_project="native",
                cmake_path="native",
                cmake_defines={"NATIVE_PYTHON": "ON"},
            )
        ],
        cmdclass={"build_ext": build_ext},
    )
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from setuptools import Extension
from setuptools.command.build_ext import build_ext as _build_ext

from cmakelink.config import Config

if TYPE_CHECKING:
    from cmakelink.link.extract import LinkArgs

logger = logging.getLogger(__name__)


class CMakeExtension(Extension):
    """An Extension that links against a CMake project.

    Attributes:
        cmake_project: Project name of the CMake echo target.
        cmake_path: CMake source directory.
        cmake_defines: Extra ``-D`` cache entries for the configure step.
        cmake_build_type: CMAKE_BUILD_TYPE, or None for the default.
    """

    def __init__(
        self,
        name: str,
        sources: list[str],
        *,
        cmake_project: str,
        cmake_path: Path | str,
        cmake_defines: dict[str, str] | None = None,
        cmake_build_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, sources, **kwargs)
        self.cmake_project = cmake_project
        self.cmake_path = Path(cmake_path)
        self.cmake_defines = dict(cmake_defines or {})
        self.cmake_build_type = cmake_build_type


def apply_link_args(ext: Extension, link_args: LinkArgs) -> None:
    """Append CMake's search dirs and libraries to an Extension, in order."""
    for d in link_args.search_dirs:
        if d not in ext.library_dirs:
            ext.library_dirs.append(d)
    ext.libraries.extend(link_args.library_names)


class build_ext(_build_ext):
    """build_ext that builds CMakeExtension projects before linking."""

    def cmake_config(self, ext: CMakeExtension) -> Config:
        config = Config(ext.cmake_project, ext.cmake_path)
        out_dir = Path(self.build_temp).absolute() / "cmake" / ext.cmake_project
        config.out_dir(out_dir)
        for key, value in ext.cmake_defines.items():
            config.define(key, value)
        if ext.cmake_build_type:
            config.build_type(ext.cmake_build_type)
        elif self.debug:
            config.build_type("Debug")
        return config

    def build_extension(self, ext: Extension) -> None:
        if isinstance(ext, CMakeExtension):
            logger.info("building CMake project %s", ext.cmake_project)
            apply_link_args(ext, self.cmake_config(ext).build())
        super().build_extension(ext)
