# SPDX-License-Identifier: MIT
"""CMake command lines.

The project is always configured with the Ninja generator, since the
link line is recovered from the generated build.ninja.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

GENERATOR = "Ninja"
DEFAULT_BUILD_TYPE = "Release"


@dataclass(frozen=True)
class BuildDescriptor:
    """One external CMake build.

    Attributes:
        project_name: Name of the echo target's project.
        project_path: CMake source directory.
        output_root: Install prefix; the binary directory is ``build`` below it.
    """

    project_name: str
    project_path: Path
    output_root: Path

    @property
    def build_dir(self) -> Path:
        return self.output_root / "build"


def configure_command(
    descriptor: BuildDescriptor,
    build_type: str = DEFAULT_BUILD_TYPE,
    defines: list[tuple[str, str]] | None = None,
    cmake: str = "cmake",
) -> list[str]:
    """Build the ``cmake`` configure command for a descriptor."""
    cmd = [
        cmake,
        "-G",
        GENERATOR,
        f"-DCMAKE_BUILD_TYPE={build_type}",
        "-S",
        str(descriptor.project_path),
        "-B",
        str(descriptor.build_dir),
        f"-DCMAKE_INSTALL_PREFIX={descriptor.output_root}",
    ]
    for key, value in defines or []:
        cmd.append(f"-D{key}={value}")
    return cmd


def build_command(descriptor: BuildDescriptor, cmake: str = "cmake") -> list[str]:
    """Build the ``cmake --build`` command that builds and installs."""
    return [cmake, "--build", str(descriptor.build_dir), "--target", "install"]
