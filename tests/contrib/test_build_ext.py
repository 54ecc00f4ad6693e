# SPDX-License-Identifier: MIT
"""Tests for cmakelink.contrib.build_ext."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from setuptools import Distribution, Extension

from cmakelink.contrib.build_ext import CMakeExtension, apply_link_args, build_ext
from cmakelink.link.extract import LinkArgs
from cmakelink.link.tokens import ResolvedLibrary


def make_link_args() -> LinkArgs:
    return LinkArgs(
        Path("/out/build"),
        [
            ResolvedLibrary(None, "demo"),
            ResolvedLibrary("/usr/lib", "other"),
            ResolvedLibrary(None, "demo"),
        ],
    )


class TestApplyLinkArgs:
    """Tests for apply_link_args."""

    def test_appends_in_order(self) -> None:
        ext = Extension(
            "pkg._ext", ["m.c"], library_dirs=["/usr/lib"], libraries=["m"]
        )

        apply_link_args(ext, make_link_args())

        assert ext.library_dirs == ["/usr/lib", str(Path("/out/build"))]
        assert ext.libraries == ["m", "demo", "other", "demo"]


class TestCMakeExtension:
    """Tests for CMakeExtension."""

    def test_attributes(self) -> None:
        ext = CMakeExtension(
            "pkg._ext",
            ["m.c"],
            cmake_project="demo",
            cmake_path="native",
            cmake_defines={"A": "1"},
        )
        assert ext.cmake_project == "demo"
        assert ext.cmake_path == Path("native")
        assert ext.cmake_defines == {"A": "1"}
        assert ext.cmake_build_type is None


class TestBuildExt:
    """Tests for the build_ext command."""

    def make_command(self, tmp_path: Path, ext: Extension) -> build_ext:
        dist = Distribution({"name": "pkg", "ext_modules": [ext]})
        cmd = build_ext(dist)
        cmd.build_temp = str(tmp_path / "temp")
        cmd.debug = False
        return cmd

    def test_cmake_config(self, tmp_path: Path) -> None:
        ext = CMakeExtension(
            "pkg._ext",
            ["m.c"],
            cmake_project="demo",
            cmake_path=tmp_path / "native",
            cmake_defines={"A": "1"},
            cmake_build_type="MinSizeRel",
        )
        config = self.make_command(tmp_path, ext).cmake_config(ext)

        assert config.project_name == "demo"
        assert config.defines == [("A", "1")]
        assert config.get_build_type() == "MinSizeRel"
        assert config.output_root() == tmp_path / "temp" / "cmake" / "demo"

    def test_debug_build_type(self, tmp_path: Path) -> None:
        ext = CMakeExtension(
            "pkg._ext", ["m.c"], cmake_project="demo", cmake_path="native"
        )
        cmd = self.make_command(tmp_path, ext)
        cmd.debug = True
        assert cmd.cmake_config(ext).get_build_type() == "Debug"

    def test_build_extension_links_cmake_project(self, tmp_path: Path) -> None:
        ext = CMakeExtension(
            "pkg._ext", ["m.c"], cmake_project="demo", cmake_path="native"
        )
        cmd = self.make_command(tmp_path, ext)

        with (
            patch(
                "cmakelink.contrib.build_ext.Config.build",
                return_value=make_link_args(),
            ) as build,
            patch("setuptools.command.build_ext.build_ext.build_extension") as base,
        ):
            cmd.build_extension(ext)

        build.assert_called_once_with()
        base.assert_called_once_with(ext)
        assert ext.libraries == ["demo", "other", "demo"]

    def test_plain_extension_skips_cmake(self, tmp_path: Path) -> None:
        ext = Extension("pkg._plain", ["p.c"])
        cmd = self.make_command(tmp_path, ext)

        with (
            patch("cmakelink.contrib.build_ext.Config.build") as build,
            patch("setuptools.command.build_ext.build_ext.build_extension") as base,
        ):
            cmd.build_extension(ext)

        build.assert_not_called()
        base.assert_called_once_with(ext)
