#!/usr/bin/env python3
"""Build a Python extension that links against a CMake library.

Run with:
    pip install ./examples/01_setuptools_extension
"""

from setuptools import setup

from cmakelink.contrib.build_ext import CMakeExtension, build_ext

setup(
    name="demo-ext",
    version="0.1.0",
    ext_modules=[
        CMakeExtension(
            "_demo",
            sources=["src/module.c"],
            cmake_project="demo",
            cmake_path="native",
        )
    ],
    cmdclass={"build_ext": build_ext},
)
