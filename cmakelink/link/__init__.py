# SPDX-License-Identifier: MIT
"""Link-line extraction from CMake-generated build.ninja files."""
