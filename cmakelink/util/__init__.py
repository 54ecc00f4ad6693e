# SPDX-License-Identifier: MIT
"""Filesystem and process helpers."""
