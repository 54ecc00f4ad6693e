# SPDX-License-Identifier: MIT
"""Core types for cmakelink."""
