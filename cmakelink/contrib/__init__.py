# SPDX-License-Identifier: MIT
"""cmakelink contributed modules.

Integrations with host build systems that ship with cmakelink.

Available modules:
    - build_ext: setuptools Extension and build_ext command
"""
