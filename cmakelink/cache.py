# SPDX-License-Identifier: MIT
"""Stale CMake cache detection.

CMake records the absolute source directory in CMakeCache.txt as
CMAKE_HOME_DIRECTORY and refuses to reconfigure a binary directory whose
source tree has moved (a fresh temporary checkout, for instance). When
that happens the whole binary directory is removed so the next configure
starts clean. See https://cmake.org/pipermail/cmake/2012-August/051545.html
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmakelink.util.host import BuildHost

logger = logging.getLogger(__name__)

CMAKE_CACHE_FILE = "CMakeCache.txt"
HOME_DIRECTORY_KEY = "CMAKE_HOME_DIRECTORY"


@dataclass(frozen=True)
class CacheRecord:
    """The parts of a CMakeCache.txt we care about.

    Attributes:
        home_directory: Recorded source directory, or None if absent.
    """

    home_directory: str | None = None


def read_cache_record(text: str) -> CacheRecord:
    """Parse CMakeCache.txt contents.

    Lines look like ``CMAKE_HOME_DIRECTORY:INTERNAL=/path/to/src``; the
    value is whatever follows the last ``=``. Only the first matching
    line is used.
    """
    for line in text.splitlines():
        if line.startswith(HOME_DIRECTORY_KEY):
            return CacheRecord(home_directory=line.split("=")[-1])
    return CacheRecord()


def maybe_clear(
    project_path: Path | str,
    build_dir: Path | str,
    host: BuildHost | None = None,
) -> bool:
    """Remove ``build_dir`` if its CMake cache belongs to another source tree.

    A missing or unreadable cache is left alone; CMake will report any
    real problem with it.

    Args:
        project_path: Current source directory of the CMake project.
        build_dir: CMake binary directory holding CMakeCache.txt.
        host: Filesystem access (defaults to the local machine).

    Returns:
        True if the build directory was removed.
    """
    if host is None:
        from cmakelink.util.host import LocalHost

        host = LocalHost()

    build_dir = Path(build_dir)
    cache_file = build_dir / CMAKE_CACHE_FILE
    try:
        text = host.read_text(cache_file)
    except OSError as e:
        logger.debug("no usable cache at %s: %s", cache_file, e)
        return False

    record = read_cache_record(text)
    if record.home_directory is None:
        return False

    # CMake stores canonical paths, so compare canonical paths
    try:
        path = host.canonicalize(project_path)
    except OSError:
        path = Path(project_path)

    # an empty value would canonicalize to the current directory
    if not record.home_directory:
        stale = True
    else:
        try:
            stale = host.canonicalize(record.home_directory) != path
        except OSError:
            stale = True

    if not stale:
        logger.debug("cache in %s matches %s", build_dir, path)
        return False

    logger.info(
        "detected home dir change (%s -> %s), "
        "cleaning out entire build directory %s",
        record.home_directory,
        path,
        build_dir,
    )
    host.remove_tree(build_dir)
    return True
