# SPDX-License-Identifier: MIT
"""Command-line interface for cmakelink."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from cmakelink.cache import maybe_clear
from cmakelink.config import Config
from cmakelink.configure.platform import LinkConvention, get_platform
from cmakelink.core.errors import CMakeLinkError
from cmakelink.link.extract import LinkArgs, extract_link_args

# Set up logging
logger = logging.getLogger("cmakelink")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def parse_defines(args: list[str]) -> list[tuple[str, str]]:
    """Parse KEY=value define arguments.

    Args:
        args: List of KEY=value strings.

    Returns:
        List of (key, value) pairs, in order.

    Raises:
        ValueError: If an argument has no '=' or an empty key.
    """
    defines: list[tuple[str, str]] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise ValueError(f"invalid define {arg!r} (expected KEY=value)")
        defines.append((key, value))
    return defines


def get_convention(args: argparse.Namespace) -> LinkConvention:
    name = getattr(args, "convention", None)
    if name:
        return LinkConvention.from_name(name)
    return get_platform().link_convention


def print_link_args(
    link_args: LinkArgs, convention: LinkConvention, fmt: str = "flags"
) -> None:
    """Print link arguments in the requested format."""
    if fmt == "json":
        print(json.dumps(link_args.as_dict(), indent=2))
    else:
        for flag in link_args.linker_flags(convention):
            print(flag)


def cmd_build(args: argparse.Namespace) -> int:
    """Configure, build and install a CMake project, then print its link args."""
    setup_logging(args.verbose, args.debug)

    try:
        defines = parse_defines(args.define or [])
    except ValueError as e:
        logger.error("%s", e)
        return 1

    convention = get_convention(args)
    config = Config(args.name, args.source).convention(convention)
    for key, value in defines:
        config.define(key, value)
    if args.build_type:
        config.build_type(args.build_type)
    if args.out_dir:
        config.out_dir(Path(args.out_dir).absolute())
    if args.cmake:
        config.cmake(args.cmake)

    try:
        link_args = config.build()
    except (CMakeLinkError, OSError) as e:
        logger.error("%s", e)
        return 1

    print_link_args(link_args, convention, args.format)
    return 0


def cmd_link_args(args: argparse.Namespace) -> int:
    """Print the link args of an already built CMake project."""
    setup_logging(args.verbose, args.debug)

    convention = get_convention(args)
    try:
        link_args = extract_link_args(args.out_dir, args.name, convention)
    except CMakeLinkError as e:
        logger.error("%s", e)
        return 1

    print_link_args(link_args, convention, args.format)
    return 0


def cmd_check_cache(args: argparse.Namespace) -> int:
    """Remove a CMake binary directory whose cache points at another source tree."""
    setup_logging(args.verbose, args.debug)

    build_dir = Path(args.build_dir)
    try:
        removed = maybe_clear(args.source, build_dir)
    except OSError as e:
        logger.error("Failed to remove %s: %s", build_dir, e)
        return 1

    if removed:
        print(f"Removed stale build directory: {build_dir}")
    else:
        print(f"Build directory is up to date: {build_dir}")
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def add_output_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments controlling how link args are printed."""
    parser.add_argument(
        "--convention",
        choices=[c.value for c in LinkConvention],
        help="Link convention (default: from host platform)",
    )
    parser.add_argument(
        "--format",
        choices=["flags", "json"],
        default="flags",
        help="Output format (default: flags)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the cmakelink CLI."""
    parser = argparse.ArgumentParser(
        prog="cmakelink",
        description="Build a CMake project and recover its link line.",
        epilog="Run 'cmakelink <command> --help' for command-specific help.",
    )
    from cmakelink import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # cmakelink build
    build_parser = subparsers.add_parser(
        "build", help="Configure, build and install a CMake project"
    )
    add_common_args(build_parser)
    add_output_args(build_parser)
    build_parser.add_argument("name", help="Project name of the echo target")
    build_parser.add_argument("source", help="CMake source directory")
    build_parser.add_argument(
        "-D",
        "--define",
        action="append",
        metavar="KEY=VALUE",
        help="CMake cache entry (repeatable)",
    )
    build_parser.add_argument(
        "--build-type", help="CMAKE_BUILD_TYPE (default: Release)"
    )
    build_parser.add_argument(
        "-B", "--out-dir", help="Output root (default: build/<name>)"
    )
    build_parser.add_argument("--cmake", help="cmake executable to use")
    build_parser.set_defaults(func=cmd_build)

    # cmakelink link-args
    link_parser = subparsers.add_parser(
        "link-args", help="Print link args from an existing build"
    )
    add_common_args(link_parser)
    add_output_args(link_parser)
    link_parser.add_argument("out_dir", help="Output root of the CMake build")
    link_parser.add_argument("name", help="Project name of the echo target")
    link_parser.set_defaults(func=cmd_link_args)

    # cmakelink check-cache
    cache_parser = subparsers.add_parser(
        "check-cache", help="Remove a build directory whose source tree moved"
    )
    add_common_args(cache_parser)
    cache_parser.add_argument("source", help="Current CMake source directory")
    cache_parser.add_argument("build_dir", help="CMake binary directory")
    cache_parser.set_defaults(func=cmd_check_cache)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
