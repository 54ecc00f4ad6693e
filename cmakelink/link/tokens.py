# SPDX-License-Identifier: MIT
"""Translation of link-line tokens into library names.

CMake writes the libraries of a link step as a flat list of tokens whose
shape depends on the platform:

    UNIX:     -lstdc++  /usr/lib/libfoo.a  /usr/lib/libbar.so.2.1
    WINDOWS:  C:/sdk/lib/foo.lib  kernel32.lib

Each token is classified into one of the variants below and then turned
into a ResolvedLibrary: the directory to search (if the token has one)
plus the bare library name a generic "link against X" directive needs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from cmakelink.configure.platform import LinkConvention
from cmakelink.core.errors import UnknownLibraryFormError

# Applied to the stem minus "lib", e.g. "foo.so.2" from libfoo.so.2.1
_SHARED_OBJECT_RE = re.compile(r"(.*)\.so[.0-9]*|\.a")


@dataclass(frozen=True)
class ResolvedLibrary:
    """One translated link token.

    Attributes:
        search_dir: Directory the library lives in, or None for bare names.
        name: Library name suitable for '-l<name>' or '<name>.lib'.
    """

    search_dir: str | None
    name: str


@dataclass(frozen=True)
class ClassifiedToken:
    """Base class for the recognized token forms."""

    token: str
    stem: str
    search_dir: str | None


@dataclass(frozen=True)
class NamedToken(ClassifiedToken):
    """Base class for the forms that carry a library name."""

    name: str


@dataclass(frozen=True)
class FlagLibrary(NamedToken):
    """A '-l<name>' flag."""


@dataclass(frozen=True)
class StaticArchive(NamedToken):
    """A 'lib<name>.a' archive."""


@dataclass(frozen=True)
class SharedObject(NamedToken):
    """A 'lib<name>.so[.<version>]' shared object."""


@dataclass(frozen=True)
class WindowsLibrary(NamedToken):
    """A '<name>.lib' import or static library."""


@dataclass(frozen=True)
class UnrecognizedToken(ClassifiedToken):
    """Anything else. Never silently dropped."""


def split_token(token: str) -> tuple[str | None, str]:
    """Split a token into its parent directory and file stem.

    Backslashes are treated as path separators. The parent is None when
    the token is a bare filename.

    >>> split_token("/usr/lib/libfoo.so.2")
    ('/usr/lib', 'libfoo.so')
    >>> split_token("-lm")
    (None, '-lm')
    """
    normalized = token.replace("\\", "/")
    head, sep, filename = normalized.rpartition("/")
    parent: str | None = None
    if sep:
        parent = head or "/"
    stem = PurePosixPath(filename).stem if filename else ""
    return parent, stem


def _classify_unix(token: str, stem: str, parent: str | None) -> ClassifiedToken:
    if stem.startswith("-l"):
        return FlagLibrary(token, stem, parent, stem[2:])

    if stem.startswith("lib"):
        remainder = stem[3:]
        if remainder.endswith(".a"):
            return StaticArchive(token, stem, parent, remainder[:-2])
        # The final extension is already gone, so libfoo.a arrives here as
        # "foo" and libfoo.so.2.1 as "foo.so.2".
        match = _SHARED_OBJECT_RE.search(remainder)
        if match is not None and match.group(1) is not None:
            return SharedObject(token, stem, parent, match.group(1))
        return SharedObject(token, stem, parent, remainder)

    return UnrecognizedToken(token, stem, parent)


def classify_token(token: str, convention: LinkConvention) -> ClassifiedToken:
    """Classify a single link-line token for the given convention."""
    parent, stem = split_token(token)
    if convention is LinkConvention.WINDOWS:
        return WindowsLibrary(token, stem, parent, stem)
    return _classify_unix(token, stem, parent)


def resolve_token(token: str, convention: LinkConvention) -> ResolvedLibrary:
    """Translate a link-line token into a ResolvedLibrary.

    Raises:
        UnknownLibraryFormError: If the token is not a known library form,
            or yields an empty name or one containing a path separator.
    """
    classified = classify_token(token, convention)
    if not isinstance(classified, NamedToken):
        raise UnknownLibraryFormError(token, classified.stem)

    name = classified.name
    if not name or "/" in name or "\\" in name:
        raise UnknownLibraryFormError(token, classified.stem)
    return ResolvedLibrary(search_dir=classified.search_dir, name=name)
