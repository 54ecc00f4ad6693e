# SPDX-License-Identifier: MIT
"""Shared fixtures for cmakelink tests."""

from __future__ import annotations

from pathlib import Path

import pytest


class FakeHost:
    """In-memory BuildHost that records what would have happened."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}
        self.canonical: dict[str, Path] = {}
        self.dirs: list[Path] = []
        self.removed: list[Path] = []
        self.commands: list[list[str]] = []
        self.on_run = None

    def read_text(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", str(path)) from None

    def canonicalize(self, path: Path | str) -> Path:
        try:
            return self.canonical[str(path)]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", str(path)) from None

    def make_dirs(self, path: Path) -> None:
        self.dirs.append(Path(path))

    def remove_tree(self, path: Path) -> None:
        path = Path(path)
        self.removed.append(path)
        for f in [f for f in self.files if path in f.parents]:
            del self.files[f]

    def run(self, cmd: list[str]) -> None:
        self.commands.append(list(cmd))
        if self.on_run is not None:
            self.on_run(cmd)


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()
