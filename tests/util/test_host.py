# SPDX-License-Identifier: MIT
"""Tests for cmakelink.util.host."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cmakelink.core.errors import CommandError, ToolNotFoundError
from cmakelink.util.host import BuildHost, LocalHost, format_command, run


class TestRun:
    """Tests for run."""

    def test_success(self) -> None:
        run([sys.executable, "-c", "pass"])

    def test_nonzero_exit(self) -> None:
        cmd = [sys.executable, "-c", "raise SystemExit(3)"]
        with pytest.raises(CommandError) as exc_info:
            run(cmd)
        assert exc_info.value.returncode == 3
        assert exc_info.value.command == cmd
        assert "exit status 3" in str(exc_info.value)

    def test_missing_program(self) -> None:
        with pytest.raises(ToolNotFoundError) as exc_info:
            run(["cmakelink-no-such-program-xyz", "--version"])
        assert exc_info.value.tool == "cmakelink-no-such-program-xyz"
        assert exc_info.value.returncode is None
        assert "not installed or not in the path" in str(exc_info.value)

    def test_other_os_error(self) -> None:
        with patch(
            "cmakelink.util.host.subprocess.run",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(CommandError) as exc_info:
                run(["cmake", "--version"])
        assert not isinstance(exc_info.value, ToolNotFoundError)
        assert "denied" in str(exc_info.value)

    def test_logs_command(self, caplog: pytest.LogCaptureFixture) -> None:
        result = MagicMock(returncode=0)
        with patch("cmakelink.util.host.subprocess.run", return_value=result) as m:
            with caplog.at_level("INFO", logger="cmakelink.util.host"):
                run(["cmake", "--build", "out dir"])
        m.assert_called_once_with(["cmake", "--build", "out dir"])
        assert "running cmake --build 'out dir'" in caplog.text

    def test_format_command(self) -> None:
        assert format_command(["a", "b c"]) == "a 'b c'"


class TestLocalHost:
    """Tests for LocalHost."""

    def test_is_build_host(self) -> None:
        assert isinstance(LocalHost(), BuildHost)

    def test_filesystem_operations(self, tmp_path: Path) -> None:
        host = LocalHost()
        d = tmp_path / "a" / "b"
        host.make_dirs(d)
        host.make_dirs(d)
        (d / "f.txt").write_text("hello")

        assert (d / "f.txt").exists()
        assert host.read_text(d / "f.txt") == "hello"
        assert host.canonicalize(d / ".." / "b") == d.resolve()

        host.remove_tree(tmp_path / "a")
        assert not d.exists()

    def test_canonicalize_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            LocalHost().canonicalize(tmp_path / "missing")

    def test_canonicalize_empty_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(OSError):
            LocalHost().canonicalize("")

    def test_canonicalize_symlink_loop_raises(self, tmp_path: Path) -> None:
        loop = tmp_path / "loop"
        try:
            loop.symlink_to(loop)
        except OSError:
            pytest.skip("symlinks not permitted")
        with pytest.raises(OSError):
            LocalHost().canonicalize(loop)

    def test_canonicalize_runtime_error_becomes_os_error(self) -> None:
        with patch(
            "cmakelink.util.host.Path.resolve",
            side_effect=RuntimeError("Symlink loop from '/x'"),
        ):
            with pytest.raises(OSError, match="Symlink loop"):
                LocalHost().canonicalize("/x")

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            LocalHost().read_text(tmp_path / "missing")

    def test_run_delegates(self) -> None:
        with patch("cmakelink.util.host.run") as mock_run:
            LocalHost().run(["cmake"])
        mock_run.assert_called_once_with(["cmake"])


def test_subprocess_is_not_shell() -> None:
    """Arguments with spaces stay single tokens."""
    completed = subprocess.CompletedProcess(args=[], returncode=0)
    with patch("cmakelink.util.host.subprocess.run", return_value=completed) as m:
        run(["cmake", "-DNAME=a b"])
    assert m.call_args[0][0] == ["cmake", "-DNAME=a b"]
