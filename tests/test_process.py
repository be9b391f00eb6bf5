"""
Tests for ftchelper.process module.
"""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from ftchelper.exceptions import CommandError, SpawnError
from ftchelper.process import ProcessResult, run_process, spawn_process


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["git"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestRunProcess:
    """Tests for run_process."""

    def test_captures_output(self, tmp_path):
        with patch(
            "ftchelper.process.subprocess.run",
            return_value=_completed(stdout="git version 2.43.0\n"),
        ) as mock_run:
            result = run_process("git", ["--version"], tmp_path)

        assert result == ProcessResult("git version 2.43.0\n", "", 0)
        assert result.ok
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "--version"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["capture_output"] is True

    def test_nonzero_exit_without_check(self):
        with patch("ftchelper.process.subprocess.run", return_value=_completed(returncode=1)):
            result = run_process("git", ["status"])

        assert not result.ok

    def test_nonzero_exit_with_check(self):
        with patch(
            "ftchelper.process.subprocess.run",
            return_value=_completed(returncode=128, stderr="fatal: not a git repository\n"),
        ):
            with pytest.raises(CommandError, match="not a git repository") as exc_info:
                run_process("git", ["pull"], check=True)

        assert exc_info.value.returncode == 128

    def test_missing_executable(self):
        with patch("ftchelper.process.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(SpawnError, match="could not start git"):
                run_process("git", ["--version"])

    def test_timeout(self):
        with patch(
            "ftchelper.process.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=5),
        ):
            with pytest.raises(SpawnError, match="timed out"):
                run_process("git", ["fetch"], timeout=5)

    def test_streamed_output_is_empty_string(self):
        with patch(
            "ftchelper.process.subprocess.run",
            return_value=_completed(stdout=None, stderr=None),
        ) as mock_run:
            result = run_process("git", ["pull"], capture=False)

        assert result.stdout == ""
        assert mock_run.call_args.kwargs["capture_output"] is False


class TestSpawnProcess:
    """Tests for spawn_process."""

    def test_returns_pid(self, tmp_path):
        proc = MagicMock(pid=4242)
        with patch("ftchelper.process.subprocess.Popen", return_value=proc) as mock_popen:
            pid = spawn_process("android-studio", [str(tmp_path)])

        assert pid == 4242
        assert mock_popen.call_args.args[0] == ["android-studio", str(tmp_path)]

    def test_spawn_failure(self):
        with patch("ftchelper.process.subprocess.Popen", side_effect=PermissionError("denied")):
            with pytest.raises(SpawnError):
                spawn_process("studio.sh")
