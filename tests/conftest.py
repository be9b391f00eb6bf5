"""
Pytest configuration and shared fixtures for ftc-helper tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import zipfile

import pytest

from ftchelper.config import HelperConfig
from ftchelper.exceptions import CommandError
from ftchelper.logging import SilentLogger, set_global_logger
from ftchelper.process import ProcessResult
from ftchelper.project.workspace import TEAMCODE_RELATIVE


class FakeRunner:
    """
    Stand-in for ftchelper.process.run_process.

    Records every call and answers from a table keyed by the joined command
    line ("git --version"). Values may be a ProcessResult or an exception
    instance to raise. Unknown commands succeed with empty output.
    """

    def __init__(self, responses: dict[str, object] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[list[str], Path | None]] = []

    def __call__(
        self,
        name,
        args=(),
        cwd=None,
        *,
        check=False,
        capture=True,
        timeout=None,
        logger=None,
    ) -> ProcessResult:
        argv = [name, *args]
        self.calls.append((argv, cwd))
        outcome = self.responses.get(" ".join(argv), ProcessResult("", "", 0))
        if isinstance(outcome, Exception):
            raise outcome
        if check and outcome.returncode != 0:
            raise CommandError(
                f"{' '.join(argv)} failed", returncode=outcome.returncode, stderr=outcome.stderr
            )
        return outcome

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the process-wide logger so CLI tests do not leak verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Provide an existing, empty projects directory."""
    path = tmp_path / "StudioProjects"
    path.mkdir()
    return path


@pytest.fixture
def config(work_dir: Path) -> HelperConfig:
    """Provide a HelperConfig pointing at the temporary work directory."""
    return HelperConfig(work_dir=work_dir)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


def make_project(work_dir: Path, name: str) -> Path:
    """Create a project directory with a TeamCode tree and return its root."""
    root = work_dir / name
    (root / TEAMCODE_RELATIVE).mkdir(parents=True)
    return root


def make_zip(path: Path, members: Iterable[tuple[str, str]]) -> bytes:
    """Write a zip archive of (name, content) members and return its bytes."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members:
            zf.writestr(name, content)
    return path.read_bytes()


def release_zip_members(top: str) -> list[tuple[str, str]]:
    """Members of a minimal FtcRobotController source archive."""
    teamcode = f"{top}/{TEAMCODE_RELATIVE.as_posix()}"
    return [
        (f"{top}/build.gradle", "// root build"),
        (f"{top}/FtcRobotController/build.gradle", "// controller"),
        (f"{teamcode}/readme.md", "TeamCode"),
    ]
