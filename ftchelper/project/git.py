# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Git operations on a project's TeamCode repository.

All commands run through ftchelper.process so failures surface as
SpawnError (git missing) or CommandError (git exited non-zero). Tests pass a
fake runner with the run_process signature instead of patching subprocess.

Example:
    Sync a project:

        from ftchelper.config import load_config
        from ftchelper.project.git import pull_project, push_project

        config = load_config()
        pull_project("robot2025", config)
        push_project("robot2025", "Tune drive PID", config)

"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ftchelper.logging import Logger, get_global_logger
from ftchelper.process import ProcessRunner, run_process
from ftchelper.versioning import extract_version_from_banner

from .workspace import require_teamcode

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig


def normalize_remote_url(git_url: str) -> str:
    """Prefix bare host/path remotes with https://.

    URLs already starting with https:// or an scp-style git@ remote are
    returned unchanged.

    Example:
        >>> normalize_remote_url("github.com/team/robot.git")
        'https://github.com/team/robot.git'
    """
    git_url = git_url.strip()
    if git_url.startswith(("https://", "git@")):
        return git_url
    return "https://" + git_url


def init_repository(
    path: Path,
    remote_url: str | None = None,
    *,
    runner: ProcessRunner = run_process,
    logger: Logger | None = None,
) -> str | None:
    """Run git init in path and optionally add an origin remote.

    Returns:
        The normalized remote URL, or None when no remote was requested.

    Raises:
        SpawnError: If git cannot be started.
        CommandError: If a git command fails.
    """
    logger = logger or get_global_logger()
    logger.verbose("GIT", f"Initializing repository in {path}")
    runner("git", ["init"], path, check=True, logger=logger)

    if not remote_url:
        return None

    remote = normalize_remote_url(remote_url)
    logger.verbose("GIT", f"Adding remote origin: {remote}")
    runner("git", ["remote", "add", "origin", remote], path, check=True, logger=logger)
    return remote


def pull_project(
    name: str,
    config: HelperConfig,
    *,
    runner: ProcessRunner = run_process,
    logger: Logger | None = None,
) -> None:
    """Run git pull in the project's TeamCode directory.

    Output goes straight to the terminal.

    Raises:
        ProjectError: If the project does not exist.
        SpawnError: If git cannot be started.
        CommandError: If git pull fails.
    """
    logger = logger or get_global_logger()
    path = require_teamcode(config.work_dir, name)
    logger.verbose("GIT", f"git pull in {path}")
    runner("git", ["pull"], path, check=True, capture=False, logger=logger)


def push_project(
    name: str,
    message: str,
    config: HelperConfig,
    *,
    runner: ProcessRunner = run_process,
    logger: Logger | None = None,
) -> None:
    """Stage, commit and push all TeamCode changes.

    Stops at the first failing step; later steps are not run.

    Raises:
        ProjectError: If the project does not exist.
        SpawnError: If git cannot be started.
        CommandError: If staging, committing or pushing fails.
    """
    logger = logger or get_global_logger()
    path = require_teamcode(config.work_dir, name)

    steps = [
        ("Staging changes", ["add", "."]),
        ("Committing changes", ["commit", "-m", message]),
        ("Pushing to remote", ["push"]),
    ]
    for index, (label, args) in enumerate(steps, start=1):
        logger.step(index, len(steps), f"{label}...")
        runner("git", args, path, check=True, capture=False, logger=logger)


def detect_git_version(
    runner: ProcessRunner = run_process, logger: Logger | None = None
) -> str:
    """Installed git version from `git --version`.

    Raises:
        SpawnError: If git is not installed.
        CommandError: If git exits non-zero.
        VersionNotFoundError: If the banner has no version token.
    """
    logger = logger or get_global_logger()
    result = runner("git", ["--version"], check=True, logger=logger)
    version = extract_version_from_banner(result.stdout)
    logger.verbose("VERSION", f"git {version}")
    return version
