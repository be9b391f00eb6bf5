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

"""FtcRobotController releases and project creation.

This module lists the FIRST Tech Challenge starter-code releases published
on GitHub and turns one of them into a ready-to-edit project.

Public API:

- list_releases: Tag names of the published releases
- release_archive_url: Source archive URL of a tag
- extract_zip: Unpack an archive without letting members escape the target
- init_project: Download, unpack, flatten and git-initialize a project

Example:
    Create a project from the 10.1 release:

        from ftchelper.config import load_config
        from ftchelper.project import init_project

        result = init_project("v10.1", "robot2025", load_config(),
                              git_url="github.com/team/robot2025.git")
        print(result.teamcode_path)

Note:
    GitHub source archives contain a single top-level directory named
    FtcRobotController-<tag without leading v>. Its contents are moved up so
    the project root is the Android Studio project.
"""

from __future__ import annotations

from pathlib import Path
import shutil
import tempfile
from typing import TYPE_CHECKING
import zipfile

from ftchelper.exceptions import (
    ConfigError,
    FTCHelperError,
    MalformedInputError,
    ProjectError,
)
from ftchelper.io import download_file, fetch_json, github_headers
from ftchelper.logging import Logger, get_global_logger
from ftchelper.process import ProcessRunner, run_process
from ftchelper.results import InitResult

from .git import init_repository
from .workspace import project_path, teamcode_path

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig

FTC_REPO = "FIRST-Tech-Challenge/FtcRobotController"
FTC_RELEASES_API = f"https://api.github.com/repos/{FTC_REPO}/releases"


def release_archive_url(version: str) -> str:
    """Source zip URL of a release tag."""
    return f"https://github.com/{FTC_REPO}/archive/refs/tags/{version}.zip"


def list_releases(config: HelperConfig, logger: Logger | None = None) -> list[str]:
    """Tag names of the FtcRobotController releases, newest first.

    Args:
        config: Effective configuration; github_token is used when set.
        logger: Optional logger; defaults to the global logger.

    Returns:
        Release tag names in API order.

    Raises:
        FetchFailedError: If the API call fails.
        MalformedInputError: If the response is not a list of releases.
    """
    logger = logger or get_global_logger()
    data = fetch_json(
        FTC_RELEASES_API, headers=github_headers(config.github_token), logger=logger
    )
    if not isinstance(data, list):
        raise MalformedInputError("GitHub releases response is not a JSON list")

    tags = [
        release["tag_name"]
        for release in data
        if isinstance(release, dict) and isinstance(release.get("tag_name"), str)
    ]
    logger.verbose("PROJECT", f"Found {len(tags)} release(s)")
    return tags


def extract_zip(archive: Path, dest: Path) -> None:
    """Extract every member of archive into dest.

    Raises:
        ProjectError: If the archive is not a zip file or a member path
            would land outside dest.
    """
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    root = dest.resolve()

    try:
        with zipfile.ZipFile(archive, "r") as zf:
            for member in zf.infolist():
                target = (root / member.filename).resolve()
                if not target.is_relative_to(root):
                    raise ProjectError(f"illegal file path in archive: {member.filename}")
                zf.extract(member, root)
    except zipfile.BadZipFile as err:
        raise ProjectError(f"Failed to extract {archive}: {err}") from err


def _archive_root(extracted: Path, version: str) -> Path | None:
    """Directory whose contents should become the project root."""
    expected = extracted / f"FtcRobotController-{version.removeprefix('v')}"
    if expected.is_dir():
        return expected

    children = list(extracted.iterdir())
    if len(children) == 1 and children[0].is_dir():
        return children[0]
    return None


def _flatten(extracted: Path, version: str, logger: Logger) -> None:
    inner = _archive_root(extracted, version)
    if inner is None:
        logger.verbose("PROJECT", "Archive has no single top-level directory")
        return

    logger.verbose("PROJECT", f"Moving contents of {inner.name} up one level")
    for child in inner.iterdir():
        shutil.move(str(child), str(extracted / child.name))
    inner.rmdir()


def _discard_partial_project(project: Path, created: bool, logger: Logger) -> None:
    """Remove what a failed init left behind so the command can be re-run."""
    logger.verbose("PROJECT", f"Removing incomplete project at {project}")
    if created:
        shutil.rmtree(project, ignore_errors=True)
        return

    # The directory was there (empty) before; keep it, drop its contents
    for child in project.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child, ignore_errors=True)
        else:
            child.unlink(missing_ok=True)


def init_project(
    version: str,
    project_name: str,
    config: HelperConfig,
    git_url: str | None = None,
    *,
    runner: ProcessRunner = run_process,
    logger: Logger | None = None,
) -> InitResult:
    """Create a new project from an FtcRobotController release.

    Steps:

    1. Download the release source archive
    2. Extract it into <work_dir>/<project_name>
    3. Flatten the archive's top-level directory
    4. git init in TeamCode (and add origin when git_url is given)

    Args:
        version: Release tag (e.g., "v10.1").
        project_name: Directory name for the new project.
        config: Effective configuration.
        git_url: Optional remote; https:// is prepended unless it already
            starts with https:// or git@.
        runner: Process runner for git (tests pass a fake).
        logger: Optional logger; defaults to the global logger.

    Returns:
        Paths of the new project and the remote that was configured.

    Raises:
        ConfigError: If project_name is empty.
        ProjectError: If the project directory already has content, the
            archive is unusable, or it has no TeamCode directory.
        FetchFailedError: If the archive download fails.
        SpawnError: If git cannot be started.
        CommandError: If git fails.

    Files written into the project directory are removed again when a step
    after the download fails.
    """
    logger = logger or get_global_logger()

    if not project_name or not project_name.strip():
        raise ConfigError("Project name is required. Use --project flag.")

    project = project_path(config.work_dir, project_name.strip())
    if project.exists() and any(project.iterdir()):
        raise ProjectError(f"Project directory already exists and is not empty: {project}")

    url = release_archive_url(version)
    created = not project.exists()

    with tempfile.TemporaryDirectory(prefix="ftc-helper-") as tmp:
        logger.step(1, 4, f"Downloading {url}...")
        archive, _ = download_file(url, Path(tmp) / f"{version}.zip", logger=logger)

        try:
            logger.step(2, 4, f"Extracting files to {project}...")
            extract_zip(archive, project)

            logger.step(3, 4, "Flattening project layout...")
            _flatten(project, version, logger)

            teamcode = teamcode_path(project)
            if not teamcode.is_dir():
                raise ProjectError(
                    f"TeamCode directory not found in release {version}: {teamcode}"
                )

            logger.step(4, 4, "Initializing git repository...")
            remote = init_repository(teamcode, git_url, runner=runner, logger=logger)
        except (FTCHelperError, OSError):
            _discard_partial_project(project, created, logger)
            raise

    return InitResult(
        project_path=project,
        teamcode_path=teamcode,
        version=version,
        remote_url=remote,
    )
