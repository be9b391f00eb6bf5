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

"""Public API return types for ftc-helper.

Dataclasses returned by the orchestration functions in ftchelper.core and
ftchelper.project. They are frozen so callers cannot mutate results that
the CLI is about to print.

Example:
    Using result types:
        ```python
        from ftchelper.config import load_config
        from ftchelper.core import download_installer

        result = download_installer("bambu_studio", load_config())
        print(result.file_path, result.sha256)
        ```

Note:
    Domain types (InstallerResult, ReleaseAsset, ProductDescriptor) stay
    next to the logic that produces them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DownloadResult:
    """Result from locating and downloading an installer.

    Attributes:
        provider: Installer provider used (e.g., "android_studio").
        platform: Platform the installer was chosen for.
        url: Download URL that was fetched.
        file_path: Path to the downloaded installer.
        sha256: SHA-256 hash of the downloaded file.
    """

    provider: str
    platform: str
    url: str
    file_path: Path
    sha256: str


@dataclass(frozen=True)
class InitResult:
    """Result from creating a project from an FtcRobotController release.

    Attributes:
        project_path: Root of the new project.
        teamcode_path: TeamCode source directory (holds the git repository).
        version: Release tag the project was created from.
        remote_url: Normalized origin URL, or None when no remote was added.
    """

    project_path: Path
    teamcode_path: Path
    version: str
    remote_url: str | None


@dataclass(frozen=True)
class ToolVersions:
    """Installed tool versions for 'ftc-helper tools'.

    A version is None when detection failed; the matching *_error field then
    says why.
    """

    git: str | None
    git_error: str | None
    android_studio: str | None
    android_studio_error: str | None
    android_studio_path: Path | None
