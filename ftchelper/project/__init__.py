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

"""Local FTC project management for ftc-helper.

Modules:

- workspace: Project layout (TeamCode path) and listing
- releases: FtcRobotController releases and project creation
- git: TeamCode repository setup, pull and push
- studio: Android Studio lookup, version detection and launching
"""

from .git import (
    detect_git_version,
    init_repository,
    normalize_remote_url,
    pull_project,
    push_project,
)
from .releases import extract_zip, init_project, list_releases, release_archive_url
from .studio import (
    detect_android_studio_version,
    find_studio_executable,
    launch_studio,
)
from .workspace import (
    TEAMCODE_RELATIVE,
    list_projects,
    project_path,
    require_teamcode,
    teamcode_path,
)

__all__ = [
    "TEAMCODE_RELATIVE",
    "detect_android_studio_version",
    "detect_git_version",
    "extract_zip",
    "find_studio_executable",
    "init_project",
    "init_repository",
    "launch_studio",
    "list_projects",
    "list_releases",
    "normalize_remote_url",
    "project_path",
    "pull_project",
    "push_project",
    "release_archive_url",
    "require_teamcode",
    "teamcode_path",
]
