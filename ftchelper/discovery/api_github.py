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

"""GitHub releases installer provider for ftc-helper.

Git for Windows publishes its installers as assets of GitHub releases, so
instead of scraping HTML this provider asks the GitHub API for the latest
release and chooses among its named assets.

Asset selection (see locate_installer_from_assets):

1. An asset whose name contains "64-bit" and ends with .exe/.msi
   (e.g. Git-2.43.0-64-bit.exe)
2. Otherwise any .exe/.msi asset
3. Otherwise NoCandidatesError

Typical asset list for a release:

- Git-2.43.0-32-bit.exe
- Git-2.43.0-64-bit.exe            <- chosen
- MinGit-2.43.0-64-bit.zip
- PortableGit-2.43.0-64-bit.7z.exe

Rate Limits:

- Unauthenticated: 60 requests/hour per IP
- Authenticated: 5000 requests/hour per token
- Set github_token in ~/.ftc-helper.yaml or export GITHUB_TOKEN

Error Handling:

- FetchFailedError: API failures (404 repo/release missing, 403 rate limit)
- MalformedInputError: Response is not a release object
- NoCandidatesError: Release has no installer assets

Example:
    From Python:
        ```python
        from ftchelper.discovery.api_github import GitForWindowsProvider
        from ftchelper.discovery.platforms import Platform

        result = GitForWindowsProvider().find_installer(Platform.WINDOWS, config)
        print(result.filename)  # Git-2.43.0-64-bit.exe
        ```

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ftchelper.exceptions import (
    FetchFailedError,
    MalformedInputError,
    NoCandidatesError,
)
from ftchelper.io import fetch_json, github_headers
from ftchelper.logging import Logger, get_global_logger

from .base import register_provider
from .locator import InstallerResult, ReleaseAsset, locate_installer_from_assets
from .platforms import Platform

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig


def latest_release_url(repo: str) -> str:
    """GitHub API URL of the latest release of owner/name repo."""
    return f"https://api.github.com/repos/{repo}/releases/latest"


def parse_release_assets(release_data: Any) -> list[ReleaseAsset]:
    """Decode the assets of a GitHub release object.

    Assets without a name or a browser_download_url are skipped.

    Args:
        release_data: Decoded JSON of a GitHub release.

    Returns:
        Release assets in API order.

    Raises:
        MalformedInputError: If release_data is not an object or its
            "assets" value is not a list.
    """
    if not isinstance(release_data, dict):
        raise MalformedInputError("GitHub release response is not a JSON object")

    raw_assets = release_data.get("assets", [])
    if not isinstance(raw_assets, list):
        raise MalformedInputError("GitHub release 'assets' field is not a list")

    assets: list[ReleaseAsset] = []
    for raw in raw_assets:
        if not isinstance(raw, dict):
            continue
        name = raw.get("name")
        url = raw.get("browser_download_url")
        if isinstance(name, str) and name and isinstance(url, str) and url:
            assets.append(ReleaseAsset(name=name, url=url))
    return assets


class GitHubReleaseProvider:
    """Base for providers that pick an asset from a repo's latest release."""

    name = ""
    description = ""
    repo = ""
    platforms: tuple[Platform, ...] = (Platform.WINDOWS,)

    def find_installer(
        self,
        platform: Platform,
        config: HelperConfig,
        logger: Logger | None = None,
    ) -> InstallerResult:
        """Query the latest release and pick its installer asset.

        Args:
            platform: Target platform (the asset rules are Windows-only).
            config: Effective configuration; github_token is used when set.
            logger: Optional logger; defaults to the global logger.

        Returns:
            The chosen installer URL and file name.

        Raises:
            FetchFailedError: If the API call fails.
            MalformedInputError: If the response is not a release object.
            NoCandidatesError: If no asset is an installer.
        """
        logger = logger or get_global_logger()
        api_url = latest_release_url(self.repo)

        logger.verbose("DISCOVERY", f"Provider: {self.name} (GitHub releases)")
        logger.verbose("DISCOVERY", f"Repository: {self.repo}")
        if config.github_token:
            logger.verbose("DISCOVERY", "Using authenticated API request")

        try:
            release_data = fetch_json(
                api_url, headers=github_headers(config.github_token), logger=logger
            )
        except FetchFailedError as err:
            if err.status_code == 404:
                raise FetchFailedError(
                    f"Repository {self.repo!r} not found or has no releases",
                    url=api_url,
                    status_code=404,
                ) from err
            if err.status_code == 403:
                raise FetchFailedError(
                    "GitHub API rate limit exceeded. Consider setting GITHUB_TOKEN. "
                    "Status: 403",
                    url=api_url,
                    status_code=403,
                ) from err
            raise

        assets = parse_release_assets(release_data)
        tag_name = release_data.get("tag_name", "(unknown tag)")
        logger.verbose("DISCOVERY", f"Release tag: {tag_name}")
        logger.verbose("DISCOVERY", f"Release has {len(assets)} asset(s)")

        try:
            result = locate_installer_from_assets(assets)
        except NoCandidatesError as err:
            available = ", ".join(a.name for a in assets) or "(none)"
            raise NoCandidatesError(
                f"no suitable {self.description} installer found in release "
                f"{tag_name}. Available assets: {available}"
            ) from err

        logger.verbose("DISCOVERY", f"Download URL: {result.url}")
        return result


class GitForWindowsProvider(GitHubReleaseProvider):
    name = "git_for_windows"
    description = "Git for Windows"
    repo = "git-for-windows/git"


# Register this provider when the module is imported
register_provider(GitForWindowsProvider.name, GitForWindowsProvider)
