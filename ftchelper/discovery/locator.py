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

"""Installer link extraction and ranking.

This module is the stable interface behind every scraping provider. Given
the text of a download page (or a list of release assets) it extracts
candidate installer URLs and picks the single best one for a platform.

Extraction:

- Regex heuristics only (no HTML parsing). A candidate is any absolute
  http(s) URL ending in an allow-listed installer extension: exe, msi, dmg,
  pkg, AppImage, deb, tar.gz, zip (case-insensitive).
- Candidates are kept in document order. Duplicates are kept too; since
  ranking always takes the first hit, an earlier duplicate wins ties.
- Providers may pass an ordered list of patterns. The first pattern that
  matches anything is used and later patterns are not consulted.

Ranking (case-insensitive, on the URL string):

- windows: ends with .exe/.msi, or contains "windows"
- mac: ends with .dmg/.pkg, or contains "mac"
- linux: ends with .appimage/.deb/.tar.gz, or contains "linux"

The first candidate satisfying the platform rule wins; if none does, the
first candidate overall is returned. Only an empty candidate list is an
error (NoCandidatesError).

Example:
    Pick the macOS build from a scraped page:
        ```python
        from ftchelper.discovery.locator import locate_installer
        from ftchelper.discovery.platforms import Platform

        html = '<a href="https://x.io/App.exe">Win</a><a href="https://x.io/App.dmg">Mac</a>'
        result = locate_installer(html, Platform.MAC)
        # result.url returns: "https://x.io/App.dmg"
        # result.filename returns: "App.dmg"
        ```

Note:
    Scraping is inherently fragile against page redesigns. Keeping every
    provider behind locate_installer() means a smarter extractor can replace
    the regexes later without changing callers.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
import re
from urllib.parse import unquote, urlparse

from ftchelper.exceptions import NoCandidatesError

from .platforms import Platform

# The extension may not run on into another word ("app.exe-notes.html",
# "app.zip.sha256"), but a sentence-ending period is fine.
_TOKEN_END = r"(?![\w\-]|\.\w)"

INSTALLER_LINK_PATTERN = re.compile(
    r"https?://[\w\-./%?=&]+\.(?:exe|msi|dmg|pkg|AppImage|deb|tar\.gz|zip)"
    + _TOKEN_END,
    re.IGNORECASE,
)

_PLATFORM_SUFFIXES: dict[Platform, tuple[str, ...]] = {
    Platform.WINDOWS: (".exe", ".msi"),
    Platform.MAC: (".dmg", ".pkg"),
    Platform.LINUX: (".appimage", ".deb", ".tar.gz"),
}

_PLATFORM_HINTS: dict[Platform, str] = {
    Platform.WINDOWS: "windows",
    Platform.MAC: "mac",
    Platform.LINUX: "linux",
}

# Extensions accepted when choosing among named release assets
INSTALLER_ASSET_EXTENSIONS = (".exe", ".msi")

DEFAULT_FILENAME = "download.bin"


@dataclass(frozen=True)
class ReleaseAsset:
    """A named downloadable file attached to a release.

    Attributes:
        name: Asset file name as published (e.g. "Git-2.43.0-64-bit.exe").
        url: Direct download URL.
    """

    name: str
    url: str


@dataclass(frozen=True)
class InstallerResult:
    """The installer chosen for download.

    Attributes:
        url: Download URL of the best candidate.
        filename: Local file name derived from the URL path.
    """

    url: str
    filename: str


def derive_filename(url: str) -> str:
    """Derive a local file name from the last segment of a URL path.

    The server's naming is kept exactly (no asset-name substitution); query
    strings and fragments are ignored.

    Args:
        url: Download URL.

    Returns:
        The last path segment, or "download.bin" when the path has none.
    """
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or DEFAULT_FILENAME


def extract_candidates(
    page_content: str, patterns: Sequence[re.Pattern[str]] | None = None
) -> list[str]:
    """Extract candidate installer URLs from page content in document order.

    Args:
        page_content: Raw page text (HTML, JSON, anything).
        patterns: Ordered patterns to try. The first one with any match is
            used. Defaults to INSTALLER_LINK_PATTERN.

    Returns:
        Every match of the winning pattern, duplicates included. Empty when
            no pattern matches.
    """
    for pattern in patterns or (INSTALLER_LINK_PATTERN,):
        matches = [m.group(0) for m in pattern.finditer(page_content)]
        if matches:
            return matches
    return []


def matches_platform(candidate: str, platform: Platform) -> bool:
    """Return True if a candidate URL looks like an installer for platform."""
    lowered = candidate.lower()
    return lowered.endswith(_PLATFORM_SUFFIXES[platform]) or (
        _PLATFORM_HINTS[platform] in lowered
    )


def rank_candidates(candidates: Iterable[str], platform: Platform) -> str:
    """Pick the best candidate for platform.

    Args:
        candidates: Candidate URLs in document order.
        platform: Target platform.

    Returns:
        The first platform-preferred candidate, else the first candidate.

    Raises:
        NoCandidatesError: If candidates is empty.
    """
    first: str | None = None
    for candidate in candidates:
        if first is None:
            first = candidate
        if matches_platform(candidate, platform):
            return candidate
    if first is None:
        raise NoCandidatesError("no installer links found")
    return first


def locate_installer(
    page_content: str,
    platform: Platform,
    patterns: Sequence[re.Pattern[str]] | None = None,
) -> InstallerResult:
    """Extract and rank installer links for a target platform.

    Args:
        page_content: Raw page text.
        platform: Target platform.
        patterns: Optional provider-specific extraction patterns, tried in
            order.

    Returns:
        The chosen installer URL and its derived file name.

    Raises:
        NoCandidatesError: If the content contains no installer links.
    """
    candidates = extract_candidates(page_content, patterns)
    if not candidates:
        raise NoCandidatesError("no installer links found in page content")
    url = rank_candidates(candidates, platform)
    return InstallerResult(url=url, filename=derive_filename(url))


def locate_installer_from_assets(assets: Iterable[ReleaseAsset]) -> InstallerResult:
    """Pick an installer from a list of named release assets.

    Preference order:

    1. First asset whose name contains "64-bit" and ends with an installer
       extension (.exe, .msi)
    2. First asset whose name ends with an installer extension

    Matching is case-insensitive. The file name is taken from the URL path,
    not the asset name.

    Args:
        assets: Release assets in API order.

    Returns:
        The chosen installer URL and its derived file name.

    Raises:
        NoCandidatesError: If no asset has an installer extension.

    Example:
        ```python
        assets = [
            ReleaseAsset("Git-2.43.0-32-bit.exe", "https://gh.io/Git-2.43.0-32-bit.exe"),
            ReleaseAsset("Git-2.43.0-64-bit.exe", "https://gh.io/Git-2.43.0-64-bit.exe"),
        ]
        locate_installer_from_assets(assets).filename
        # "Git-2.43.0-64-bit.exe"
        ```
    """
    fallback: ReleaseAsset | None = None
    for asset in assets:
        lowered = asset.name.lower()
        if not lowered.endswith(INSTALLER_ASSET_EXTENSIONS):
            continue
        if "64-bit" in lowered:
            return InstallerResult(url=asset.url, filename=derive_filename(asset.url))
        if fallback is None:
            fallback = asset

    if fallback is None:
        raise NoCandidatesError("no installer assets found in release")
    return InstallerResult(url=fallback.url, filename=derive_filename(fallback.url))
