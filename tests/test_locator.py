"""
Tests for ftchelper.discovery.locator module.

Tests installer location including:
- Candidate extraction (document order, duplicates, token boundaries)
- Platform ranking and first-candidate fallback
- Release asset selection
- File name derivation
"""

from __future__ import annotations

import re

import pytest

from ftchelper.discovery.locator import (
    ReleaseAsset,
    derive_filename,
    extract_candidates,
    locate_installer,
    locate_installer_from_assets,
    matches_platform,
    rank_candidates,
)
from ftchelper.discovery.platforms import Platform
from ftchelper.exceptions import NoCandidatesError

DOWNLOAD_PAGE = """
<html><body>
  <a href="https://dl.example.com/tool/Tool-1.4.0.dmg">Download for Apple</a>
  <a href="https://dl.example.com/tool/Tool-1.4.0-x64.exe">Download for PC</a>
  <a href="https://dl.example.com/tool/Tool-1.4.0.AppImage">AppImage</a>
</body></html>
"""


class TestExtractCandidates:
    """Tests for extract_candidates."""

    def test_document_order(self):
        """Test that candidates are returned in document order."""
        assert extract_candidates(DOWNLOAD_PAGE) == [
            "https://dl.example.com/tool/Tool-1.4.0.dmg",
            "https://dl.example.com/tool/Tool-1.4.0-x64.exe",
            "https://dl.example.com/tool/Tool-1.4.0.AppImage",
        ]

    def test_duplicates_kept(self):
        """Test that repeated links are not de-duplicated."""
        page = "https://a.example.com/x.zip https://a.example.com/x.zip"
        assert extract_candidates(page) == ["https://a.example.com/x.zip"] * 2

    def test_extension_must_end_token(self):
        """Test that checksum and page links are not mistaken for installers."""
        page = (
            "https://a.example.com/app.zip.sha256 "
            "https://a.example.com/app.exe-notes.html "
            "https://a.example.com/app.deb."
        )
        assert extract_candidates(page) == ["https://a.example.com/app.deb"]

    def test_tar_gz_and_case_insensitive(self):
        """Test multi-part and upper-case extensions."""
        page = "https://a.example.com/app.tar.gz https://a.example.com/SETUP.MSI"
        assert extract_candidates(page) == [
            "https://a.example.com/app.tar.gz",
            "https://a.example.com/SETUP.MSI",
        ]

    def test_non_installer_links_ignored(self):
        """Test that links without installer extensions are skipped."""
        assert extract_candidates('<a href="https://a.example.com/docs.html">') == []

    def test_first_matching_pattern_wins(self):
        """Test that later patterns are only tried when earlier ones find nothing."""
        narrow = re.compile(r"https://a\.example\.com/narrow-\w+\.exe")
        broad = re.compile(r"https://a\.example\.com/\w+\.exe")
        page = "https://a.example.com/other.exe https://a.example.com/narrow-one.exe"

        assert extract_candidates(page, [narrow, broad]) == [
            "https://a.example.com/narrow-one.exe"
        ]
        assert extract_candidates("https://a.example.com/other.exe", [narrow, broad]) == [
            "https://a.example.com/other.exe"
        ]


class TestRanking:
    """Tests for platform ranking."""

    @pytest.mark.parametrize(
        "url, platform",
        [
            ("https://a.example.com/x.EXE", Platform.WINDOWS),
            ("https://a.example.com/x.msi", Platform.WINDOWS),
            ("https://a.example.com/windows/x.zip", Platform.WINDOWS),
            ("https://a.example.com/x.dmg", Platform.MAC),
            ("https://a.example.com/x.pkg", Platform.MAC),
            ("https://a.example.com/x-mac-arm.zip", Platform.MAC),
            ("https://a.example.com/x.AppImage", Platform.LINUX),
            ("https://a.example.com/x.deb", Platform.LINUX),
            ("https://a.example.com/x.tar.gz", Platform.LINUX),
            ("https://a.example.com/Linux/x.zip", Platform.LINUX),
        ],
    )
    def test_matches_platform(self, url, platform):
        assert matches_platform(url, platform)

    def test_zip_without_hint_matches_nothing(self):
        url = "https://a.example.com/x.zip"
        assert not any(matches_platform(url, p) for p in Platform)

    def test_windows_prefers_exe_and_mac_prefers_dmg(self):
        """Test that each platform gets its own installer from the same page."""
        assert locate_installer(DOWNLOAD_PAGE, Platform.WINDOWS).url.endswith("x64.exe")
        assert locate_installer(DOWNLOAD_PAGE, Platform.MAC).url.endswith(".dmg")
        assert locate_installer(DOWNLOAD_PAGE, Platform.LINUX).url.endswith(".AppImage")

    def test_fallback_to_first_candidate(self):
        """Test that without a platform match the first link is returned."""
        page = "https://a.example.com/first.zip https://a.example.com/second.zip"
        for platform in Platform:
            assert locate_installer(page, platform).url == "https://a.example.com/first.zip"

    def test_earlier_duplicate_wins(self):
        candidates = ["https://a.example.com/x.zip", "https://a.example.com/x.zip"]
        assert rank_candidates(candidates, Platform.MAC) is candidates[0]

    def test_empty_content_no_candidates(self):
        """Test that empty content raises NoCandidatesError."""
        with pytest.raises(NoCandidatesError):
            locate_installer("", Platform.WINDOWS)

    def test_empty_candidate_list(self):
        with pytest.raises(NoCandidatesError):
            rank_candidates([], Platform.LINUX)

    def test_result_has_derived_filename(self):
        result = locate_installer(DOWNLOAD_PAGE, Platform.WINDOWS)
        assert result.filename == "Tool-1.4.0-x64.exe"

    def test_repeat_calls_identical(self):
        assert locate_installer(DOWNLOAD_PAGE, Platform.MAC) == locate_installer(
            DOWNLOAD_PAGE, Platform.MAC
        )


class TestAssets:
    """Tests for locate_installer_from_assets."""

    def test_prefers_64_bit_installer(self):
        assets = [
            ReleaseAsset("Git-2.43.0-32-bit.exe", "https://gh.example.com/Git-2.43.0-32-bit.exe"),
            ReleaseAsset("MinGit-2.43.0-64-bit.zip", "https://gh.example.com/MinGit-64-bit.zip"),
            ReleaseAsset("Git-2.43.0-64-bit.exe", "https://gh.example.com/Git-2.43.0-64-bit.exe"),
        ]
        result = locate_installer_from_assets(assets)
        assert result.url == "https://gh.example.com/Git-2.43.0-64-bit.exe"

    def test_falls_back_to_any_installer(self):
        assets = [
            ReleaseAsset("notes.txt", "https://gh.example.com/notes.txt"),
            ReleaseAsset("Setup.msi", "https://gh.example.com/Setup.msi"),
            ReleaseAsset("Other.exe", "https://gh.example.com/Other.exe"),
        ]
        assert locate_installer_from_assets(assets).url == "https://gh.example.com/Setup.msi"

    def test_no_installer_assets(self):
        assets = [ReleaseAsset("MinGit-64-bit.zip", "https://gh.example.com/MinGit.zip")]
        with pytest.raises(NoCandidatesError):
            locate_installer_from_assets(assets)

    def test_filename_comes_from_url(self):
        """Test that the server's file name is used, not the asset label."""
        assets = [ReleaseAsset("Installer 64-bit.exe", "https://gh.example.com/d/Git-64-bit.exe")]
        assert locate_installer_from_assets(assets).filename == "Git-64-bit.exe"


class TestDeriveFilename:
    """Tests for derive_filename."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://a.example.com/path/app.exe", "app.exe"),
            ("https://a.example.com/app.exe?token=abc#frag", "app.exe"),
            ("https://a.example.com/My%20App.dmg", "My App.dmg"),
            ("https://a.example.com/", "download.bin"),
            ("https://a.example.com", "download.bin"),
        ],
    )
    def test_last_path_segment(self, url, expected):
        assert derive_filename(url) == expected
