"""Web scraping installer providers for ftc-helper.

These providers fetch a vendor's download page, extract installer links
from the raw text with regex heuristics and rank them for the target
platform. No HTML parsing is involved, so a page redesign can break a
provider; when that happens only the page URL or the provider's link
patterns need updating.

Providers:

- **android_studio**: https://developer.android.com/studio. Tries a narrow
  pattern first (file names like android-studio-2023.1.1.15-windows.msi),
  then a broad one (anything under .../android/studio/...). On Windows an
  .msi is preferred over every other link, and .zip archives count as
  Windows or Linux downloads.
- **bambu_studio**: https://bambulab.com/en-us/download/studio, default
  installer pattern.
- **rev_hardware_client**: https://docs.revrobotics.com/rev-hardware-client/gs/install.
  The client ships for Windows only.

Error Handling:

- FetchFailedError: Page download failures (status code kept on the error)
- NoCandidatesError: The page contains no installer links
- Errors are chained with 'from err' for better debugging

Example:
    From Python:

        from ftchelper.discovery import get_provider
        from ftchelper.discovery.platforms import Platform

        provider = get_provider("android_studio")
        result = provider.find_installer(Platform.LINUX, config)
        print(result.url)       # https://.../android-studio-2023.1.1.28-linux.tar.gz
        print(result.filename)  # android-studio-2023.1.1.28-linux.tar.gz

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ftchelper.exceptions import NoCandidatesError
from ftchelper.io import fetch_text
from ftchelper.logging import Logger, get_global_logger

from .base import register_provider
from .locator import InstallerResult, derive_filename, extract_candidates, rank_candidates
from .platforms import Platform

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig

_STUDIO_EXTENSIONS = r"\.(?:exe|msi|dmg|tar\.gz|zip)(?![\w\-]|\.\w)"

ANDROID_STUDIO_PATTERNS = (
    re.compile(
        r"https?://[\w\-./]+android-studio[\w\-.]*(?:windows|mac|mac-arm|linux)[\w\-./]*"
        + _STUDIO_EXTENSIONS,
        re.IGNORECASE,
    ),
    re.compile(r"https?://[\w\-./]+android/studio[\w\-./]+" + _STUDIO_EXTENSIONS, re.IGNORECASE),
)

REV_PATTERNS = (
    re.compile(
        r"https?://[\w\-./]+\.(?:exe|msi|dmg|zip|tar\.gz)(?![\w\-]|\.\w)", re.IGNORECASE
    ),
)


class ScrapeProvider:
    """Base for providers that scrape a single download page.

    Subclasses set the class attributes; find_installer() does the rest.

    Attributes:
        name: Registry name.
        description: Product name for CLI output.
        page_url: Download page to scrape.
        platforms: Platforms the vendor publishes installers for.
        link_patterns: Extraction patterns tried in order, or None for the
            default installer pattern.
    """

    name = ""
    description = ""
    page_url = ""
    platforms: tuple[Platform, ...] = (Platform.WINDOWS, Platform.MAC, Platform.LINUX)
    link_patterns: tuple[re.Pattern[str], ...] | None = None

    def rank(self, candidates: list[str], platform: Platform) -> str:
        """Choose one of the extracted links for platform."""
        return rank_candidates(candidates, platform)

    def find_installer(
        self,
        platform: Platform,
        config: HelperConfig,
        logger: Logger | None = None,
    ) -> InstallerResult:
        """Scrape page_url and return the best installer for platform.

        Args:
            platform: Target platform.
            config: Effective configuration (unused by scraping providers).
            logger: Optional logger; defaults to the global logger.

        Returns:
            The chosen installer URL and file name.

        Raises:
            FetchFailedError: If the page could not be fetched.
            NoCandidatesError: If the page has no installer links.
        """
        logger = logger or get_global_logger()
        logger.verbose("DISCOVERY", f"Provider: {self.name} (web scrape)")
        logger.verbose("DISCOVERY", f"Page URL: {self.page_url}")
        logger.verbose("DISCOVERY", f"Target platform: {platform}")

        page = fetch_text(self.page_url, logger=logger)
        logger.verbose("DISCOVERY", f"Page fetched ({len(page)} characters)")

        candidates = extract_candidates(page, self.link_patterns)
        logger.debug("DISCOVERY", f"Candidates: {candidates}")
        if not candidates:
            raise NoCandidatesError(
                f"no installer links found on the {self.description} download page"
            )

        url = self.rank(candidates, platform)
        result = InstallerResult(url=url, filename=derive_filename(url))

        logger.verbose("DISCOVERY", f"Download URL: {result.url}")
        return result


class AndroidStudioProvider(ScrapeProvider):
    name = "android_studio"
    description = "Android Studio"
    page_url = "https://developer.android.com/studio"
    link_patterns = ANDROID_STUDIO_PATTERNS

    def rank(self, candidates: list[str], platform: Platform) -> str:
        """Windows prefers an .msi over everything; .zip counts for windows and linux."""
        if platform is Platform.WINDOWS:
            preferences = (
                lambda link: link.endswith(".msi"),
                lambda link: "windows" in link or link.endswith((".exe", ".zip")),
            )
        elif platform is Platform.MAC:
            preferences = (lambda link: "mac" in link or "dmg" in link,)
        else:
            preferences = (
                lambda link: "linux" in link or link.endswith((".tar.gz", ".zip")),
            )

        for prefers in preferences:
            for candidate in candidates:
                if prefers(candidate.lower()):
                    return candidate
        return candidates[0]


class BambuStudioProvider(ScrapeProvider):
    name = "bambu_studio"
    description = "Bambu Studio"
    page_url = "https://bambulab.com/en-us/download/studio"


class RevHardwareClientProvider(ScrapeProvider):
    name = "rev_hardware_client"
    description = "REV Hardware Client"
    page_url = "https://docs.revrobotics.com/rev-hardware-client/gs/install"
    platforms = (Platform.WINDOWS,)
    link_patterns = REV_PATTERNS


# Register these providers when the module is imported
register_provider(AndroidStudioProvider.name, AndroidStudioProvider)
register_provider(BambuStudioProvider.name, BambuStudioProvider)
register_provider(RevHardwareClientProvider.name, RevHardwareClientProvider)
