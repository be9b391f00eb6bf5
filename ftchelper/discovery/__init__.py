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

"""Installer discovery for ftc-helper.

This package finds the download URL of a tool's installer for the current
platform. It is split into a pure core and pluggable providers:

CORE (locator, platforms):
  - locate_installer(): page text + platform -> best installer URL
  - locate_installer_from_assets(): named release assets -> installer URL
  - detect_platform(): host OS -> Platform (or None when unsupported)

PROVIDERS (web_scrape, api_github):
  - Know where a vendor publishes installers
  - Fetch the page or API response and delegate ranking to the core
  - Self-register by name on import

Available Providers:
    android_studio : AndroidStudioProvider
        Scrapes developer.android.com/studio.
    bambu_studio : BambuStudioProvider
        Scrapes the Bambu Lab download page.
    rev_hardware_client : RevHardwareClientProvider
        Scrapes the REV Robotics docs install page (Windows only).
    git_for_windows : GitForWindowsProvider
        Picks the 64-bit installer from the latest GitHub release.

Example:
    Find the Bambu Studio installer for this machine:

        from ftchelper.discovery import detect_platform, get_provider

        provider = get_provider("bambu_studio")
        result = provider.find_installer(detect_platform(), config)
        print(result.url)

"""

# Import provider modules to trigger self-registration
from . import (
    api_github,  # noqa: F401
    web_scrape,  # noqa: F401
)
from .base import InstallerProvider, available_providers, get_provider
from .locator import (
    InstallerResult,
    ReleaseAsset,
    derive_filename,
    locate_installer,
    locate_installer_from_assets,
)
from .platforms import Platform, detect_platform, parse_platform

__all__ = [
    "InstallerProvider",
    "InstallerResult",
    "Platform",
    "ReleaseAsset",
    "available_providers",
    "derive_filename",
    "detect_platform",
    "get_provider",
    "locate_installer",
    "locate_installer_from_assets",
    "parse_platform",
]
