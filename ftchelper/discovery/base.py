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

"""Installer provider protocol and registry for ftc-helper.

This module defines the foundational components for installer discovery:

- InstallerProvider protocol: Interface that all providers must implement
- Provider registry: Global dict mapping provider names to implementations
- Registration and lookup functions: register_provider() and get_provider()

Each provider knows where one vendor publishes its installers and how to
turn that source into an InstallerResult:

- android_studio: Scrape developer.android.com/studio
- bambu_studio: Scrape the Bambu Lab download page
- rev_hardware_client: Scrape the REV docs install page (Windows only)
- git_for_windows: GitHub releases API asset list (Windows only)

Design Philosophy:
    - Providers are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (providers self-register)
    - Registry is a simple dict
    - Each provider is stateless and instantiated on demand

Example:
    Implementing a custom provider:
        ```python
        from ftchelper.discovery.base import register_provider
        from ftchelper.discovery.locator import InstallerResult

        class NightlyProvider:
            name = "nightly"
            description = "Internal nightly build"

            def find_installer(self, platform, config, logger=None):
                url = f"https://builds.example.org/nightly-{platform}.zip"
                return InstallerResult(url=url, filename=url.rsplit("/", 1)[-1])

        register_provider("nightly", NightlyProvider)
        ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ftchelper.exceptions import ConfigError

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig
    from ftchelper.logging import Logger

    from .locator import InstallerResult
    from .platforms import Platform

# -------------------------------
# Provider Protocol
# -------------------------------


class InstallerProvider(Protocol):
    """Protocol for installer providers.

    Attributes:
        name: Registry name (e.g. "android_studio").
        description: Human-readable product name for CLI output.
        platforms: Platforms the vendor publishes installers for.
    """

    name: str
    description: str
    platforms: tuple[Platform, ...]

    def find_installer(
        self,
        platform: Platform,
        config: HelperConfig,
        logger: Logger | None = None,
    ) -> InstallerResult:
        """Locate the best installer download for platform.

        Args:
            platform: Target platform.
            config: Effective helper configuration (tokens, etc.).
            logger: Optional logger; defaults to the global logger.

        Returns:
            The chosen installer URL and file name.

        Raises:
            FetchFailedError: If the source could not be fetched.
            MalformedInputError: If the source is not in the expected format.
            NoCandidatesError: If the source lists no installers.
        """
        ...


# -------------------------------
# Provider Registry
# -------------------------------

_PROVIDER_REGISTRY: dict[str, type[InstallerProvider]] = {}


def register_provider(name: str, provider_class: type[InstallerProvider]) -> None:
    """Register an installer provider by name.

    Registering the same name twice overwrites the previous entry (handy
    for tests).

    Args:
        name: Provider name, lowercase with underscores.
        provider_class: Class implementing the InstallerProvider protocol.
    """
    _PROVIDER_REGISTRY[name] = provider_class


def get_provider(name: str) -> InstallerProvider:
    """Get a new provider instance by name.

    Raises:
        ConfigError: If the name is not registered. The message lists the
            available providers.
    """
    if name not in _PROVIDER_REGISTRY:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        raise ConfigError(
            f"Unknown installer provider: {name!r}. Available: {available or '(none)'}"
        )
    return _PROVIDER_REGISTRY[name]()


def available_providers() -> list[str]:
    """Return the sorted names of all registered providers."""
    return sorted(_PROVIDER_REGISTRY)
