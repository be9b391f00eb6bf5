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

"""Core orchestration for ftc-helper.

High-level functions behind the CLI commands that combine discovery,
downloads and version detection. Project management (init, pull, push,
launch) lives in ftchelper.project.

Design Principles:

- Configuration is an explicit HelperConfig argument, never read ambiently
- Functions return structured data (dataclasses) for easy testing
- Error handling uses exceptions; the CLI layer formats them for display
- Installer providers are looked up through the discovery registry

Example:
    Programmatic usage:
        ```python
        from ftchelper.config import load_config
        from ftchelper.core import detect_tool_versions, download_installer

        config = load_config()
        result = download_installer("git_for_windows", config)
        print(f"Saved {result.file_path} ({result.sha256})")

        tools = detect_tool_versions(config)
        print(tools.git, tools.android_studio)
        ```

"""

from __future__ import annotations

from collections.abc import Mapping
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

from ftchelper.config import HelperConfig
from ftchelper.discovery import Platform, detect_platform, get_provider
from ftchelper.exceptions import ConfigError, FTCHelperError, ProcessError
from ftchelper.io import download_file
from ftchelper.logging import Logger, get_global_logger
from ftchelper.process import ProcessRunner, run_process
from ftchelper.project import (
    detect_android_studio_version,
    detect_git_version,
    find_studio_executable,
)
from ftchelper.results import DownloadResult, ToolVersions

DISTRIBUTION_NAME = "ftc-helper"


def _resolve_target_platform(
    provider_name: str,
    supported: tuple[Platform, ...],
    requested: Platform | None,
    description: str,
    logger: Logger,
) -> Platform:
    target = requested or detect_platform()
    if target in supported:
        return target

    if len(supported) == 1:
        if target is not None:
            logger.warning(
                f"{description} is only published for {supported[0]}; "
                f"downloading the {supported[0]} installer"
            )
        return supported[0]

    raise ConfigError(
        f"Unsupported operating system for automatic {description} download "
        f"(provider: {provider_name})"
    )


def download_installer(
    provider: str,
    config: HelperConfig,
    *,
    platform: Platform | None = None,
    out: Path | None = None,
    logger: Logger | None = None,
) -> DownloadResult:
    """Locate and download the installer offered by a provider.

    Args:
        provider: Registered provider name (e.g., "android_studio").
        config: Effective configuration.
        platform: Target platform. Defaults to the host platform. Providers
            that publish a single platform always use that platform.
        out: Output file, or an existing directory to save into. Defaults to
            the URL's file name in the current directory.
        logger: Optional logger; defaults to the global logger.

    Returns:
        DownloadResult with the URL, saved path and SHA-256.

    Raises:
        ConfigError: On an unknown provider or an unsupported platform.
        FetchFailedError: If the page, API or download request fails.
        MalformedInputError: If an API response has the wrong shape.
        NoCandidatesError: If no installer link is found.
    """
    logger = logger or get_global_logger()
    installer_provider = get_provider(provider)
    target = _resolve_target_platform(
        provider,
        installer_provider.platforms,
        platform,
        installer_provider.description,
        logger,
    )

    logger.step(1, 2, f"Looking up latest {installer_provider.description} for {target}...")
    found = installer_provider.find_installer(target, config, logger=logger)

    if out is None:
        destination = Path.cwd() / found.filename
    elif Path(out).is_dir():
        destination = Path(out) / found.filename
    else:
        destination = Path(out)

    logger.step(2, 2, f"Downloading {found.url} to {destination}...")
    file_path, sha256 = download_file(found.url, destination, logger=logger)

    return DownloadResult(
        provider=provider,
        platform=str(target),
        url=found.url,
        file_path=file_path,
        sha256=sha256,
    )


def detect_tool_versions(
    config: HelperConfig,
    runner: ProcessRunner | None = None,
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    logger: Logger | None = None,
) -> ToolVersions:
    """Report the installed git and Android Studio versions.

    Detection failures are recorded on the result instead of raised, so one
    missing tool does not hide the other.
    """
    logger = logger or get_global_logger()
    runner = runner or run_process

    git_version = git_error = None
    try:
        git_version = detect_git_version(runner, logger=logger)
    except FTCHelperError as err:
        git_error = str(err)
        logger.verbose("VERSION", f"git: {git_error}")

    studio_version = studio_error = None
    studio_path = None
    try:
        studio_path = find_studio_executable(config, env, platform)
        studio_version = detect_android_studio_version(studio_path, logger=logger)
    except FTCHelperError as err:
        studio_error = str(err)
        logger.verbose("VERSION", f"Android Studio: {studio_error}")

    return ToolVersions(
        git=git_version,
        git_error=git_error,
        android_studio=studio_version,
        android_studio_error=studio_error,
        android_studio_path=studio_path,
    )


def _git_output(runner: ProcessRunner, args: list[str], logger: Logger) -> str | None:
    try:
        result = runner("git", args, check=True, logger=logger)
    except ProcessError as err:
        logger.debug("VERSION", f"git {' '.join(args)} failed: {err}")
        return None
    return result.stdout.strip() or None


def resolve_helper_version(
    runner: ProcessRunner | None = None, logger: Logger | None = None
) -> str:
    """Version of ftc-helper itself.

    Resolution order:

    1. Installed distribution metadata
    2. VERSION file at the top of the enclosing git checkout
    3. Latest tag (git describe --tags --abbrev=0)
    4. Short commit hash (git rev-parse --short HEAD)

    Raises:
        ConfigError: If every step fails.
    """
    logger = logger or get_global_logger()
    runner = runner or run_process

    try:
        return distribution_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("VERSION", f"{DISTRIBUTION_NAME} is not installed")

    top_level = _git_output(runner, ["rev-parse", "--show-toplevel"], logger)
    if top_level:
        version_file = Path(top_level) / "VERSION"
        try:
            text = version_file.read_text(encoding="utf-8").strip()
        except OSError as err:
            logger.debug("VERSION", f"Cannot read {version_file}: {err}")
            text = ""
        if text:
            return text

    for args in (["describe", "--tags", "--abbrev=0"], ["rev-parse", "--short", "HEAD"]):
        output = _git_output(runner, args, logger)
        if output:
            return output

    raise ConfigError("could not determine version")
