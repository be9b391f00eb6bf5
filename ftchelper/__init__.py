"""
ftc-helper: a command-line helper for FIRST Tech Challenge robot projects.

ftc-helper fetches FtcRobotController starter-code releases, unpacks them
into ready-to-edit projects with a git repository in TeamCode, launches
Android Studio, syncs code with a remote, and downloads the installers of
the tools a team needs.

Quick Start
-----------
List releases and create a project:

    $ ftc-helper list
    $ ftc-helper init v10.1 -p robot2025 -g github.com/team/robot2025.git

Download Android Studio for this machine:

    $ ftc-helper download-studio

For full CLI documentation:

    $ ftc-helper --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Installer downloads and tool/version detection.
config : package
    YAML configuration loading and environment overrides.
discovery : package
    Installer link extraction, platform ranking and providers.
versioning : package
    Version extraction from product descriptors and version banners.
project : package
    Releases, project layout, git and Android Studio.
io : package
    HTTP fetches and streaming downloads.

Public API
----------
The primary interface is the CLI, but key functions are exported for
programmatic use:

    from ftchelper.config import load_config
    from ftchelper.core import download_installer, detect_tool_versions
    from ftchelper.discovery import locate_installer, locate_installer_from_assets
    from ftchelper.versioning import (
        extract_version_from_banner,
        extract_version_from_descriptor,
    )

For more details, see the individual module docstrings.

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Command-line helper for FTC robot controller projects"

# Re-export commonly used functions for convenience
from ftchelper.config import HelperConfig, load_config
from ftchelper.core import detect_tool_versions, download_installer
from ftchelper.discovery import locate_installer, locate_installer_from_assets
from ftchelper.versioning import (
    extract_version_from_banner,
    extract_version_from_descriptor,
)

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "HelperConfig",
    "detect_tool_versions",
    "download_installer",
    "extract_version_from_banner",
    "extract_version_from_descriptor",
    "load_config",
    "locate_installer",
    "locate_installer_from_assets",
]
