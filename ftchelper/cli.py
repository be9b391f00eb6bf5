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

"""Command-line interface for ftc-helper.

This module provides the main CLI entry point for the ftc-helper tool,
offering commands for FTC project setup, syncing and tool installation.

Commands:

    list: List available FtcRobotController releases
    init: Create a project from a release
    launch: Open a project in Android Studio
    pull: git pull a project's TeamCode
    push: Stage, commit and push a project's TeamCode
    projects: List local projects
    config: Show the effective configuration
    version: Print the ftc-helper version
    tools: Show installed git and Android Studio versions
    download-studio / download-git / download-rev / download-bambu:
        Download the latest installer of a tool

Example:
    Create a project:
        ```bash
        $ ftc-helper init v10.1 -p robot2025 -g github.com/team/robot2025.git
        ```

    Sync code:
        ```bash
        $ ftc-helper pull robot2025
        $ ftc-helper push robot2025 "Tune drive PID"
        ```

    Download Android Studio for another platform:
        ```bash
        $ ftc-helper download-studio --platform mac -o ~/Downloads --verbose
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, network, process or project failure)

Note:
    Each command has its own handler function (cmd_<command>) taking the
    parsed arguments and the effective HelperConfig. Verbose mode shows full
    tracebacks on errors. Debug mode implies verbose mode.

"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
import sys
import traceback

from ftchelper import __version__
from ftchelper.config import HelperConfig, dump_config, load_config
from ftchelper.core import (
    detect_tool_versions,
    download_installer,
    resolve_helper_version,
)
from ftchelper.discovery import parse_platform
from ftchelper.exceptions import ConfigError, FTCHelperError
from ftchelper.logging import get_logger, set_global_logger
from ftchelper.project import (
    init_project,
    launch_studio,
    list_projects,
    list_releases,
    project_path,
    pull_project,
    push_project,
)


def _print_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        traceback.print_exc()
    return 1


def cmd_list(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper list' command.

    Args:
        args: Parsed command-line arguments.
        config: Effective configuration.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    try:
        releases = list_releases(config)
    except FTCHelperError as err:
        return _print_error(err, args)

    print("Available FTC releases:")
    for tag in releases:
        print(f"- {tag}")
    return 0


def cmd_init(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper init' command.

    Downloads the requested FtcRobotController release into the work
    directory, flattens it and initializes git in TeamCode.

    Args:
        args: Parsed command-line arguments containing the release tag,
            project name and optional git remote.
        config: Effective configuration.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    print(f"Creating project '{args.project}' from release {args.version}")
    print(f"Work directory: {config.work_dir}")
    print()

    try:
        result = init_project(args.version, args.project, config, args.git)
    except FTCHelperError as err:
        return _print_error(err, args)

    print("=" * 70)
    print("PROJECT CREATED")
    print("=" * 70)
    print(f"Release:         {result.version}")
    print(f"Project Path:    {result.project_path}")
    print(f"TeamCode:        {result.teamcode_path}")
    print(f"Remote:          {result.remote_url or '(none)'}")
    print("=" * 70)
    print()
    print("[SUCCESS] Project setup complete!")
    return 0


def cmd_launch(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper launch' command."""
    path = project_path(config.work_dir, args.project)
    try:
        pid = launch_studio(path, config)
    except FTCHelperError as err:
        return _print_error(err, args)

    print(f"Launched '{args.project}' in Android Studio (pid {pid})")
    return 0


def cmd_pull(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper pull' command."""
    print(f"Pulling code for project '{args.project}'...")
    try:
        pull_project(args.project, config)
    except FTCHelperError as err:
        return _print_error(err, args)

    print("[SUCCESS] Pull complete!")
    return 0


def cmd_push(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper push' command.

    Runs git add, commit and push in order and stops at the first failure.
    """
    try:
        push_project(args.project, args.message, config)
    except FTCHelperError as err:
        return _print_error(err, args)

    print("[SUCCESS] Changes pushed!")
    return 0


def cmd_projects(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper projects' command."""
    print(f"Active projects in: {config.work_dir}")
    try:
        names = list_projects(config.work_dir)
    except FTCHelperError as err:
        return _print_error(err, args)

    if not names:
        print("No active projects found.")
    for name in names:
        print(f"- {name}")
    return 0


def cmd_config(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper config' command."""
    print(dump_config(config), end="")
    return 0


def cmd_version(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper version' command.

    Prints "Version: unknown" instead of failing when nothing identifies the
    running copy.
    """
    try:
        print(resolve_helper_version())
    except ConfigError:
        print("Version: unknown")
    return 0


def cmd_tools(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper tools' command."""
    tools = detect_tool_versions(config)

    print("=" * 70)
    print("INSTALLED TOOLS")
    print("=" * 70)
    print(f"git:             {tools.git or 'not found'}")
    if tools.git_error:
        print(f"  [X] {tools.git_error}")
    print(f"Android Studio:  {tools.android_studio or 'not found'}")
    if tools.android_studio_path:
        print(f"  Path: {tools.android_studio_path}")
    if tools.android_studio_error:
        print(f"  [X] {tools.android_studio_error}")
    print("=" * 70)
    return 0


def _download(args: argparse.Namespace, config: HelperConfig, provider: str) -> int:
    try:
        platform = parse_platform(args.platform) if args.platform else None
        out = Path(args.out).expanduser() if args.out else None
        result = download_installer(provider, config, platform=platform, out=out)
    except FTCHelperError as err:
        return _print_error(err, args)

    print()
    print("=" * 70)
    print("DOWNLOAD RESULTS")
    print("=" * 70)
    print(f"Provider:        {result.provider}")
    print(f"Platform:        {result.platform}")
    print(f"URL:             {result.url}")
    print(f"File Path:       {result.file_path}")
    print(f"SHA-256:         {result.sha256}")
    print("=" * 70)
    print()
    print(f"[SUCCESS] Download complete: {result.file_path}")
    return 0


def cmd_download_studio(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper download-studio' command."""
    return _download(args, config, "android_studio")


def cmd_download_git(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper download-git' command."""
    return _download(args, config, "git_for_windows")


def cmd_download_rev(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper download-rev' command."""
    return _download(args, config, "rev_hardware_client")


def cmd_download_bambu(args: argparse.Namespace, config: HelperConfig) -> int:
    """Handler for 'ftc-helper download-bambu' command."""
    return _download(args, config, "bambu_studio")


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ftc-helper argument parser."""
    parser = argparse.ArgumentParser(
        prog="ftc-helper",
        description="ftc-helper - manage FTC robot controller projects and tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ftc-helper {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: ~/.ftc-helper.yaml)",
    )
    parser.add_argument(
        "-w",
        "--work-dir",
        default=None,
        help="Directory holding FTC projects (default: ~/StudioProjects)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'list' command
    parser_list = subparsers.add_parser(
        "list",
        help="List available FtcRobotController releases",
    )
    _add_output_flags(parser_list)
    parser_list.set_defaults(func=cmd_list)

    # 'init' command
    parser_init = subparsers.add_parser(
        "init",
        help="Create a project from an FtcRobotController release",
        description="Download a release, unpack it into the work directory and set up git in TeamCode.",
    )
    parser_init.add_argument("version", help="Release tag (e.g., v10.1)")
    parser_init.add_argument(
        "-p",
        "--project",
        default="",
        help="Name of the project directory to create",
    )
    parser_init.add_argument(
        "-g",
        "--git",
        default=None,
        help="Git remote URL to add as origin",
    )
    _add_output_flags(parser_init)
    parser_init.set_defaults(func=cmd_init)

    # 'launch' command
    parser_launch = subparsers.add_parser(
        "launch",
        help="Open a project in Android Studio",
    )
    parser_launch.add_argument("project", help="Project name")
    _add_output_flags(parser_launch)
    parser_launch.set_defaults(func=cmd_launch)

    # 'pull' command
    parser_pull = subparsers.add_parser(
        "pull",
        help="Pull the latest TeamCode from the remote",
    )
    parser_pull.add_argument("project", help="Project name")
    _add_output_flags(parser_pull)
    parser_pull.set_defaults(func=cmd_pull)

    # 'push' command
    parser_push = subparsers.add_parser(
        "push",
        help="Commit and push TeamCode changes",
    )
    parser_push.add_argument("project", help="Project name")
    parser_push.add_argument("message", help="Commit message")
    _add_output_flags(parser_push)
    parser_push.set_defaults(func=cmd_push)

    # 'projects' command
    parser_projects = subparsers.add_parser(
        "projects",
        help="List projects in the work directory",
    )
    _add_output_flags(parser_projects)
    parser_projects.set_defaults(func=cmd_projects)

    # 'config' command
    parser_config = subparsers.add_parser(
        "config",
        help="Show the effective configuration as YAML",
    )
    _add_output_flags(parser_config)
    parser_config.set_defaults(func=cmd_config)

    # 'version' command
    parser_version = subparsers.add_parser(
        "version",
        help="Print the ftc-helper version",
    )
    _add_output_flags(parser_version)
    parser_version.set_defaults(func=cmd_version)

    # 'tools' command
    parser_tools = subparsers.add_parser(
        "tools",
        help="Show installed git and Android Studio versions",
    )
    _add_output_flags(parser_tools)
    parser_tools.set_defaults(func=cmd_tools)

    # download commands
    downloads = [
        ("download-studio", "Android Studio", cmd_download_studio),
        ("download-git", "Git for Windows", cmd_download_git),
        ("download-rev", "REV Hardware Client", cmd_download_rev),
        ("download-bambu", "Bambu Studio", cmd_download_bambu),
    ]
    for command, product, handler in downloads:
        parser_download = subparsers.add_parser(
            command,
            help=f"Download the latest {product} installer",
        )
        parser_download.add_argument(
            "-o",
            "--out",
            default=None,
            help="Output file or directory (default: file name from the URL)",
        )
        parser_download.add_argument(
            "--platform",
            default=None,
            help="Target platform: windows, mac or linux (default: this machine)",
        )
        _add_output_flags(parser_download)
        parser_download.set_defaults(func=handler)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the ftc-helper CLI.

    This function is registered as the 'ftc-helper' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure global logger
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = load_config(args.config, work_dir=args.work_dir, logger=logger)
    except FTCHelperError as err:
        sys.exit(_print_error(err, args))

    # Call the appropriate command handler
    exit_code = args.func(args, config)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
