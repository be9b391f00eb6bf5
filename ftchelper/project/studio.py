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

"""Android Studio discovery, version detection and launching.

Executable lookup order:

1. ANDROID_STUDIO_PATH environment variable (if the file exists)
2. android_studio_path from the configuration (if the file exists)
3. Platform install locations:
   - Windows: Android\\Android Studio\\bin\\{studio64,studio,launcher}.exe and
     JetBrains\\AndroidStudio\\bin\\{studio64,studio}.exe under
     %ProgramFiles%, %ProgramFiles(x86)% and the default Program Files paths
   - macOS: /Applications/Android Studio.app/Contents/MacOS/studio
   - Linux: android-studio on PATH, then /opt/android-studio/bin/studio.sh

Version detection reads the IDE's own product-info.json (a descriptor) from
the install root, two levels above the executable, and falls back to the
plain-text build.txt.

Example:
    Detect the installed version:

        from ftchelper.config import load_config
        from ftchelper.project.studio import (
            detect_android_studio_version,
            find_studio_executable,
        )

        exe = find_studio_executable(load_config())
        print(detect_android_studio_version(exe))  # 2023.1.1

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import os
from pathlib import Path
import shutil
from typing import TYPE_CHECKING

from ftchelper.discovery.platforms import Platform, detect_platform
from ftchelper.exceptions import (
    ConfigError,
    ExtractionError,
    ProjectError,
    VersionNotFoundError,
)
from ftchelper.logging import Logger, get_global_logger
from ftchelper.process import spawn_process
from ftchelper.versioning import extract_version_from_descriptor

if TYPE_CHECKING:
    from ftchelper.config import HelperConfig

_WINDOWS_BASE_VARS = ("ProgramFiles", "ProgramFiles(x86)")
_WINDOWS_DEFAULT_BASES = ("C:\\Program Files", "C:\\Program Files (x86)")
_WINDOWS_CANDIDATES = (
    ("Android", "Android Studio", "bin", "studio64.exe"),
    ("Android", "Android Studio", "bin", "studio.exe"),
    ("Android", "Android Studio", "bin", "launcher.exe"),
    ("JetBrains", "AndroidStudio", "bin", "studio64.exe"),
    ("JetBrains", "AndroidStudio", "bin", "studio.exe"),
)
MAC_STUDIO_EXECUTABLE = Path("/Applications/Android Studio.app/Contents/MacOS/studio")
LINUX_STUDIO_SCRIPT = Path("/opt/android-studio/bin/studio.sh")

PRODUCT_INFO_CANDIDATES = (
    Path("product-info.json"),
    Path("product-info") / "product-info.json",
    Path("lib") / "product-info.json",
    Path("Resources") / "product-info.json",
)


def _windows_candidates(env: Mapping[str, str]) -> list[Path]:
    bases = [env.get(var, "") for var in _WINDOWS_BASE_VARS]
    bases.extend(_WINDOWS_DEFAULT_BASES)
    return [Path(base, *parts) for base in bases if base for parts in _WINDOWS_CANDIDATES]


def find_studio_executable(
    config: HelperConfig,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
) -> Path:
    """Locate the Android Studio launcher.

    Args:
        config: Effective configuration.
        env: Environment mapping. Defaults to os.environ.
        platform: Platform whose install locations are searched. Defaults
            to the host platform.

    Returns:
        Path of an existing launcher.

    Raises:
        ConfigError: If no launcher is found.
    """
    env = os.environ if env is None else env
    platform = platform or detect_platform()

    override = env.get("ANDROID_STUDIO_PATH")
    if override and Path(override).is_file():
        return Path(override)

    if config.android_studio_path and config.android_studio_path.is_file():
        return config.android_studio_path

    candidates: list[Path] = []
    if platform is Platform.WINDOWS:
        candidates = _windows_candidates(env)
    elif platform is Platform.MAC:
        candidates = [MAC_STUDIO_EXECUTABLE]
    elif platform is Platform.LINUX:
        on_path = shutil.which("android-studio", path=env.get("PATH"))
        if on_path:
            candidates.append(Path(on_path))
        candidates.append(LINUX_STUDIO_SCRIPT)

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise ConfigError(
        "Could not find Android Studio executable. "
        "Set ANDROID_STUDIO_PATH or android_studio_path in config."
    )


def detect_android_studio_version(
    executable: Path, logger: Logger | None = None
) -> str:
    """Read the installed Android Studio version next to executable.

    The install root is two directories above the executable (for example
    C:\\Program Files\\Android\\Android Studio for bin\\studio64.exe). Each
    product-info.json candidate is tried with the descriptor rule;
    unreadable or unparsable files are skipped. build.txt is the fallback.

    Raises:
        VersionNotFoundError: If no candidate yields a version.
    """
    logger = logger or get_global_logger()
    install_root = Path(executable).parent.parent
    logger.debug("STUDIO", f"Install root: {install_root}")

    for relative in PRODUCT_INFO_CANDIDATES:
        candidate = install_root / relative
        if not candidate.is_file():
            continue
        try:
            version = extract_version_from_descriptor(candidate.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ExtractionError) as err:
            logger.debug("STUDIO", f"Skipping {candidate}: {err}")
            continue
        logger.verbose("STUDIO", f"Version {version} from {candidate}")
        return version

    build_txt = install_root / "build.txt"
    if build_txt.is_file():
        try:
            text = build_txt.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as err:
            logger.debug("STUDIO", f"Skipping {build_txt}: {err}")
            text = ""
        if text:
            logger.verbose("STUDIO", f"Version {text} from {build_txt}")
            return text

    raise VersionNotFoundError("could not detect Android Studio version")


def launch_studio(
    project_path: Path,
    config: HelperConfig,
    platform: Platform | None = None,
    *,
    env: Mapping[str, str] | None = None,
    spawner: Callable[..., int] = spawn_process,
    logger: Logger | None = None,
) -> int:
    """Open project_path in Android Studio without waiting for it.

    Returns:
        Process id of the launched command.

    Raises:
        ProjectError: If project_path is not a directory.
        ConfigError: On an unsupported OS, or when the Windows launcher
            cannot be found.
        SpawnError: If the launcher cannot be started.
    """
    logger = logger or get_global_logger()
    platform = platform or detect_platform()
    project_path = Path(project_path)

    if not project_path.is_dir():
        raise ProjectError(f"Project not found: {project_path}")

    if platform is Platform.MAC:
        name, args = "open", ["-a", "Android Studio.app", str(project_path)]
    elif platform is Platform.LINUX:
        name, args = "android-studio", [str(project_path)]
    elif platform is Platform.WINDOWS:
        name, args = str(find_studio_executable(config, env, platform)), [str(project_path)]
    else:
        raise ConfigError("Unsupported operating system for launching Android Studio.")

    logger.verbose("STUDIO", f"Launching {name} for {project_path}")
    return spawner(name, args, logger=logger)
