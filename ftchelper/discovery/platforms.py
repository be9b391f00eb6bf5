"""Target platform detection for installer discovery.

Installers are published per operating system family. ftc-helper only knows
three of them; anything else (FreeBSD, AIX, ...) maps to None, which is a
normal detection result that simply blocks installer discovery later on.
"""

from __future__ import annotations

from enum import Enum
import platform as _platform

from ftchelper.exceptions import ConfigError


class Platform(str, Enum):
    """Operating system family used to rank installer candidates."""

    WINDOWS = "windows"
    MAC = "mac"
    LINUX = "linux"

    def __str__(self) -> str:
        return self.value


_SYSTEM_NAMES: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "darwin": Platform.MAC,
    "linux": Platform.LINUX,
}

_ALIASES: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "win": Platform.WINDOWS,
    "mac": Platform.MAC,
    "macos": Platform.MAC,
    "darwin": Platform.MAC,
    "osx": Platform.MAC,
    "linux": Platform.LINUX,
}


def detect_platform(system: str | None = None) -> Platform | None:
    """Map the running operating system to a Platform.

    Args:
        system: Value in the format of platform.system() ("Windows",
            "Darwin", "Linux"). Defaults to the current host.

    Returns:
        The matching Platform, or None for unsupported systems.
    """
    if system is None:
        system = _platform.system()
    return _SYSTEM_NAMES.get(system.strip().lower())


def parse_platform(name: str) -> Platform:
    """Parse a user-supplied platform name (e.g. from --platform).

    Raises:
        ConfigError: If the name is not a known platform or alias.
    """
    key = name.strip().lower()
    if key not in _ALIASES:
        choices = ", ".join(p.value for p in Platform)
        raise ConfigError(f"Unknown platform: {name!r}. Available: {choices}")
    return _ALIASES[key]
