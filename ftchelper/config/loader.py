"""
Configuration loading for ftc-helper.

Settings are resolved ONCE at startup into an immutable HelperConfig and
then passed explicitly into every operation; nothing reads settings from a
global object mid-call.

Configuration Layers
--------------------
Later layers override earlier ones:

1. **Built-in defaults**
   - work_dir: ~/StudioProjects

2. **YAML config file**
   - The file given with --config (must exist), otherwise
   - ~/.ftc-helper.yaml or ~/.ftc-helper.yml when present (optional)

3. **Environment variables**
   - FTC_HELPER_WORK_DIR
   - FTC_HELPER_ANDROID_STUDIO_PATH
   - GITHUB_TOKEN
   - values from a .env file in the current directory fill in variables
     that are not set in the real environment

4. **Command-line flags**
   - -w/--work-dir

Recognized Keys
---------------
work_dir : str
    Directory holding FTC projects (one sub-directory per project).
android_studio_path : str
    Path to the Android Studio launcher, when it is not installed in a
    standard location.
github_token : str
    Personal access token for GitHub API calls (raises the rate limit).

Unknown keys are ignored (with a warning) so older helpers can read newer
config files. "~" is expanded in path values.

Error Handling
--------------
- ConfigError: explicit config file missing, YAML parse error, top-level
  document not a mapping, or a recognized key with a non-string value.
- All errors are chained with "from err" for better debugging.

Examples
--------
    >>> from ftchelper.config import load_config
    >>> cfg = load_config()
    >>> cfg.work_dir
    PosixPath('/home/alex/StudioProjects')

    >>> cfg = load_config(Path("team.yaml"), work_dir="~/robots")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values, find_dotenv
import yaml

from ftchelper.exceptions import ConfigError
from ftchelper.logging import Logger, get_global_logger

DEFAULT_CONFIG_NAMES = (".ftc-helper.yaml", ".ftc-helper.yml")

CONFIG_KEYS = ("work_dir", "android_studio_path", "github_token")

ENV_OVERRIDES = {
    "FTC_HELPER_WORK_DIR": "work_dir",
    "FTC_HELPER_ANDROID_STUDIO_PATH": "android_studio_path",
    "GITHUB_TOKEN": "github_token",
}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class HelperConfig:
    """Effective settings for one ftc-helper invocation.

    Attributes:
        work_dir: Directory holding FTC projects.
        android_studio_path: Explicit Android Studio launcher, if configured.
        github_token: GitHub API token, if configured.
        config_file: The YAML file that was loaded, if any.
    """

    work_dir: Path
    android_studio_path: Path | None = None
    github_token: str | None = None
    config_file: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        """Plain mapping of the settings (token masked) for display."""
        return {
            "work_dir": str(self.work_dir),
            "android_studio_path": (
                str(self.android_studio_path) if self.android_studio_path else None
            ),
            "github_token": "********" if self.github_token else None,
            "config_file": str(self.config_file) if self.config_file else None,
        }


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """Load a YAML config file into a dict.

    An empty file is treated as an empty mapping.

    Raises:
        ConfigError: When the file is missing, unparsable, or not a mapping.
    """
    if not p.is_file():
        raise ConfigError(f"config file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def _find_default_config(home: Path) -> Path | None:
    for name in DEFAULT_CONFIG_NAMES:
        candidate = home / name
        if candidate.is_file():
            return candidate
    return None


def _apply_file_layer(
    settings: dict[str, Any], data: dict[str, Any], source: Path, logger: Logger
) -> None:
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown config key {key!r} in {source}")
            continue
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"config key {key!r} must be a string in {source}")
        settings[key] = value


def _process_environment() -> dict[str, str]:
    dotenv_path = find_dotenv(usecwd=True)
    from_file = dotenv_values(dotenv_path) if dotenv_path else {}
    merged = {key: value for key, value in from_file.items() if value is not None}
    merged.update(os.environ)
    return merged


def _expand(value: str, home: Path) -> Path:
    if value == "~" or value.startswith(("~/", "~\\")):
        return home / value[2:] if len(value) > 1 else home
    return Path(os.path.expandvars(value))


# -------------------------------
# Public API
# -------------------------------


def load_config(
    config_file: Path | None = None,
    *,
    work_dir: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
    logger: Logger | None = None,
) -> HelperConfig:
    """Resolve the effective configuration.

    Args:
        config_file: Explicit YAML file (--config). Must exist when given.
        work_dir: Command-line override for the work directory.
        env: Environment mapping. Defaults to os.environ layered over the
            nearest .env file.
        home: Home directory used for defaults and "~" expansion. Defaults
            to Path.home().
        logger: Optional logger; defaults to the global logger.

    Returns:
        The merged, immutable configuration.

    Raises:
        ConfigError: On a missing explicit file, unparsable YAML, or invalid
            values.
    """
    logger = logger or get_global_logger()
    env = _process_environment() if env is None else env
    home = Path.home() if home is None else Path(home)

    settings: dict[str, Any] = {"work_dir": str(home / "StudioProjects")}

    if config_file is not None:
        source: Path | None = Path(config_file).expanduser()
    else:
        source = _find_default_config(home)

    if source is not None:
        logger.verbose("CONFIG", f"Using config file: {source}")
        _apply_file_layer(settings, _load_yaml_file(source), source, logger)
    else:
        logger.verbose("CONFIG", "No config file found. Using default values.")

    for var, key in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            logger.debug("CONFIG", f"{key} overridden by ${var}")
            settings[key] = value

    if work_dir:
        settings["work_dir"] = str(work_dir)

    studio = settings.get("android_studio_path")
    config = HelperConfig(
        work_dir=_expand(settings["work_dir"], home),
        android_studio_path=_expand(studio, home) if studio else None,
        github_token=settings.get("github_token") or None,
        config_file=source,
    )
    logger.debug("CONFIG", f"Effective config: {config.as_dict()}")
    return config


def dump_config(config: HelperConfig) -> str:
    """Render the effective configuration as YAML."""
    return yaml.safe_dump(config.as_dict(), default_flow_style=False, sort_keys=False)
