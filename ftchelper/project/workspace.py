"""Project directory layout helpers.

An FTC project is a directory under the work directory that contains the
standard TeamCode source tree. Only TeamCode is under the team's version
control; the rest of the FtcRobotController checkout is vendor code.
"""

from __future__ import annotations

from pathlib import Path

from ftchelper.exceptions import ProjectError

TEAMCODE_RELATIVE = Path("TeamCode/src/main/java/org/firstinspires/ftc/teamcode")


def teamcode_path(project_path: Path) -> Path:
    """TeamCode source directory of a project root."""
    return Path(project_path) / TEAMCODE_RELATIVE


def project_path(work_dir: Path, name: str) -> Path:
    return Path(work_dir) / name


def require_teamcode(work_dir: Path, name: str) -> Path:
    """Return the TeamCode directory of project name.

    Raises:
        ProjectError: If the project or its TeamCode directory is missing.
    """
    path = teamcode_path(project_path(work_dir, name))
    if not path.is_dir():
        raise ProjectError(
            f"Project not found or TeamCode directory does not exist: {name}"
        )
    return path


def list_projects(work_dir: Path) -> list[str]:
    """Names of the projects in work_dir, sorted.

    Directories without a TeamCode tree are not projects and are skipped.

    Raises:
        ProjectError: If work_dir cannot be read.
    """
    work_dir = Path(work_dir)
    try:
        entries = list(work_dir.iterdir())
    except OSError as err:
        raise ProjectError(f"Error reading working directory {work_dir}: {err}") from err

    return sorted(
        entry.name
        for entry in entries
        if entry.is_dir() and teamcode_path(entry).is_dir()
    )
