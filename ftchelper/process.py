"""External process execution for ftc-helper.

Thin wrappers around subprocess used for git, tool version banners and the
Android Studio launcher. They translate the two ways a command can fail into
the ftc-helper exception hierarchy:

- SpawnError: the executable could not be started (not installed, not
  executable, bad working directory) or timed out.
- CommandError: it ran but exited non-zero (only when check=True).

Example:
    Capture a version banner:

        from ftchelper.process import run_process

        result = run_process("git", ["--version"])
        print(result.stdout)  # "git version 2.43.0\n"

Note:
    Commands are always passed as argument lists, never through a shell.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
import subprocess

from ftchelper.exceptions import CommandError, SpawnError
from ftchelper.logging import Logger, get_global_logger


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished command.

    Attributes:
        stdout: Captured standard output ("" when streamed to the terminal).
        stderr: Captured standard error ("" when streamed to the terminal).
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# Signature shared by run_process and test doubles
ProcessRunner = Callable[..., ProcessResult]


def run_process(
    name: str,
    args: Sequence[str] = (),
    cwd: Path | None = None,
    *,
    check: bool = False,
    capture: bool = True,
    timeout: float | None = None,
    logger: Logger | None = None,
) -> ProcessResult:
    """Run a command to completion.

    Args:
        name: Executable name or path.
        args: Arguments after the executable.
        cwd: Working directory.
        check: Raise CommandError on a non-zero exit status.
        capture: Capture stdout/stderr as text. When False the child writes
            straight to the terminal (used for git pull/push progress).
        timeout: Seconds before the command is abandoned.
        logger: Optional logger; defaults to the global logger.

    Returns:
        The command's output and exit status.

    Raises:
        SpawnError: If the command could not be started or timed out.
        CommandError: If check is True and the exit status is non-zero.
    """
    logger = logger or get_global_logger()
    argv = [name, *args]
    logger.debug("PROCESS", f"Running: {' '.join(argv)}" + (f" (in {cwd})" if cwd else ""))

    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=capture,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as err:
        raise SpawnError(f"{name} timed out after {timeout}s") from err
    except OSError as err:
        raise SpawnError(f"could not start {name}: {err}") from err

    result = ProcessResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
    )
    logger.debug("PROCESS", f"{name} exited with status {result.returncode}")

    if check and not result.ok:
        detail = result.stderr.strip()
        raise CommandError(
            f"{' '.join(argv)} failed with exit status {result.returncode}"
            + (f": {detail}" if detail else ""),
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


def spawn_process(
    name: str,
    args: Sequence[str] = (),
    cwd: Path | None = None,
    *,
    logger: Logger | None = None,
) -> int:
    """Start a command in the background and return its pid.

    The child inherits the terminal; ftc-helper does not wait for it.

    Raises:
        SpawnError: If the command could not be started.
    """
    logger = logger or get_global_logger()
    argv = [name, *args]
    logger.debug("PROCESS", f"Starting: {' '.join(argv)}")
    try:
        proc = subprocess.Popen(argv, cwd=cwd)
    except OSError as err:
        raise SpawnError(f"could not start {name}: {err}") from err
    return proc.pid
