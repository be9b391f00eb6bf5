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

"""Console output for ftc-helper.

Library modules (discovery providers, project operations, the downloader)
report progress through a small logger object instead of printing directly,
so they stay usable from scripts and tests without spamming stdout.

Output levels:

- step: Always printed, e.g. "[2/3] Downloading installer..."
- warning: Always printed, prefixed with [WARNING]
- verbose: Printed with -v/--verbose
- debug: Printed with -d/--debug (implies verbose)

Example:
    The CLI installs a logger per command:
        ```python
        from ftchelper.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))
        ```

    Library code accepts an optional logger and falls back to the global one:
        ```python
        from ftchelper.logging import get_global_logger

        def pull_project(name, config, logger=None):
            logger = logger or get_global_logger()
            logger.verbose("GIT", f"git pull in {teamcode}")
        ```

Note:
    The global logger starts out silent, so importing ftchelper never
    prints anything on its own.
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """Protocol for logger implementations."""

    def step(self, step: int, total: int, message: str) -> None:
        """Print a numbered progress step (e.g. "[1/3] message")."""
        ...

    def warning(self, message: str) -> None:
        """Print a warning that does not stop the command."""
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Print a message tagged with a prefix such as "GIT" or "HTTP"."""
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a low-level diagnostic message tagged with a prefix."""
        ...


class DefaultLogger:
    """Logger that writes to stdout, honoring verbose and debug flags.

    Args:
        verbose: Print verbose messages.
        debug: Print debug messages as well (implies verbose).
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def warning(self, message: str) -> None:
        print(f"[WARNING] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that discards everything (the library default)."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Create a stdout logger with the given verbosity.

    Args:
        verbose: If True, verbose messages are printed.
        debug: If True, debug messages are printed too (implies verbose).

    Returns:
        A new DefaultLogger.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the process-wide logger (silent unless the CLI replaced it)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger.

    Args:
        logger: Logger used by library functions that are not handed one
            explicitly.
    """
    global _global_logger
    _global_logger = logger
