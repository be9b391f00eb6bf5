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

"""Exception hierarchy for ftc-helper.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ExtractionError: Content was fetched but could not be turned into a result
  (MalformedInputError, VersionNotFoundError, NoCandidatesError)
- NetworkError: Network/download-related errors (FetchFailedError)
- ProcessError: External tool errors (SpawnError, CommandError)
- ConfigError: Configuration-related errors (bad YAML, unknown provider,
  unsupported platform)
- ProjectError: Local project layout errors (missing TeamCode directory,
  unsafe archive members)

All exceptions inherit from FTCHelperError, allowing users to catch all
ftc-helper errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from ftchelper.exceptions import NoCandidatesError, FetchFailedError
        from ftchelper.discovery import get_provider

        try:
            result = get_provider("bambu_studio").find_installer(platform, config)
        except FetchFailedError as e:
            print(f"Could not reach download page: {e}")
        except NoCandidatesError as e:
            print(f"No installer links on page: {e}")
        ```

    Catching all ftc-helper errors:
        ```python
        from ftchelper.exceptions import FTCHelperError

        try:
            init_project("v10.1", "MyRobot", config)
        except FTCHelperError as e:
            print(f"Error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "FTCHelperError",
    "ExtractionError",
    "MalformedInputError",
    "VersionNotFoundError",
    "NoCandidatesError",
    "NetworkError",
    "FetchFailedError",
    "ProcessError",
    "SpawnError",
    "CommandError",
    "ConfigError",
    "ProjectError",
]


class FTCHelperError(Exception):
    """Base exception for all ftc-helper errors.

    All ftc-helper specific exceptions inherit from this class, allowing
    users to catch all of them with a single except clause if needed.
    """

    pass


class ExtractionError(FTCHelperError):
    """Raised when fetched or captured content cannot yield a result.

    Parent of the three extraction failure kinds. The network or process
    step that produced the content succeeded; the content itself is the
    problem.
    """

    pass


class MalformedInputError(ExtractionError):
    """Raised when content does not parse as the expected format.

    Examples are descriptor text that is not valid JSON (or not a JSON
    object), an empty version banner, or a release API body of the wrong
    shape.
    """

    pass


class VersionNotFoundError(ExtractionError):
    """Raised when content parsed fine but the sought version is absent."""

    pass


class NoCandidatesError(ExtractionError):
    """Raised when installer link extraction yields zero candidates."""

    pass


class NetworkError(FTCHelperError):
    """Raised for network/download-related errors.

    This exception is raised when there are problems with:

    - HTTP errors (non-2xx responses)
    - Transport failures (DNS, connection refused, timeouts)
    - Interrupted downloads
    """

    pass


class FetchFailedError(NetworkError):
    """Raised when an HTTP GET does not produce a 2xx response.

    Attributes:
        url: The URL that was requested.
        status_code: HTTP status code, or None for transport failures.
    """

    def __init__(
        self, message: str, *, url: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ProcessError(FTCHelperError):
    """Raised for external tool failures (git, Android Studio launcher)."""

    pass


class SpawnError(ProcessError):
    """Raised when an external executable cannot be started at all."""

    pass


class CommandError(ProcessError):
    """Raised when an external command exits with a non-zero status.

    Attributes:
        returncode: Exit status of the command.
        stderr: Captured standard error ("" when output was streamed).
    """

    def __init__(self, message: str, *, returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(FTCHelperError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing of the config file (syntax errors, non-mapping documents)
    - An explicit config file that does not exist
    - Unknown installer provider or platform names
    - Running on an operating system no installer is published for
    - Missing required arguments such as the project name

    Example:
        Catching configuration errors:
            ```python
            from ftchelper.exceptions import ConfigError

            try:
                config = load_config(Path("broken.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class ProjectError(FTCHelperError):
    """Raised for local project layout errors.

    This exception is raised when there are problems with:

    - A project directory or its TeamCode directory not existing
    - The working directory not existing
    - Release archives containing members outside the target directory
    """

    pass
