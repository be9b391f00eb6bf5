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

"""Version extraction from command-line version banners.

Most tools answer `<tool> --version` with a single line loosely shaped like
"<tool> version <X.Y[.Z]> <vendor noise>". This module pulls the first
MAJOR.MINOR or MAJOR.MINOR.PATCH token out of such text.

Examples it handles:

- "git version 2.39.1.windows.1" -> "2.39.1"
- "git version 2.25.1" -> "2.25.1"
- "git version 2.34.1 (Apple Git-137)" -> "2.34.1"
- "git version 3.0" -> "3.0"

Note:
    This is pure string extraction; the match is returned verbatim (leading
    zeros are not normalized) and nothing after the token is inspected.
"""

from __future__ import annotations

import re

from ftchelper.exceptions import MalformedInputError, VersionNotFoundError

# Two or three dot-separated ASCII digit runs
BANNER_VERSION_PATTERN = re.compile(r"[0-9]+\.[0-9]+(?:\.[0-9]+)?")


def extract_version_from_banner(text: str) -> str:
    """Extract the first version-like token from a tool's version output.

    Args:
        text: Captured stdout of the tool.

    Returns:
        The first MAJOR.MINOR or MAJOR.MINOR.PATCH token, verbatim.

    Raises:
        MalformedInputError: If the text is empty or only whitespace.
        VersionNotFoundError: If no version-like token appears anywhere.
    """
    stripped = text.strip()
    if not stripped:
        raise MalformedInputError("version output is empty")

    match = BANNER_VERSION_PATTERN.search(stripped)
    if not match:
        raise VersionNotFoundError(f"could not parse a version from {stripped!r}")
    return match.group(0)
