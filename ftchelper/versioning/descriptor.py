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

"""Version extraction from JSON product descriptors.

Applications such as Android Studio ship a small JSON file describing
themselves (product-info.json). The interesting fields are:

- versionName (str): Marketing version, e.g. "2023.1.1"
- version (str or number): Build version, e.g. "2023.1.1" or 14.5
- fullVersion (str): Long form, e.g. "Android Studio 2023.1.1"

The descriptor is decoded once into a typed ProductDescriptor record; the
version is then picked by field priority versionName -> version ->
fullVersion, first present-and-non-empty wins.

Example:
    Extract the version from product-info.json text:
        ```python
        from ftchelper.versioning import extract_version_from_descriptor

        version = extract_version_from_descriptor('{"versionName": "2023.1.1"}')
        # version returns: "2023.1.1"
        ```

Note:
    Numeric "version" values are rendered as plain decimal text: no
    scientific notation, no trailing ".0" artifacts, and zeros in the
    integer part are always kept (100.0 -> "100", never "1").
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import json
import math
from typing import Any

from ftchelper.exceptions import MalformedInputError, VersionNotFoundError


def format_number(value: int | float) -> str:
    """Render a JSON number as a version string.

    Args:
        value: An int or float decoded from JSON.

    Returns:
        Decimal text without exponent and without fractional trailing zeros.

    Raises:
        ValueError: If value is NaN or infinite.

    Example:
        ```python
        format_number(14.0)   # "14"
        format_number(14.5)   # "14.5"
        format_number(100)    # "100"
        format_number(1e-07)  # "0.0000001"
        ```
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"not a finite number: {value!r}")
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    # repr() gives the shortest round-tripping digits; Decimal drops the exponent
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _string_field(obj: dict[str, Any], key: str) -> str | None:
    value = obj.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _version_field(obj: dict[str, Any]) -> str | None:
    value = obj.get("version")
    # bool is a subclass of int; JSON true/false is not a version
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return format_number(value)
        except ValueError:
            return None
    return _string_field(obj, "version")


@dataclass(frozen=True)
class ProductDescriptor:
    """Typed view of a product descriptor.

    Each field is None when the key is missing, empty, or of the wrong type.

    Attributes:
        version_name: Value of "versionName".
        version: Value of "version", numbers already rendered as text.
        full_version: Value of "fullVersion".
    """

    version_name: str | None = None
    version: str | None = None
    full_version: str | None = None

    @classmethod
    def from_json(cls, json_text: str) -> ProductDescriptor:
        """Decode descriptor JSON text.

        Args:
            json_text: Raw descriptor file content.

        Returns:
            The decoded descriptor.

        Raises:
            MalformedInputError: If the text is not valid JSON or the top-level
                value is not an object.
        """
        try:
            obj = json.loads(json_text)
        except json.JSONDecodeError as err:
            raise MalformedInputError(f"descriptor is not valid JSON: {err}") from err

        if not isinstance(obj, dict):
            raise MalformedInputError(
                f"descriptor must be a JSON object, got {type(obj).__name__}"
            )

        return cls(
            version_name=_string_field(obj, "versionName"),
            version=_version_field(obj),
            full_version=_string_field(obj, "fullVersion"),
        )

    def best_version(self) -> str:
        """Return the highest-priority version field.

        Raises:
            VersionNotFoundError: If no field holds a usable value.
        """
        for candidate in (self.version_name, self.version, self.full_version):
            if candidate:
                return candidate
        raise VersionNotFoundError(
            "no versionName, version or fullVersion field found in descriptor"
        )


def extract_version_from_descriptor(json_text: str) -> str:
    """Extract the canonical version string from descriptor JSON.

    Args:
        json_text: Raw descriptor file content.

    Returns:
        Non-empty version string.

    Raises:
        MalformedInputError: If the text is not a JSON object.
        VersionNotFoundError: If none of the version fields is usable.

    Example:
        ```python
        extract_version_from_descriptor('{"versionName": "A", "version": "B"}')
        # "A"
        extract_version_from_descriptor('{"version": 14.0}')
        # "14"
        ```
    """
    return ProductDescriptor.from_json(json_text).best_version()
