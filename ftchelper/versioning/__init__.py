"""
Version-string extraction for ftc-helper.

This package turns semi-structured tool output into a canonical version
string. Both rules are pure functions of their input: no I/O, no state.

Modules
-------
descriptor : module
    JSON product descriptors (product-info.json) decoded into a typed record.
banner : module
    Free-text version banners such as the output of `git --version`.

Public API
----------
ProductDescriptor : dataclass
    Typed view of a product descriptor with optional version fields.
extract_version_from_descriptor : function
    Descriptor JSON text -> version string.
extract_version_from_banner : function
    Banner text -> version string.
format_number : function
    Render a JSON number as version text without exponent or ".0".

Errors
------
Both extractors raise MalformedInputError when the input does not parse as
the expected format and VersionNotFoundError when it parses but carries no
version. They never return an empty string.

Examples
--------
    >>> from ftchelper.versioning import extract_version_from_banner
    >>> extract_version_from_banner("git version 2.39.1.windows.1")
    '2.39.1'
    >>> from ftchelper.versioning import extract_version_from_descriptor
    >>> extract_version_from_descriptor('{"version": 14.5}')
    '14.5'
"""

from .banner import extract_version_from_banner
from .descriptor import (
    ProductDescriptor,
    extract_version_from_descriptor,
    format_number,
)

__all__ = [
    "ProductDescriptor",
    "extract_version_from_banner",
    "extract_version_from_descriptor",
    "format_number",
]
