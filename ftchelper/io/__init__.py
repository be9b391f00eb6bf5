"""Network input for ftc-helper.

Modules:

http : module
    Page and API fetches (text and JSON) with uniform FetchFailedError
    reporting.
download : module
    Streaming, hashed, atomic file downloads.

Public API:

fetch_text : function
    GET a URL and return the body as text.
fetch_json : function
    GET a URL and decode the body as JSON.
download_file : function
    Download a URL to a local file, returning (path, sha256).
make_session : function
    requests.Session preconfigured with the ftc-helper User-Agent.
github_headers : function
    Request headers for the GitHub REST API.

Example:
    from pathlib import Path
    from ftchelper.io import download_file

    path, sha256 = download_file(
        "https://example.com/installer.exe", Path("installer.exe")
    )
"""

from .download import download_file
from .http import fetch_json, fetch_text, github_headers, make_session

__all__ = [
    "download_file",
    "fetch_json",
    "fetch_text",
    "github_headers",
    "make_session",
]
