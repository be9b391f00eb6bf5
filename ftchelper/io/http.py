"""
HTTP fetch helpers for ftc-helper.

Every network read in ftc-helper (download pages, GitHub API calls, release
archives) goes through this module so that failures surface the same way:

- Non-2xx responses raise FetchFailedError carrying the URL and status code.
- Transport failures (DNS, refused connections, timeouts) raise
  FetchFailedError with status_code=None and the original exception chained.

Failed fetches are not retried.

Example:
    >>> from ftchelper.io import fetch_text
    >>> html = fetch_text("https://developer.android.com/studio")

Notes:
- Requests carry a fixed ftc-helper User-Agent.
- Timeouts are per request (connect + read), not total transfer time.
"""

from __future__ import annotations

from typing import Any

import requests

from ftchelper import __version__
from ftchelper.exceptions import FetchFailedError, MalformedInputError
from ftchelper.logging import Logger, get_global_logger

DEFAULT_TIMEOUT = 30

GITHUB_API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


def make_session() -> requests.Session:
    """
    Create a requests.Session with the ftc-helper User-Agent.
    """
    s = requests.Session()
    s.headers.update({"User-Agent": f"ftc-helper/{__version__}"})
    return s


def github_headers(token: str | None = None) -> dict[str, str]:
    """
    Headers for GitHub REST API calls, authenticated when a token is given.
    """
    headers = dict(GITHUB_API_HEADERS)
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def _get(
    url: str,
    *,
    headers: dict[str, str] | None,
    timeout: int,
    logger: Logger,
) -> requests.Response:
    logger.verbose("HTTP", f"GET {url}")
    with make_session() as session:
        try:
            response = session.get(url, headers=headers, timeout=timeout)
        except requests.exceptions.RequestException as err:
            raise FetchFailedError(f"Failed to fetch {url}: {err}", url=url) from err

    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise FetchFailedError(
            f"Failed to fetch {url}: {response.status_code} {response.reason}",
            url=url,
            status_code=response.status_code,
        ) from err

    logger.verbose("HTTP", f"Response: {response.status_code} {response.reason}")
    return response


def fetch_text(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    logger: Logger | None = None,
) -> str:
    """Fetch a URL and return the decoded body.

    Args:
        url: URL to GET.
        headers: Extra request headers.
        timeout: Per-request timeout in seconds.
        logger: Optional logger; defaults to the global logger.

    Returns:
        Response body as text.

    Raises:
        FetchFailedError: On non-2xx status or transport failure.
    """
    logger = logger or get_global_logger()
    response = _get(url, headers=headers, timeout=timeout, logger=logger)
    text = response.text
    logger.debug("HTTP", f"Body: {len(text)} characters")
    return text


def fetch_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    logger: Logger | None = None,
) -> Any:
    """Fetch a URL and decode the body as JSON.

    Raises:
        FetchFailedError: On non-2xx status or transport failure.
        MalformedInputError: If the body is not valid JSON.
    """
    logger = logger or get_global_logger()
    response = _get(url, headers=headers, timeout=timeout, logger=logger)
    try:
        return response.json()
    except ValueError as err:
        raise MalformedInputError(f"Response from {url} is not valid JSON") from err
