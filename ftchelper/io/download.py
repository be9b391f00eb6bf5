"""
Streaming file download for ftc-helper.

Installers and FTC release archives are large (hundreds of MB for Android
Studio), so downloads are streamed to disk rather than buffered.

Key Features:

- **Atomic Writes** - Data goes to a temporary <name>.part file that is
  renamed over the target only after the transfer completed.
- **Integrity** - SHA-256 is computed while streaming and returned to the
  caller; an optional expected digest is verified.
- **Progress** - A single-line percentage indicator when the server sends a
  Content-Length.

Example:
    >>> from pathlib import Path
    >>> from ftchelper.io import download_file
    >>> path, sha256 = download_file(
    ...     "https://github.com/git-for-windows/git/releases/download/v2.43.0.windows.1/Git-2.43.0-64-bit.exe",
    ...     Path("Git-2.43.0-64-bit.exe"),
    ... )

Notes:
- Redirects are followed (GitHub release assets redirect to a CDN).
- No retries and no conditional requests; a failed download leaves no file
  behind and raises FetchFailedError.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
import time

import requests

from ftchelper.exceptions import FetchFailedError
from ftchelper.logging import Logger, get_global_logger

from .http import make_session

# Stream size per chunk (1 MiB).
DEFAULT_CHUNK = 1024 * 1024


def download_file(
    url: str,
    destination: Path,
    *,
    expected_sha256: str | None = None,
    timeout: int = 300,
    show_progress: bool = True,
    logger: Logger | None = None,
) -> tuple[Path, str]:
    """Download url to the file path destination.

    Args:
        url: Source URL.
        destination: Target file path. Parent directories are created.
        expected_sha256: Optional known SHA-256 (hex). On mismatch the file
            is removed and FetchFailedError is raised.
        timeout: Per-request timeout (seconds).
        show_progress: Print a percentage indicator while downloading.
        logger: Optional logger; defaults to the global logger.

    Returns:
        A tuple (file_path, sha256_hex).

    Raises:
        FetchFailedError: On non-2xx status, transport failure, a failed
            write to disk, or checksum mismatch.
    """
    logger = logger or get_global_logger()
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    tmp = destination.with_name(destination.name + ".part")

    logger.verbose("HTTP", f"GET {url}")

    with make_session() as session:
        try:
            resp = session.get(url, stream=True, allow_redirects=True, timeout=timeout)
        except requests.exceptions.RequestException as err:
            raise FetchFailedError(f"download failed for {url}: {err}", url=url) from err

        with resp:
            for hist in resp.history:
                logger.verbose(
                    "HTTP",
                    f"Redirect {hist.status_code} -> {hist.headers.get('Location', 'unknown')}",
                )

            if not resp.ok:
                raise FetchFailedError(
                    f"download failed for {url}: status {resp.status_code}",
                    url=url,
                    status_code=resp.status_code,
                )

            logger.verbose("HTTP", f"Response: {resp.status_code} {resp.reason}")
            total_size = int(resp.headers.get("Content-Length", "0") or 0)
            if total_size:
                logger.verbose(
                    "HTTP",
                    f"Content-Length: {total_size} ({total_size / (1024 * 1024):.1f} MB)",
                )

            logger.verbose("FILE", f"Downloading to: {tmp}")
            sha = hashlib.sha256()
            downloaded = 0
            last_percent = -1
            started_at = time.time()

            try:
                with tmp.open("wb") as f:
                    for chunk in resp.iter_content(chunk_size=DEFAULT_CHUNK):
                        if not chunk:
                            continue
                        f.write(chunk)
                        sha.update(chunk)
                        downloaded += len(chunk)

                        if show_progress and total_size:
                            pct = int(downloaded * 100 / total_size)
                            if pct != last_percent:
                                print(f"download progress: {pct}%", end="\r")
                                last_percent = pct
            except requests.exceptions.RequestException as err:
                tmp.unlink(missing_ok=True)
                raise FetchFailedError(
                    f"download interrupted for {url}: {err}", url=url
                ) from err
            except OSError as err:
                tmp.unlink(missing_ok=True)
                raise FetchFailedError(f"could not write {tmp}: {err}", url=url) from err

    digest = sha.hexdigest()
    if expected_sha256 and digest.lower() != expected_sha256.lower():
        tmp.unlink(missing_ok=True)
        raise FetchFailedError(
            f"sha256 mismatch for {destination.name}: got {digest}, expected {expected_sha256}",
            url=url,
        )

    logger.verbose("FILE", f"Atomic rename: {tmp.name} -> {destination.name}")
    tmp.replace(destination)

    elapsed = time.time() - started_at
    if show_progress and total_size:
        print()
    logger.verbose("FILE", f"SHA-256: {digest}")
    logger.verbose("FILE", f"Download complete: {destination} in {elapsed:.1f}s")

    return destination, digest
