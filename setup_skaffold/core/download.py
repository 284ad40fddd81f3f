"""
Network download of release artifacts.

Artifacts are streamed to disk in chunks so that large binaries never sit in
memory. A failed download is fatal: there is no retry and no resume.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from setup_skaffold.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_tool(
    url: str,
    destination_dir: Path,
    timeout: Optional[float] = None,
) -> Path:
    """
    Download a file from URL into a uniquely named file.

    Args:
        url: URL to download from
        destination_dir: Directory to write the download into (created if
            missing)
        timeout: Optional request timeout in seconds

    Returns:
        Path to the downloaded file

    Raises:
        DownloadError: If the request fails or the server returns an error
        ValueError: If URL is empty

    Example:
        >>> path = download_tool(
        ...     "https://github.com/GoogleContainerTools/skaffold/releases/download/v2.13.0/skaffold-linux-amd64",
        ...     Path("/tmp/setup-skaffold"),
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    destination_dir = Path(destination_dir)
    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DownloadError(url, f"cannot create {destination_dir}: {e}") from e

    destination = destination_dir / str(uuid.uuid4())

    logger.info(f"Downloading from {url}")

    try:
        with requests.get(
            url, stream=True, timeout=timeout, allow_redirects=True
        ) as response:
            response.raise_for_status()

            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)

    except (RequestException, OSError) as e:
        logger.debug(f"Removing partial download {destination}")
        destination.unlink(missing_ok=True)
        raise DownloadError(url, str(e)) from e

    logger.debug(f"Download complete: {destination}")
    return destination
