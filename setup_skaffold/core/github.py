"""
GitHub release metadata client.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests.exceptions import RequestException

from setup_skaffold.core.exceptions import ReleaseFetchError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class GitHubRelease:
    """A GitHub release, reduced to the fields this package reads."""

    tag_name: str


def fetch_latest_release(
    repo: str,
    token: Optional[str] = None,
    api_base_url: str = GITHUB_API_URL,
    timeout: Optional[float] = None,
) -> GitHubRelease:
    """
    Get the latest release for the given repository.

    Args:
        repo: Repository in the form ``owner/repo``
        token: Optional access token, sent as a bearer token
        api_base_url: GitHub API root (GitHub Enterprise installs differ)
        timeout: Optional request timeout in seconds

    Returns:
        The latest release

    Raises:
        ReleaseFetchError: If the request fails, the API answers with an
            error status, or the response is not a release object

    Example:
        >>> release = fetch_latest_release("GoogleContainerTools/skaffold")
        >>> release.tag_name
        'v2.13.0'
    """
    url = f"{api_base_url.rstrip('/')}/repos/{repo}/releases/latest"

    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    logger.debug(f"Requesting {url}")

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except RequestException as e:
        raise ReleaseFetchError(repo, str(e)) from e

    if response.status_code >= 400:
        raise ReleaseFetchError(repo, _error_message(response))

    try:
        body = response.json()
    except ValueError as e:
        raise ReleaseFetchError(repo, f"response is not valid JSON: {e}") from e

    tag_name = body.get("tag_name") if isinstance(body, dict) else None
    if not isinstance(tag_name, str) or not tag_name:
        raise ReleaseFetchError(repo, "response has no tag_name")

    return GitHubRelease(tag_name=tag_name)


def _error_message(response: requests.Response) -> str:
    """
    Extract the human-readable message from a GitHub error response.

    GitHub error bodies look like ``{"message": "Not Found", ...}``. Anything
    else falls back to the HTTP status line.
    """
    fallback = f"HTTP {response.status_code} {response.reason or ''}".strip()

    try:
        body = response.json()
    except ValueError:
        return fallback

    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, str) and message:
        return message

    return fallback
