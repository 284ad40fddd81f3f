"""
Test helper utilities for setup-skaffold testing.

URLs and payloads that mimic a Skaffold GitHub release.
"""

import hashlib

from setup_skaffold.skaffold import SKAFFOLD_DOWNLOAD_URL

LATEST_RELEASE_URL = (
    "https://api.github.com/repos/GoogleContainerTools/skaffold/releases/latest"
)
BINARY_CONTENT = b"\x7fELF fake skaffold binary"


def binary_url(version: str, filename: str = "skaffold-linux-amd64") -> str:
    """
    Release download URL of one artifact.

    Example:
        >>> binary_url("2.13.0")
        'https://github.com/GoogleContainerTools/skaffold/releases/download/v2.13.0/skaffold-linux-amd64'
    """
    return f"{SKAFFOLD_DOWNLOAD_URL}/v{version}/{filename}"


def manifest_for(content: bytes, filename: str = "skaffold-linux-amd64") -> str:
    """Checksum manifest text as published next to a release binary."""
    return f"{hashlib.sha256(content).hexdigest()}  {filename}\n"
