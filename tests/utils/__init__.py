"""
Test utilities for setup-skaffold testing.
"""

from .helpers import (
    LATEST_RELEASE_URL,
    BINARY_CONTENT,
    binary_url,
    manifest_for,
)

__all__ = [
    "LATEST_RELEASE_URL",
    "BINARY_CONTENT",
    "binary_url",
    "manifest_for",
]
