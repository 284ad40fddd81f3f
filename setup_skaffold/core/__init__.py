"""
Core functionality for setup-skaffold.

This package contains the foundational modules that the Skaffold installer
depends on.
"""

from .platform import (
    HostInfo,
    detect_host,
    resolve_arch,
    resolve_platform,
    clear_host_cache,
)

from .tool_cache import (
    ToolCache,
)

from .exceptions import (
    SetupSkaffoldError,
    ConfigError,
    ReleaseFetchError,
    DownloadError,
    CacheError,
    ChecksumMismatchError,
    InstallError,
)

__all__ = [
    # Platform
    "HostInfo",
    "detect_host",
    "resolve_arch",
    "resolve_platform",
    "clear_host_cache",
    # Cache
    "ToolCache",
    # Exceptions
    "SetupSkaffoldError",
    "ConfigError",
    "ReleaseFetchError",
    "DownloadError",
    "CacheError",
    "ChecksumMismatchError",
    "InstallError",
]
