"""
Centralized exception hierarchy for setup-skaffold.

Every stage of the install pipeline raises one of these. None of them is
retried or recovered where it is raised; they propagate to the CLI, which
logs the message and exits with a failure status.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SetupSkaffoldError(Exception):
    """Base exception for all setup-skaffold errors."""

    pass


class ConfigError(SetupSkaffoldError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Network Exceptions
# ============================================================================


class ReleaseFetchError(SetupSkaffoldError):
    """Raised when the release metadata endpoint cannot provide a release."""

    def __init__(self, repo: str, message: str):
        self.repo = repo
        self.message = message
        super().__init__(
            f'Failed to fetch latest GitHub release for repo "{repo}". '
            f"Reason: {message}"
        )


class DownloadError(SetupSkaffoldError):
    """Raised when a release artifact cannot be downloaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class CacheError(SetupSkaffoldError):
    """Raised when the local tool cache cannot be read or written."""

    pass


class ChecksumMismatchError(SetupSkaffoldError):
    """Raised when a binary's digest is not listed in its checksum manifest."""

    def __init__(self, filename: str, actual_hash: str):
        self.filename = filename
        self.actual_hash = actual_hash
        super().__init__(
            f"Checksum mismatch for {filename}: computed sha256 {actual_hash} "
            "is not listed in the checksum manifest"
        )


class InstallError(SetupSkaffoldError):
    """Raised when the verified binary cannot be installed."""

    pass
