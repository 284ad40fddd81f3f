"""
Directory resolution for setup-skaffold.

Directory Structure:
    Tool cache (``$RUNNER_TOOL_CACHE`` or ~/.setup-skaffold/tool-cache/):
        - skaffold/<version>/<arch>/           : cached binary + checksum manifest
        - skaffold/<version>/<arch>.complete   : marker written after caching

    Temp downloads (``$RUNNER_TEMP`` or the system temp dir):
        - setup-skaffold/                      : in-flight downloads
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from setup_skaffold.core.exceptions import ConfigError


def get_default_home_dir() -> Path:
    """
    Get the platform-specific setup-skaffold home directory.

    Returns:
        Path: %USERPROFILE%\\.setup-skaffold on Windows, ~/.setup-skaffold
        elsewhere.
    """
    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise ConfigError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine cache directory."
            )
        return Path(user_profile) / ".setup-skaffold"
    else:  # Linux/macOS
        return Path.home() / ".setup-skaffold"


def get_tool_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the default tool cache root.

    GitHub-hosted runners export ``RUNNER_TOOL_CACHE``; reusing it lets a
    cached Skaffold survive between jobs on self-hosted runners.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Path: The tool cache root directory
    """
    environ = os.environ if environ is None else environ

    runner_cache = environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)

    return get_default_home_dir() / "tool-cache"


def get_temp_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the directory that in-flight downloads are written to.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Path: ``$RUNNER_TEMP/setup-skaffold`` or ``<tmp>/setup-skaffold``
    """
    environ = os.environ if environ is None else environ

    runner_temp = environ.get("RUNNER_TEMP")
    base = Path(runner_temp) if runner_temp else Path(tempfile.gettempdir())

    return base / "setup-skaffold"
