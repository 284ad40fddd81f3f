"""
Install pipeline: resolve, fetch, verify, install.

Every stage runs only after the previous one succeeded. A failure anywhere
aborts the run; earlier stages are not rolled back, so a downloaded binary
stays cached even when it later fails verification.
"""

import logging
from pathlib import Path
from typing import Optional

from setup_skaffold.config import SetupConfig
from setup_skaffold.core.exceptions import ChecksumMismatchError
from setup_skaffold.core.tool_cache import ToolCache
from setup_skaffold.core.verification import compute_file_hash
from setup_skaffold.skaffold import SkaffoldDownloader

logger = logging.getLogger(__name__)


def create_downloader(config: SetupConfig) -> SkaffoldDownloader:
    """Build a SkaffoldDownloader from configuration."""
    return SkaffoldDownloader(
        ToolCache(config.cache_dir),
        repo=config.repository,
        download_base_url=config.download_base_url,
        api_base_url=config.api_base_url,
        install_path=config.install_path,
        timeout=config.http_timeout,
    )


def run_pipeline(
    config: SetupConfig, downloader: Optional[SkaffoldDownloader] = None
) -> Path:
    """
    Install the configured Skaffold version.

    Args:
        config: Effective configuration
        downloader: Downloader to use (built from ``config`` if None)

    Returns:
        Path Skaffold was installed to

    Raises:
        ReleaseFetchError: If "latest" cannot be resolved
        DownloadError: If the binary or its manifest cannot be downloaded
        CacheError: If the tool cache cannot be read or written
        ChecksumMismatchError: If the binary does not match its manifest
        InstallError: If the binary cannot be installed
    """
    downloader = downloader or create_downloader(config)

    logger.info(f'Requested version of Skaffold is "{config.version}"')
    version = downloader.get_version(config.version, token=config.github_token)
    logger.info(f"Using version {version} for {downloader.host}")

    logger.info("Fetching binary...")
    artifact = downloader.fetch_binary(version)

    logger.info("Verifying checksum...")
    if not downloader.verify_binary(artifact):
        raise ChecksumMismatchError(artifact.filename, compute_file_hash(artifact.path))

    logger.info("Installing binary...")
    install_path = downloader.install_binary(artifact.path)

    logger.info(f"Skaffold {version} is ready to use at {install_path}")
    return install_path
