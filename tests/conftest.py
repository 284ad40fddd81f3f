"""
Pytest configuration and shared fixtures for setup-skaffold tests.
"""

from pathlib import Path

import pytest

from setup_skaffold.core.platform import HostInfo, clear_host_cache
from setup_skaffold.core.tool_cache import ToolCache
from setup_skaffold.skaffold import SkaffoldDownloader


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_host_cache():
    """Forget host detection between tests."""
    clear_host_cache()
    yield
    clear_host_cache()


@pytest.fixture
def linux_host() -> HostInfo:
    """Linux x64 host in Skaffold naming."""
    return HostInfo(platform="linux", arch="amd64")


@pytest.fixture
def tool_cache(tmp_path: Path) -> ToolCache:
    """Empty tool cache rooted in a temporary directory."""
    return ToolCache(tmp_path / "tool-cache")


@pytest.fixture
def install_path(tmp_path: Path) -> Path:
    """Install location standing in for /usr/local/bin/skaffold."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return bin_dir / "skaffold"


@pytest.fixture
def downloader(tmp_path, tool_cache, linux_host, install_path) -> SkaffoldDownloader:
    """Skaffold downloader for a Linux x64 host, isolated under tmp_path."""
    return SkaffoldDownloader(
        tool_cache,
        host=linux_host,
        install_path=install_path,
        download_dir=tmp_path / "downloads",
    )
