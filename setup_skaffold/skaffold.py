"""
Skaffold release downloader and installer.

Downloads pre-built Skaffold binaries from GitHub releases, keeps them in
the tool cache, checks them against the published ``.sha256`` manifests and
installs them.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from setup_skaffold.core.directory import get_temp_dir
from setup_skaffold.core.download import download_tool
from setup_skaffold.core.exceptions import CacheError, InstallError
from setup_skaffold.core.filesystem import atomic_copy
from setup_skaffold.core.github import GITHUB_API_URL, fetch_latest_release
from setup_skaffold.core.platform import HostInfo, detect_host
from setup_skaffold.core.tool_cache import ToolCache
from setup_skaffold.core.verification import verify_manifest

logger = logging.getLogger(__name__)

TOOL_NAME = "skaffold"
SKAFFOLD_REPO = "GoogleContainerTools/skaffold"
SKAFFOLD_DOWNLOAD_URL = f"https://github.com/{SKAFFOLD_REPO}/releases/download"
LATEST_VERSION = "latest"
CHECKSUM_SUFFIX = ".sha256"
DEFAULT_INSTALL_PATH = Path("/usr/local/bin/skaffold")
INSTALL_MODE = 0o500


@dataclass
class SkaffoldArtifact:
    """A Skaffold binary and its checksum manifest, fetched for one version."""

    version: str
    filename: str
    path: Path
    checksum_path: Path


class SkaffoldDownloader:
    """
    Download, verify and install Skaffold.

    Example:
        >>> downloader = SkaffoldDownloader(ToolCache(Path('/opt/hostedtoolcache')))
        >>> version = downloader.get_version('latest')
        >>> artifact = downloader.fetch_binary(version)
        >>> if downloader.verify_binary(artifact):
        ...     downloader.install_binary(artifact.path)
    """

    def __init__(
        self,
        tool_cache: ToolCache,
        host: Optional[HostInfo] = None,
        repo: str = SKAFFOLD_REPO,
        download_base_url: str = SKAFFOLD_DOWNLOAD_URL,
        api_base_url: str = GITHUB_API_URL,
        install_path: Path = DEFAULT_INSTALL_PATH,
        download_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Skaffold downloader.

        Args:
            tool_cache: Cache that downloads are stored in
            host: Host information (auto-detected if None)
            repo: GitHub repository releases are read from
            download_base_url: Root of the release download URLs
            api_base_url: GitHub API root used to look up the latest release
            install_path: Where the binary is installed
            download_dir: Scratch directory for downloads (default:
                ``get_temp_dir()``)
            timeout: Optional HTTP timeout in seconds
        """
        self.tool_cache = tool_cache
        self.host = host or detect_host()
        self.repo = repo
        self.download_base_url = download_base_url.rstrip("/")
        self.api_base_url = api_base_url
        self.install_path = Path(install_path)
        self.download_dir = Path(download_dir) if download_dir else get_temp_dir()
        self.timeout = timeout

    def get_version(self, requested_version: str, token: Optional[str] = None) -> str:
        """
        Get the version of Skaffold to install.

        Args:
            requested_version: "latest" or an exact version such as "2.13.0"
            token: Optional GitHub token for the release lookup

        Returns:
            The newest released version for "latest", ``requested_version``
            otherwise

        Raises:
            ReleaseFetchError: If the latest release cannot be looked up
        """
        if requested_version != LATEST_VERSION:
            return requested_version

        release = fetch_latest_release(
            self.repo, token=token, api_base_url=self.api_base_url, timeout=self.timeout
        )

        version = release.tag_name
        if version.startswith("v"):
            version = version[1:]

        logger.debug(f"Latest release of {self.repo} is {release.tag_name}")
        return version

    def get_binary_filename(self) -> str:
        """
        Get the release filename of the binary for this host.

        Returns:
            e.g. 'skaffold-linux-amd64' or 'skaffold-windows-amd64.exe'
        """
        filename = f"{TOOL_NAME}-{self.host.platform}-{self.host.arch}"

        if self.host.platform == "windows":
            filename += ".exe"

        return filename

    def get_download_url(self, version: str, filename: str) -> str:
        """Get the release URL of one artifact."""
        return f"{self.download_base_url}/v{version}/{filename}"

    def fetch_artifact(self, tool_key: str, version: str, filename: str) -> Path:
        """
        Get an artifact from the tool cache, downloading it on a miss.

        A hit returns immediately without touching the network or checking
        the file.

        Args:
            tool_key: Tool cache name the artifact is stored under
            version: Exact version
            filename: Release filename of the artifact

        Returns:
            Path to the cached artifact

        Raises:
            DownloadError: If the artifact cannot be downloaded
            CacheError: If the tool cache cannot be read or written
        """
        arch = self.host.arch

        cache_dir = self.tool_cache.find(tool_key, version, arch)
        if cache_dir is not None:
            cached = cache_dir / filename
            if cached.is_file():
                logger.info(f"Using cached {filename} from {cache_dir}")
                return cached

        url = self.get_download_url(version, filename)
        downloaded = download_tool(url, self.download_dir, timeout=self.timeout)

        try:
            return self.tool_cache.cache_file(
                downloaded, filename, tool_key, version, arch
            )
        finally:
            downloaded.unlink(missing_ok=True)

    def fetch_binary(self, version: str) -> SkaffoldArtifact:
        """
        Fetch the Skaffold binary and its checksum manifest.

        Args:
            version: Exact version of Skaffold to fetch

        Returns:
            The fetched artifact
        """
        filename = self.get_binary_filename()

        binary_path = self.fetch_artifact(TOOL_NAME, version, filename)
        checksum_path = self.fetch_artifact(
            TOOL_NAME, version, f"{filename}{CHECKSUM_SUFFIX}"
        )

        return SkaffoldArtifact(
            version=version,
            filename=filename,
            path=binary_path,
            checksum_path=checksum_path,
        )

    def verify_binary(self, artifact: SkaffoldArtifact) -> bool:
        """
        Verify the checksum of the Skaffold binary.

        Returns:
            True if the checksum manifest lists the binary's digest

        Raises:
            CacheError: If the cached binary or manifest cannot be read
        """
        try:
            return verify_manifest(
                artifact.path, artifact.filename, artifact.checksum_path
            )
        except OSError as e:
            raise CacheError(
                f"Failed to read cached {artifact.filename} for verification: {e}"
            ) from e

    def install_binary(self, source_path: Path) -> Path:
        """
        Install the Skaffold binary.

        The source is made owner read+execute only, then copied over whatever
        is at the install path with the same mode.

        Args:
            source_path: Verified binary to install

        Returns:
            The install path

        Raises:
            InstallError: If the binary cannot be copied or chmod'ed
        """
        try:
            os.chmod(source_path, INSTALL_MODE)
            atomic_copy(source_path, self.install_path, mode=INSTALL_MODE)
        except OSError as e:
            raise InstallError(
                f"Failed to install {source_path} to {self.install_path}: {e}"
            ) from e

        logger.debug(f"Installed {source_path} to {self.install_path}")
        return self.install_path
