"""
Local tool cache keyed by (tool, version, arch).

The layout matches the tool cache used by GitHub Actions runners, so a
Skaffold cached by this package is found by other actions and vice versa::

    <root>/<tool>/<version>/<arch>/<filename>
    <root>/<tool>/<version>/<arch>.complete

An entry only counts as present once its ``.complete`` marker exists. Entries
never expire.
"""

import logging
from pathlib import Path
from typing import Optional

from setup_skaffold.core.directory import get_tool_cache_dir
from setup_skaffold.core.exceptions import CacheError
from setup_skaffold.core.filesystem import atomic_copy

logger = logging.getLogger(__name__)


class ToolCache:
    """
    Filesystem cache of downloaded tool artifacts.

    Example:
        >>> cache = ToolCache(Path('/opt/hostedtoolcache'))
        >>> cached = cache.cache_file(
        ...     Path('/tmp/download'), 'skaffold-linux-amd64',
        ...     'skaffold', '2.13.0', 'amd64',
        ... )
        >>> cache.find('skaffold', '2.13.0', 'amd64')
        PosixPath('/opt/hostedtoolcache/skaffold/2.13.0/amd64')
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize tool cache.

        Args:
            root: Cache root directory (default: ``get_tool_cache_dir()``)
        """
        self.root = Path(root) if root is not None else get_tool_cache_dir()

        logger.debug(f"Initialized tool cache at {self.root}")

    def entry_dir(self, tool: str, version: str, arch: str) -> Path:
        """Get the directory an entry lives in, whether or not it exists."""
        if not tool or not version or not arch:
            raise ValueError("tool, version and arch are all required")

        return self.root / tool / version / arch

    def _marker_path(self, tool: str, version: str, arch: str) -> Path:
        entry = self.entry_dir(tool, version, arch)
        return entry.parent / f"{entry.name}.complete"

    def find(self, tool: str, version: str, arch: str) -> Optional[Path]:
        """
        Look up a cache entry.

        Args:
            tool: Tool name (e.g. 'skaffold')
            version: Exact version (e.g. '2.13.0')
            arch: Architecture (e.g. 'amd64')

        Returns:
            Path to the entry directory, or None on a miss

        Raises:
            CacheError: If the cache cannot be inspected
        """
        entry = self.entry_dir(tool, version, arch)

        try:
            found = entry.is_dir() and self._marker_path(tool, version, arch).is_file()
        except OSError as e:
            raise CacheError(f"Failed to read tool cache entry {entry}: {e}") from e

        if found:
            logger.debug(f"Found {tool} {version} ({arch}) in tool cache: {entry}")
            return entry

        logger.debug(f"{tool} {version} ({arch}) is not in the tool cache")
        return None

    def cache_file(
        self,
        source_path: Path,
        filename: str,
        tool: str,
        version: str,
        arch: str,
    ) -> Path:
        """
        Copy a file into a cache entry.

        Files already present under other names in the same entry are kept,
        so several artifacts of one version can be cached one at a time.

        Args:
            source_path: File to cache
            filename: Name to store the file under
            tool: Tool name
            version: Exact version
            arch: Architecture

        Returns:
            Path to the cached file

        Raises:
            CacheError: If the file cannot be copied into the cache
        """
        entry = self.entry_dir(tool, version, arch)
        destination = entry / filename

        logger.debug(f"Caching {source_path} as {destination}")

        try:
            entry.mkdir(parents=True, exist_ok=True)
            atomic_copy(source_path, destination)
            self._marker_path(tool, version, arch).touch()
        except OSError as e:
            raise CacheError(
                f"Failed to cache {filename} for {tool} {version} ({arch}): {e}"
            ) from e

        return destination
