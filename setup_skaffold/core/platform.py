"""
Host detection for setup-skaffold.

Skaffold publishes one binary per platform/architecture pair, named after the
Go toolchain conventions (``linux``, ``darwin``, ``windows`` and ``amd64``,
``arm64``). This module reads the running host's identifiers and translates
them into that naming.

Usage:
    from setup_skaffold.core.platform import detect_host

    host = detect_host()
    print(f"Platform: {host.platform}")
    print(f"Architecture: {host.arch}")
"""

import functools
import platform
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class HostInfo:
    """
    Platform and architecture of the running host, in Skaffold naming.

    Attributes:
        platform: Operating system ('linux', 'darwin', 'windows', ...)
        arch: CPU architecture ('amd64', 'arm64', ...)
    """

    platform: str
    arch: str

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


def resolve_arch() -> str:
    """
    Get the host CPU architecture in Skaffold naming.

    Returns:
        'amd64' for x64 hosts, the native identifier otherwise

    Example:
        >>> resolve_arch()  # on an x86_64 Linux box
        'amd64'
    """
    arch = _native_arch()

    if arch == "x64":
        return "amd64"

    return arch


def resolve_platform() -> str:
    """
    Get the host operating system in Skaffold naming.

    Returns:
        'windows' for win32 hosts, the native identifier otherwise

    Example:
        >>> resolve_platform()  # on macOS
        'darwin'
    """
    system = _native_platform()

    if system == "win32":
        return "windows"

    return system


@functools.lru_cache(maxsize=1)
def detect_host() -> HostInfo:
    """
    Detect the host platform and architecture.

    This function is cached - it only runs detection once per process.

    Returns:
        HostInfo for the running host
    """
    return HostInfo(platform=resolve_platform(), arch=resolve_arch())


def clear_host_cache():
    """Clear the cached host detection (mainly useful for tests)."""
    detect_host.cache_clear()


def _native_platform() -> str:
    """
    Read the native platform identifier.

    Returns:
        ``sys.platform`` ('linux', 'darwin', 'win32', 'freebsd13', ...)
    """
    return sys.platform


def _native_arch() -> str:
    """
    Read the native CPU architecture identifier.

    ``platform.machine()`` spells the same CPU differently per OS
    ('x86_64' on Linux, 'AMD64' on Windows, 'aarch64' vs 'arm64'), so it is
    normalised first.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'ia32', 'arm', or the
        lowercased machine string for anything else
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "ia32"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine
