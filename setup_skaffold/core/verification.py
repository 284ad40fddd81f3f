"""
Checksum verification against published checksum manifests.

Skaffold publishes a ``<binary>.sha256`` file next to each release binary,
in the ``sha256sum`` output format::

    <hex-digest>  <filename>

A binary is accepted when the manifest contains the exact line built from
the binary's own digest and its expected filename.
"""

import hashlib
import logging
import secrets
from pathlib import Path

logger = logging.getLogger(__name__)


def compute_file_hash(file_path: Path, algorithm: str = "sha256") -> str:
    """
    Compute cryptographic hash of file.

    The file is streamed in chunks, so arbitrarily large files are fine.

    Args:
        file_path: Path to file
        algorithm: Hash algorithm ('sha256', 'sha512')

    Returns:
        Lowercase hex string of hash

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If algorithm is not supported

    Example:
        >>> hash_value = compute_file_hash(Path('skaffold-linux-amd64'))
        >>> print(f"SHA256: {hash_value}")
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    algorithm = algorithm.lower()

    if algorithm == "sha256":
        hasher = hashlib.sha256()
    elif algorithm == "sha512":
        hasher = hashlib.sha512()
    else:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    with open(file_path, "rb") as f:
        while chunk := f.read(8192):
            hasher.update(chunk)

    return hasher.hexdigest()


def expected_manifest_line(digest: str, filename: str) -> str:
    """Build the manifest line a binary with ``digest`` must appear as."""
    return f"{digest}  {filename}"


def verify_manifest(
    binary_path: Path, binary_filename: str, manifest_path: Path
) -> bool:
    """
    Verify a binary against its checksum manifest.

    Args:
        binary_path: Path to the downloaded binary
        binary_filename: Release filename the manifest refers to
            (e.g. 'skaffold-linux-amd64')
        manifest_path: Path to the checksum manifest

    Returns:
        True if the manifest lists the binary's digest for that filename,
        False otherwise

    Raises:
        FileNotFoundError: If the binary or the manifest doesn't exist
        OSError: If either file cannot be read

    Example:
        >>> verify_manifest(
        ...     Path('cache/skaffold-linux-amd64'),
        ...     'skaffold-linux-amd64',
        ...     Path('cache/skaffold-linux-amd64.sha256'),
        ... )
        True
    """
    expected = expected_manifest_line(compute_file_hash(binary_path), binary_filename)

    if not manifest_path.exists():
        raise FileNotFoundError(f"Checksum manifest not found: {manifest_path}")

    # Undecodable bytes can never form the expected line
    content = manifest_path.read_bytes().decode("utf-8", errors="replace")

    for line in content.splitlines():
        if _constant_time_compare(line.rstrip(), expected):
            logger.debug(f"Matched checksum line: {expected}")
            return True

    logger.debug(f"No line in {manifest_path.name} matches: {expected}")
    return False


def _constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings in constant time to prevent timing attacks.

    Args:
        a: First string
        b: Second string

    Returns:
        True if strings are equal
    """
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
