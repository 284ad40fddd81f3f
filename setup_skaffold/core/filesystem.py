"""
Filesystem helpers shared by the tool cache and the installer.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union


def atomic_copy(
    source: Union[str, Path],
    destination: Union[str, Path],
    mode: Optional[int] = None,
) -> Path:
    """
    Copy a file atomically using temp file + rename.

    The destination is never seen in a partially-written state, and an
    existing destination is replaced even when its own permissions forbid
    writing to it (only the parent directory must be writable).

    Args:
        source: File to copy
        destination: Path to copy to
        mode: Permission bits to set on the copy before it is renamed into
            place (default: keep the temp file's mode)

    Returns:
        The destination path

    Raises:
        OSError: If the copy, chmod or rename fails

    Example:
        >>> atomic_copy('cache/skaffold-linux-amd64', '/usr/local/bin/skaffold', mode=0o500)
    """
    source = Path(source)
    destination = Path(destination)

    # Create temp file in same directory (ensures same filesystem)
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "wb") as dst, open(source, "rb") as src:
            shutil.copyfileobj(src, dst)

        if mode is not None:
            os.chmod(temp_path, mode)

        # Atomic rename (replaces destination if it exists)
        temp_path.replace(destination)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    return destination
