"""Configuration for setup-skaffold.

Settings are layered, lowest priority first:

1. built-in defaults
2. ``setup-skaffold.yaml`` (or the file given with ``--config``)
3. environment (GitHub Actions ``INPUT_*`` variables, ``GITHUB_TOKEN``,
   ``RUNNER_TOOL_CACHE``)
4. command-line options

Example ``setup-skaffold.yaml``::

    version: 2.13.0
    cache_dir: /opt/hostedtoolcache
    install_path: /usr/local/bin/skaffold
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from setup_skaffold.core.directory import get_tool_cache_dir
from setup_skaffold.core.exceptions import ConfigError
from setup_skaffold.core.github import GITHUB_API_URL
from setup_skaffold.skaffold import (
    DEFAULT_INSTALL_PATH,
    LATEST_VERSION,
    SKAFFOLD_DOWNLOAD_URL,
    SKAFFOLD_REPO,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "setup-skaffold.yaml"

# Environment variable -> config field. Later entries win.
ENV_VARS = (
    ("GITHUB_TOKEN", "github_token"),
    ("INPUT_VERSION", "version"),
    ("INPUT_GITHUB_TOKEN", "github_token"),
    ("INPUT_GITHUB-TOKEN", "github_token"),
)


@dataclass
class SetupConfig:
    """Complete setup-skaffold configuration."""

    version: str = LATEST_VERSION
    github_token: Optional[str] = None
    repository: str = SKAFFOLD_REPO
    download_base_url: str = SKAFFOLD_DOWNLOAD_URL
    api_base_url: str = GITHUB_API_URL
    cache_dir: Optional[Path] = None  # None: RUNNER_TOOL_CACHE or ~/.setup-skaffold
    install_path: Path = DEFAULT_INSTALL_PATH
    http_timeout: Optional[float] = None


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SetupConfig:
    """
    Build the effective configuration.

    Args:
        config_file: YAML file to read. When None, ``setup-skaffold.yaml`` in
            the current directory is read if it exists.
        overrides: Values from the command line; None values are ignored
        environ: Environment mapping (default: os.environ)

    Returns:
        The merged configuration

    Raises:
        ConfigError: If the file is missing (when given explicitly), is not
            valid YAML, or holds unknown or invalid settings
    """
    environ = os.environ if environ is None else environ

    if config_file is not None:
        data = _load_yaml(Path(config_file), required=True)
    else:
        data = _load_yaml(Path.cwd() / DEFAULT_CONFIG_FILE, required=False)

    for env_var, key in ENV_VARS:
        value = environ.get(env_var)
        if value:
            data[key] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    config = _build_config(data)

    if config.cache_dir is None:
        config.cache_dir = get_tool_cache_dir(environ)

    return config


def _load_yaml(path: Path, required: bool) -> Dict[str, Any]:
    """
    Load a YAML mapping from ``path``.

    Returns:
        The parsed mapping, or an empty dict if the optional file is absent
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"Config file not found (optional): {path}")
        return {}

    logger.debug(f"Loading configuration from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")

    return data


def _build_config(data: Dict[str, Any]) -> SetupConfig:
    """Validate raw settings and convert them into a SetupConfig."""
    known = {f.name for f in fields(SetupConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = dict(data)

    version = values.get("version")
    if version is not None and not isinstance(version, str):
        # YAML reads an unquoted 2.10 as the float 2.1
        raise ConfigError(
            f"version must be a string, got {version!r}; quote it in the config file"
        )
    if version is None or version.strip() == "":
        values["version"] = LATEST_VERSION
    else:
        values["version"] = version.strip()
        # The version becomes a cache directory name
        if any(part in values["version"] for part in ("/", "\\", "..")):
            raise ConfigError(f"Invalid version: {values['version']!r}")

    for key in ("cache_dir", "install_path"):
        if values.get(key) is not None:
            values[key] = Path(values[key]).expanduser()

    if values.get("http_timeout") is not None:
        try:
            values["http_timeout"] = float(values["http_timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"http_timeout must be a number, got {values['http_timeout']!r}"
            ) from e
        if values["http_timeout"] <= 0:
            raise ConfigError("http_timeout must be positive")

    for key in ("github_token", "repository", "download_base_url", "api_base_url"):
        if values.get(key) is not None:
            values[key] = str(values[key])

    if values.get("repository") is not None and values["repository"].count("/") != 1:
        raise ConfigError(
            f"repository must look like owner/repo, got {values['repository']!r}"
        )

    return SetupConfig(**values)
