# SPDX-License-Identifier: MIT
"""
Scanner configuration loader for KeyHunter.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from keyhunter import __version__
from keyhunter.core.exceptions import KeyHunterConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".keyhunter.yml", ".keyhunter.yaml")

DEFAULT_SKIP_DIRS = ["node_modules", ".git", "dist", "coverage", ".vite-cache"]

DEFAULT_SKIP_EXTENSIONS = [
    ".jpg",
    ".png",
    ".gif",
    ".pdf",
    ".zip",
    ".svg",
    ".ico",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
]

DEFAULT_REQUEST_TIMEOUT = 30.0


def load_scanner_config(config_path: Optional[str] = None, repo_root: str = ".") -> Dict[str, Any]:
    """
    Load scanner configuration following the specified search order.

    Args:
        config_path: Explicit config path from --config CLI flag
        repo_root: Scan root searched for .keyhunter.yml/.keyhunter.yaml

    Returns:
        Dictionary containing scanner configuration

    Raises:
        KeyHunterConfigError: If config file is malformed or explicitly provided config is missing
    """
    # 1. If CLI --config provided → load it
    if config_path:
        try:
            config_abs_path = Path(config_path).resolve()
            found = config_abs_path.exists()
        except (OSError, ValueError) as e:
            raise KeyHunterConfigError(
                f"Invalid config path: {e}", config_path=str(config_path)
            ) from e
        if not found:
            raise KeyHunterConfigError(
                f"Specified config file not found: {config_abs_path}",
                config_path=str(config_abs_path)
            )
        config = _load_config_file(config_abs_path)
        logger.info("Loaded config: %s", config_abs_path)
        return config

    # 2. Look for .keyhunter.yml or .keyhunter.yaml at the scan root
    try:
        repo_path = Path(repo_root).resolve()
        search_root = repo_path.is_dir()
    except (OSError, ValueError):
        # an unusable root is reported by the scan itself
        search_root = False
    if search_root:
        for config_name in CONFIG_FILENAMES:
            config_file = repo_path / config_name
            if config_file.exists():
                config = _load_config_file(config_file)
                logger.info("Loaded config: %s", config_file)
                return config

    # 3. Use built-in defaults
    logger.info("Using default scanner config")
    return get_default_scanner_config()


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        return _load_yaml_config(config_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise KeyHunterConfigError(
            f"Failed to parse config file: {e}",
            config_path=str(config_path)
        ) from e


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate YAML config file."""
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    config = _apply_scanner_defaults(config)
    _validate_scanner_config(config)
    return config


def _apply_scanner_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply default values to scanner configuration."""
    for key, value in get_default_scanner_config().items():
        config.setdefault(key, value)
    return config


def _validate_scanner_config(config: Dict[str, Any]) -> None:
    for key in ("skip_dirs", "skip_extensions"):
        value = config[key]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{key} must be a list of strings")

    if not isinstance(config["broad_patterns"], bool):
        raise ValueError("broad_patterns must be true or false")

    timeout = config["request_timeout"]
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("request_timeout must be a positive number")


def get_default_scanner_config() -> Dict[str, Any]:
    """
    Get the default scanner configuration.

    Returns:
        Dictionary with default scanner settings
    """
    return {
        "skip_dirs": list(DEFAULT_SKIP_DIRS),
        "skip_extensions": list(DEFAULT_SKIP_EXTENSIONS),
        "broad_patterns": True,
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,
        "user_agent": f"KeyHunter/{__version__}",
    }


def create_default_config_template() -> str:
    """
    Create a minimal .keyhunter.yml template with commented examples.

    Returns:
        YAML string with default configuration template
    """
    return """# KeyHunter Scanner Configuration

# Directory names never descended into
skip_dirs:
  - "node_modules"
  - ".git"
  - "dist"
  - "coverage"
  - ".vite-cache"
  # - "build"

# File extensions excluded from content and filename checks
skip_extensions:
  - ".jpg"
  - ".png"
  - ".gif"
  - ".pdf"
  - ".zip"
  - ".svg"
  - ".ico"
  - ".woff"
  - ".woff2"
  - ".ttf"
  - ".eot"

# Cohere, AI21 and Azure OpenAI patterns match any 32/40 character
# alphanumeric or hex string. Set to false to drop them.
broad_patterns: true

# Seconds to wait for a remote page when scanning a URL
request_timeout: 30
"""
