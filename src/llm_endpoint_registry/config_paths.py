"""Configuration path handling for the endpoint registry.

This module implements path resolution for the persisted store files following
the XDG Base Directory Specification for user-specific configuration files.
"""

import os
from pathlib import Path
from typing import Optional

import platformdirs

# Application name used for directory paths
APP_NAME = "llm-endpoint-registry"

# Environment variable names
ENV_STORE_DIR = "LER_STORE_DIR"

# Store files are YAML documents named after their store key
STORE_FILE_SUFFIX = ".yaml"


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_store_dir() -> Path:
    """Get the directory holding persisted store files.

    Returns:
        ``$LER_STORE_DIR`` when set, otherwise the user config directory
    """
    env_dir = os.environ.get(ENV_STORE_DIR)
    if env_dir:
        return Path(env_dir)
    return get_user_config_dir()


def get_store_path(name: str, directory: Optional[Path] = None) -> Path:
    """Get the path of the file backing a named store record.

    Args:
        name: Store key, e.g. ``"access-control"``
        directory: Optional directory override

    Returns:
        Path to the store file
    """
    return (directory or get_store_dir()) / f"{name}{STORE_FILE_SUFFIX}"


def ensure_store_dir_exists(directory: Optional[Path] = None) -> Path:
    """Ensure that the store directory exists and is writable.

    Args:
        directory: Optional directory override

    Returns:
        The store directory

    Raises:
        OSError: If the directory cannot be created due to permission errors or other IO issues
        PermissionError: If the directory exists but is not writable
    """
    store_dir = directory or get_store_dir()

    if store_dir.exists():
        if not os.access(store_dir, os.W_OK):
            raise PermissionError(f"Store directory exists but is not writable: {store_dir}")
        return store_dir

    os.makedirs(store_dir, exist_ok=True)

    if not os.access(store_dir, os.W_OK):
        raise PermissionError(f"Created store directory but it is not writable: {store_dir}")
    return store_dir
