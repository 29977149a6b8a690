"""
Path utilities and constants.

This module provides helper functions for working with paths in the application.
"""

import platform
from pathlib import Path


APP_NAME = "nodetree"


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory.

    Returns:
        The path (for chaining).

    Raises:
        IOError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError as e:
        raise IOError(f"Failed to create directory {path}: {e}")


def get_persistent_data_directory() -> Path:
    """
    Get the persistent data directory for the application (cross-platform).

    This provides a location where the node store, settings and logs are
    kept across sessions.

    Returns:
        Path to the persistent data directory.

    Platform-specific locations:
        - Windows: %APPDATA%/LocalLow/nodetree
        - macOS: ~/Library/Application Support/nodetree
        - Linux: ~/.config/nodetree
    """
    system = platform.system()

    if system == "Windows":
        base = Path.home() / "AppData" / "LocalLow"
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path.home() / ".config"

    data_dir = base / APP_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    return data_dir


def get_store_file_path() -> Path:
    """
    Get the path to the default key-value store file.

    Returns:
        Path to the store.json file.
    """
    return get_persistent_data_directory() / "store.json"


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to the log.txt file.
    """
    return get_persistent_data_directory() / "log.txt"


def get_old_log_file_path() -> Path:
    """
    Get the path to the old log file.

    Returns:
        Path to the log.old.txt file.
    """
    return get_persistent_data_directory() / "log.old.txt"
