"""
Path utilities for fuzzyedit.
"""

from pathlib import Path

DEFAULT_CONFIG_FILE = "fuzzyedit.yaml"


def get_fuzzyedit_dir() -> Path:
    """Get the .fuzzyedit runtime directory."""
    path = Path(".fuzzyedit")
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_pending_dir() -> Path:
    """Get the pending edits directory."""
    path = get_fuzzyedit_dir() / "pending"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_default_config_path() -> Path:
    """Get the project-level settings file path (may not exist)."""
    return Path(DEFAULT_CONFIG_FILE)
