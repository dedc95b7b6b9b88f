"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

log = logging.getLogger(__name__)


def has_command(name: str) -> bool:
    """Check if a command exists on the system."""
    return shutil.which(name) is not None


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree.

    A path that does not exist is not an error.  Symlinks are removed
    themselves, never followed.  Any other failure raises OSError.
    """
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except (FileNotFoundError, NotADirectoryError):
        # Vanished before or during removal
        if os.path.lexists(path):
            raise
        log.debug("Already gone: %s", path)
