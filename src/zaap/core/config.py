"""Explicit scan configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SYSTEM_ROOT = Path("/")


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Everything the scanner needs to know about its environment.

    ``home`` is the per-user directory that holds ``Library``;
    ``system_root`` holds the system-wide ``Library``.  Nothing in the
    core reads these from the process environment.
    """

    home: Path
    system_root: Path = DEFAULT_SYSTEM_ROOT
    verbose: bool = False
    parallel: bool = False
