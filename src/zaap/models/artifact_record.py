"""Artifact categories and the classified scan result."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator


class Category(Enum):
    """Kinds of artifacts an application leaves behind.

    Declaration order is the order used for display and for deletion.
    """

    PREFERENCES = "Preferences"
    APPLICATION_SUPPORT = "Application Support"
    CACHES = "Caches"
    LOGS = "Logs"
    SAVED_STATE = "Saved Application State"
    CONTAINERS = "Containers"
    CONTROL_PANELS = "Control Panels"
    STARTUP_ITEMS = "Startup Items"
    QUICK_LOOK = "QuickLook Plugins"
    SCREEN_SAVERS = "Screen Savers"
    INPUT_METHODS = "Input Methods"
    FONTS = "Fonts"

    @property
    def label(self) -> str:
        return self.value


def _normalize(path: Path) -> str:
    return os.path.normpath(os.path.abspath(path))


@dataclass(slots=True)
class ArtifactRecord:
    """Paths found for one application, grouped by category.

    Every category is present; categories without matches map to an
    empty list.  Within a category a path is stored once (compared by
    normalized absolute path) and listing order is kept.  The same path
    may still appear under two different categories.
    """

    paths: dict[Category, list[Path]] = field(default_factory=lambda: {c: [] for c in Category})
    _seen: dict[Category, set[str]] = field(default_factory=lambda: {c: set() for c in Category}, repr=False)

    def add(self, category: Category, path: Path) -> bool:
        """Record ``path`` under ``category``. Returns False for a duplicate."""
        key = _normalize(path)
        if key in self._seen[category]:
            return False
        self._seen[category].add(key)
        self.paths[category].append(path)
        return True

    def __getitem__(self, category: Category) -> list[Path]:
        return self.paths[category]

    def items(self) -> Iterator[tuple[Category, list[Path]]]:
        """Iterate categories in declaration order."""
        for category in Category:
            yield category, self.paths[category]

    def all_paths(self) -> list[Path]:
        """Every path, in category order then path order."""
        return [path for _, paths in self.items() for path in paths]

    @property
    def total(self) -> int:
        return sum(len(paths) for paths in self.paths.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0
