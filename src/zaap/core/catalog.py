"""Fixed table of places where application artifacts live on macOS."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from zaap.core.config import ScanConfig
from zaap.core.matcher import contains_fold, prefix_match
from zaap.models.artifact_record import Category

# (entry name, application name, bundle identifier) -> bool
EntryPredicate = Callable[[str, str, str], bool]


class Base(Enum):
    """Which root a catalog directory hangs off."""

    HOME = "home"
    SYSTEM = "system"


class RuleKind(Enum):
    DIRECT = "direct"
    LISTING = "listing"


def name_contains(entry: str, name: str, identifier: str) -> bool:
    return contains_fold(entry, name)


def identifier_prefix(entry: str, name: str, identifier: str) -> bool:
    return prefix_match(entry, identifier)


def identifier_or_name_contains(entry: str, name: str, identifier: str) -> bool:
    return contains_fold(entry, identifier) or contains_fold(entry, name)


@dataclass(frozen=True)
class CatalogRule:
    """One directory of the catalog and how entries in it are matched.

    DIRECT rules build a single candidate ``<directory>/<identifier><suffix>``
    and only check that it exists.  LISTING rules list the directory and
    keep every entry accepted by ``predicate``.
    """

    category: Category
    base: Base
    directory: str
    kind: RuleKind
    suffix: str = ""
    predicate: EntryPredicate = name_contains
    description: str = ""

    def root(self, config: ScanConfig) -> Path:
        return config.home if self.base is Base.HOME else config.system_root

    def resolve(self, config: ScanConfig) -> Path:
        """Concrete directory for this rule under ``config``."""
        return self.root(config) / self.directory

    def candidate(self, config: ScanConfig, identifier: str) -> Path:
        """The single path checked by a DIRECT rule."""
        return self.resolve(config) / f"{identifier}{self.suffix}"

    def accepts(self, entry: str, name: str, identifier: str) -> bool:
        return self.predicate(entry, name, identifier)


def _direct(category: Category, directory: str, suffix: str = "", description: str = "") -> CatalogRule:
    return CatalogRule(category, Base.HOME, directory, RuleKind.DIRECT, suffix=suffix, description=description)


def _listing(
    category: Category,
    base: Base,
    directory: str,
    predicate: EntryPredicate = name_contains,
    description: str = "",
) -> CatalogRule:
    return CatalogRule(category, base, directory, RuleKind.LISTING, predicate=predicate, description=description)


DIRECT_RULES: tuple[CatalogRule, ...] = (
    _direct(Category.PREFERENCES, "Library/Preferences", ".plist", "canonical preference file"),
    _direct(Category.PREFERENCES, "Library/Preferences", "", "preference folder"),
    _direct(Category.APPLICATION_SUPPORT, "Library/Application Support"),
    _direct(Category.CACHES, "Library/Caches"),
    _direct(Category.LOGS, "Library/Logs"),
    _direct(Category.SAVED_STATE, "Library/Saved Application State", ".savedState"),
    _direct(Category.CONTAINERS, "Library/Containers"),
)

LISTING_RULES: tuple[CatalogRule, ...] = (
    _listing(Category.APPLICATION_SUPPORT, Base.HOME, "Library/Application Support"),
    _listing(Category.PREFERENCES, Base.HOME, "Library/Preferences", identifier_prefix,
             "files starting with the bundle identifier"),
    _listing(Category.CACHES, Base.HOME, "Library/Caches"),
    _listing(Category.CONTROL_PANELS, Base.HOME, "Library/PreferencePanes"),
    _listing(Category.CONTROL_PANELS, Base.SYSTEM, "Library/PreferencePanes"),
    _listing(Category.STARTUP_ITEMS, Base.HOME, "Library/LaunchAgents", identifier_or_name_contains),
    _listing(Category.STARTUP_ITEMS, Base.SYSTEM, "Library/LaunchAgents", identifier_or_name_contains),
    _listing(Category.STARTUP_ITEMS, Base.HOME, "Library/LaunchDaemons", identifier_or_name_contains),
    _listing(Category.STARTUP_ITEMS, Base.SYSTEM, "Library/LaunchDaemons", identifier_or_name_contains),
    _listing(Category.QUICK_LOOK, Base.HOME, "Library/QuickLook"),
    _listing(Category.QUICK_LOOK, Base.SYSTEM, "Library/QuickLook"),
    _listing(Category.SCREEN_SAVERS, Base.HOME, "Library/Screen Savers"),
    _listing(Category.INPUT_METHODS, Base.HOME, "Library/Input Methods"),
    _listing(Category.INPUT_METHODS, Base.SYSTEM, "Library/Input Methods"),
    _listing(Category.FONTS, Base.HOME, "Library/Fonts"),
    _listing(Category.FONTS, Base.SYSTEM, "Library/Fonts"),
)


class LocationCatalog:
    """The direct-path and listing rules, in scan order."""

    def __init__(
        self,
        direct_rules: tuple[CatalogRule, ...] = DIRECT_RULES,
        listing_rules: tuple[CatalogRule, ...] = LISTING_RULES,
    ) -> None:
        self.direct_rules = direct_rules
        self.listing_rules = listing_rules

    def __iter__(self):
        yield from self.direct_rules
        yield from self.listing_rules

    def __len__(self) -> int:
        return len(self.direct_rules) + len(self.listing_rules)

    def for_category(self, category: Category) -> list[CatalogRule]:
        """All rules that feed ``category``."""
        return [rule for rule in self if rule.category is category]

    def resolve(self, config: ScanConfig) -> list[tuple[CatalogRule, Path]]:
        """Pair every rule with its concrete directory under ``config``."""
        return [(rule, rule.resolve(config)) for rule in self]
