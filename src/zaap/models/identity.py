"""Application identity dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def fallback_identifier(name: str) -> str:
    """Derive an identifier from an application name by removing all whitespace."""
    return "".join(name.split())


@dataclass(frozen=True, slots=True)
class ApplicationIdentity:
    """One installed application bundle to scan for.

    ``bundle_identifier`` is whatever the metadata query returned, used
    verbatim.  When it is missing the scanner asks its resolver and then
    falls back to :func:`fallback_identifier`.
    """

    name: str
    bundle_path: Path
    bundle_identifier: str | None = None

    def with_identifier(self, bundle_identifier: str | None) -> ApplicationIdentity:
        """Return a copy carrying ``bundle_identifier``."""
        return ApplicationIdentity(self.name, self.bundle_path, bundle_identifier)

    @property
    def effective_identifier(self) -> str:
        """The bundle identifier, or the whitespace-stripped name if it is empty."""
        return self.bundle_identifier or fallback_identifier(self.name)
