"""Discovery of the artifacts that belong to one application."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from zaap.core.catalog import CatalogRule, LocationCatalog
from zaap.core.config import ScanConfig
from zaap.models.artifact_record import ArtifactRecord
from zaap.models.identity import ApplicationIdentity, fallback_identifier

log = logging.getLogger(__name__)

IdentifierResolver = Callable[[Path], str | None]

_MAX_WORKERS = 4


def _no_identifier(bundle_path: Path) -> str | None:
    return None


def _is_child(path: Path, directory: Path) -> bool:
    """True if ``path`` names an entry directly inside ``directory``."""
    return os.path.dirname(os.path.normpath(path)) == os.path.normpath(directory)


def list_entries(directory: Path) -> list[str]:
    """Entry names of ``directory`` in listing order.

    A directory that is missing or unreadable yields no entries.
    """
    try:
        with os.scandir(directory) as it:
            return [entry.name for entry in it]
    except OSError as exc:
        log.debug("Cannot list %s: %s", directory, exc)
        return []


class Scanner:
    """Walks the location catalog for one application at a time.

    The scanner only stats and lists directories; it never opens files
    and never writes.  It holds no per-scan state, so one instance can
    serve concurrent scans of different applications.
    """

    def __init__(
        self,
        config: ScanConfig,
        resolver: IdentifierResolver | None = None,
        catalog: LocationCatalog | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or _no_identifier
        self.catalog = catalog or LocationCatalog()
        self._level = logging.INFO if config.verbose else logging.DEBUG

    def resolve_identity(self, identity: ApplicationIdentity) -> ApplicationIdentity:
        """Fill in the bundle identifier, falling back to the bare name."""
        identifier = identity.bundle_identifier
        if not identifier:
            try:
                identifier = self.resolver(identity.bundle_path)
            except Exception:
                log.exception("Identifier lookup failed for %s", identity.bundle_path)
                identifier = None
        if not identifier:
            identifier = fallback_identifier(identity.name)
            log.log(self._level, "No bundle identifier for %s, using %r", identity.name, identifier)
        else:
            log.log(self._level, "Bundle ID: %s", identifier)
        return identity.with_identifier(identifier)

    def scan(self, identity: ApplicationIdentity) -> ArtifactRecord:
        """Build the ArtifactRecord for ``identity``."""
        identity = self.resolve_identity(identity)
        identifier = identity.effective_identifier
        record = ArtifactRecord()

        for rule in self.catalog.direct_rules:
            directory = rule.resolve(self.config)
            candidate = rule.candidate(self.config, identifier)
            if not _is_child(candidate, directory):
                log.debug("Skipping %s: not directly inside %s", candidate, directory)
                continue
            if os.path.lexists(candidate):
                self._add(record, rule, candidate)

        rules = list(self.catalog.listing_rules)
        if self.config.parallel and len(rules) > 1:
            listings = self._list_parallel(rules)
        else:
            listings = [list_entries(rule.resolve(self.config)) for rule in rules]

        for rule, entries in zip(rules, listings):
            directory = rule.resolve(self.config)
            for entry in entries:
                if rule.accepts(entry, identity.name, identifier):
                    self._add(record, rule, directory / entry)

        log.info("Found %d associated items for %s", record.total, identity.name)
        return record

    def _list_parallel(self, rules: list[CatalogRule]) -> list[list[str]]:
        """List every rule's directory on a small thread pool.

        Results come back in rule order so the record is the same as a
        sequential scan.
        """
        with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(rules))) as executor:
            futures = [executor.submit(list_entries, rule.resolve(self.config)) for rule in rules]
            return [future.result() for future in futures]

    def _add(self, record: ArtifactRecord, rule: CatalogRule, path: Path) -> None:
        if record.add(rule.category, path):
            log.log(self._level, "%s: %s", rule.category.label, path)
