"""Installed application bundles and their embedded metadata."""

from __future__ import annotations

import logging
import plistlib
import subprocess
from pathlib import Path
from xml.parsers.expat import ExpatError

from zaap.core.matcher import exact_name
from zaap.utils import has_command

log = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".app"
DEFAULT_INSTALL_DIR = Path("/Applications")

# Timeout for the ``defaults`` subprocess (seconds).
_DEFAULTS_TIMEOUT = 10


class ZaapError(Exception):
    """Base class for errors raised by zaap."""


class BundleListingError(ZaapError):
    """Raised when the installation directory cannot be listed."""


def _info_plist(bundle_path: Path) -> Path:
    return bundle_path / "Contents" / "Info.plist"


def _identifier_from_plist(bundle_path: Path) -> str | None:
    try:
        with open(_info_plist(bundle_path), "rb") as f:
            info = plistlib.load(f)
    except (OSError, ExpatError, ValueError) as exc:
        log.debug("Cannot read Info.plist of %s: %s", bundle_path, exc)
        return None
    value = info.get("CFBundleIdentifier") if isinstance(info, dict) else None
    return value if isinstance(value, str) else None


def _identifier_from_defaults(bundle_path: Path) -> str | None:
    if not has_command("defaults"):
        return None
    try:
        proc = subprocess.run(
            ["defaults", "read", str(bundle_path / "Contents" / "Info"), "CFBundleIdentifier"],
            capture_output=True,
            text=True,
            timeout=_DEFAULTS_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        log.debug("defaults read failed for %s: %s", bundle_path, exc)
        return None
    if proc.returncode != 0:
        log.debug("defaults read exited %d for %s", proc.returncode, bundle_path)
        return None
    return proc.stdout


def identifier_of(bundle_path: Path) -> str | None:
    """Return the CFBundleIdentifier of a bundle, or None.

    Reads ``Contents/Info.plist`` directly and falls back to the
    ``defaults`` tool where it exists.  Never raises; the returned string
    is not validated.
    """
    identifier = _identifier_from_plist(bundle_path) or _identifier_from_defaults(bundle_path)
    if identifier is None:
        return None
    return identifier.strip() or None


def list_bundles(install_dir: Path = DEFAULT_INSTALL_DIR) -> list[tuple[str, Path]]:
    """List ``(name, path)`` for every ``*.app`` entry in ``install_dir``.

    Order is the directory listing order.

    Raises:
        BundleListingError: If ``install_dir`` cannot be listed.
    """
    try:
        names = [p.name for p in install_dir.iterdir()]
    except OSError as exc:
        raise BundleListingError(f"Cannot list {install_dir}: {exc.strerror or exc}") from exc

    return [
        (name.removesuffix(BUNDLE_SUFFIX), install_dir / name)
        for name in names
        if name.endswith(BUNDLE_SUFFIX)
    ]


def find_bundle(install_dir: Path, name: str) -> tuple[str, Path] | None:
    """Find a bundle by name, preferring an exact match over a case-insensitive one."""
    bundles = list_bundles(install_dir)
    for bundle in bundles:
        if exact_name(bundle[0], name):
            return bundle
    folded = name.casefold()
    for bundle in bundles:
        if bundle[0].casefold() == folded:
            return bundle
    return None
