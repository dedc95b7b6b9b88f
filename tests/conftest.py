"""Shared test fixtures."""

from __future__ import annotations

import plistlib
from pathlib import Path

import pytest

from zaap.core.config import ScanConfig

USER_LIBRARY_DIRS = (
    "Preferences",
    "Application Support",
    "Caches",
    "Logs",
    "Saved Application State",
    "Containers",
    "PreferencePanes",
    "LaunchAgents",
    "LaunchDaemons",
    "QuickLook",
    "Screen Savers",
    "Input Methods",
    "Fonts",
)

SYSTEM_LIBRARY_DIRS = (
    "PreferencePanes",
    "LaunchAgents",
    "LaunchDaemons",
    "QuickLook",
    "Input Methods",
    "Fonts",
)


class FakeMac:
    """A throwaway home directory, system root and Applications folder."""

    def __init__(self, root: Path) -> None:
        self.home = root / "home"
        self.system_root = root / "system"
        self.apps_dir = root / "Applications"
        for name in USER_LIBRARY_DIRS:
            (self.home / "Library" / name).mkdir(parents=True)
        for name in SYSTEM_LIBRARY_DIRS:
            (self.system_root / "Library" / name).mkdir(parents=True)
        self.apps_dir.mkdir()

    def user(self, *parts: str) -> Path:
        return self.home.joinpath("Library", *parts)

    def system(self, *parts: str) -> Path:
        return self.system_root.joinpath("Library", *parts)

    def config(self, **kwargs) -> ScanConfig:
        return ScanConfig(home=self.home, system_root=self.system_root, **kwargs)

    def create_app(self, name: str, bundle_id: str | None = None) -> Path:
        """Create ``<name>.app`` with an Info.plist carrying ``bundle_id``."""
        app = self.apps_dir / f"{name}.app"
        contents = app / "Contents"
        contents.mkdir(parents=True)
        info = {"CFBundleName": name, "CFBundleExecutable": name}
        if bundle_id is not None:
            info["CFBundleIdentifier"] = bundle_id
        with open(contents / "Info.plist", "wb") as f:
            plistlib.dump(info, f)
        return app


def touch(path: Path, data: bytes = b"test") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def mkdir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def fake_mac(tmp_path):
    """Create a fake macOS directory layout under tmp_path."""
    return FakeMac(tmp_path)


@pytest.fixture
def planted(fake_mac):
    """TestApp.app (com.test.app) with one artifact in every catalog location."""
    fake_mac.create_app("TestApp", "com.test.app")
    paths = {
        "pref_plist": touch(fake_mac.user("Preferences", "com.test.app.plist")),
        "pref_dir": mkdir(fake_mac.user("Preferences", "com.test.app")),
        "app_support": mkdir(fake_mac.user("Application Support", "com.test.app")),
        "app_support_named": mkdir(fake_mac.user("Application Support", "TestApp Helper")),
        "caches": mkdir(fake_mac.user("Caches", "com.test.app")),
        "logs": mkdir(fake_mac.user("Logs", "com.test.app")),
        "saved_state": mkdir(fake_mac.user("Saved Application State", "com.test.app.savedState")),
        "containers": mkdir(fake_mac.user("Containers", "com.test.app")),
        "pref_pane": mkdir(fake_mac.user("PreferencePanes", "TestApp.prefPane")),
        "system_pref_pane": mkdir(fake_mac.system("PreferencePanes", "TestApp.prefPane")),
        "launch_agent": touch(fake_mac.user("LaunchAgents", "com.test.app.plist")),
        "system_daemon": touch(fake_mac.system("LaunchDaemons", "testapp-updater.plist")),
        "quicklook": mkdir(fake_mac.user("QuickLook", "TestApp.qlgenerator")),
        "screen_saver": mkdir(fake_mac.user("Screen Savers", "TestApp.saver")),
        "input_method": mkdir(fake_mac.user("Input Methods", "TestApp.app")),
        "font": touch(fake_mac.user("Fonts", "TestApp.ttf"), b"fontdata"),
        "system_font": touch(fake_mac.system("Fonts", "TestApp-Bold.otf"), b"fontdata"),
    }
    return paths
