"""Tests for the location catalog."""

from __future__ import annotations

from pathlib import Path

from zaap.core.catalog import Base, LocationCatalog, RuleKind
from zaap.core.config import ScanConfig
from zaap.models import Category

CONFIG = ScanConfig(home=Path("/Users/alice"))


class TestLocationCatalog:
    def test_every_category_has_a_rule(self):
        catalog = LocationCatalog()
        for category in Category:
            assert catalog.for_category(category), category

    def test_direct_candidates(self):
        catalog = LocationCatalog()
        candidates = [str(r.candidate(CONFIG, "com.test.app")) for r in catalog.direct_rules]
        assert candidates == [
            "/Users/alice/Library/Preferences/com.test.app.plist",
            "/Users/alice/Library/Preferences/com.test.app",
            "/Users/alice/Library/Application Support/com.test.app",
            "/Users/alice/Library/Caches/com.test.app",
            "/Users/alice/Library/Logs/com.test.app",
            "/Users/alice/Library/Saved Application State/com.test.app.savedState",
            "/Users/alice/Library/Containers/com.test.app",
        ]

    def test_direct_rules_are_per_user(self):
        catalog = LocationCatalog()
        assert all(r.base is Base.HOME and r.kind is RuleKind.DIRECT for r in catalog.direct_rules)

    def test_system_wide_locations(self):
        catalog = LocationCatalog()
        system = {
            (r.category, str(r.resolve(CONFIG)))
            for r in catalog.listing_rules
            if r.base is Base.SYSTEM
        }
        assert system == {
            (Category.CONTROL_PANELS, "/Library/PreferencePanes"),
            (Category.STARTUP_ITEMS, "/Library/LaunchAgents"),
            (Category.STARTUP_ITEMS, "/Library/LaunchDaemons"),
            (Category.QUICK_LOOK, "/Library/QuickLook"),
            (Category.INPUT_METHODS, "/Library/Input Methods"),
            (Category.FONTS, "/Library/Fonts"),
        }

    def test_screen_savers_are_per_user_only(self):
        rules = LocationCatalog().for_category(Category.SCREEN_SAVERS)
        assert [str(r.resolve(CONFIG)) for r in rules] == ["/Users/alice/Library/Screen Savers"]

    def test_preferences_listing_uses_identifier_prefix(self):
        rule = next(
            r for r in LocationCatalog().listing_rules if r.category is Category.PREFERENCES
        )
        assert rule.accepts("com.test.app.helper.plist", "TestApp", "com.test.app")
        assert not rule.accepts("TestApp.plist", "TestApp", "com.test.app")

    def test_startup_items_accept_identifier_or_name(self):
        rule = LocationCatalog().for_category(Category.STARTUP_ITEMS)[0]
        assert rule.accepts("COM.TEST.APP.agent.plist", "TestApp", "com.test.app")
        assert rule.accepts("testapp-updater.plist", "TestApp", "com.test.app")
        assert not rule.accepts("com.other.plist", "TestApp", "com.test.app")

    def test_other_listings_match_name_only(self):
        rule = LocationCatalog().for_category(Category.FONTS)[0]
        assert rule.accepts("TestApp-Regular.ttf", "TestApp", "com.test.app")
        assert not rule.accepts("com.test.app.ttf", "TestApp", "com.test.app")

    def test_resolve_uses_config_roots(self, tmp_path):
        config = ScanConfig(home=tmp_path / "home", system_root=tmp_path / "sys")
        resolved = LocationCatalog().resolve(config)
        assert len(resolved) == len(LocationCatalog())
        for rule, directory in resolved:
            root = config.home if rule.base is Base.HOME else config.system_root
            assert directory.is_relative_to(root)
