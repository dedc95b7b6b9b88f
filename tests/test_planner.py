"""Tests for deletion planning."""

from __future__ import annotations

from pathlib import Path

import pytest

from zaap.core.planner import Selection, plan
from zaap.models import ArtifactRecord, Category, DeletionMode

BUNDLE = Path("/Applications/TestApp.app")


@pytest.fixture
def record():
    record = ArtifactRecord()
    # Added out of category order on purpose
    record.add(Category.FONTS, Path("/home/Library/Fonts/TestApp.ttf"))
    record.add(Category.PREFERENCES, Path("/home/Library/Preferences/com.test.app.plist"))
    record.add(Category.CACHES, Path("/home/Library/Caches/com.test.app"))
    record.add(Category.PREFERENCES, Path("/home/Library/Preferences/com.test.app"))
    return record


class TestPlan:
    def test_none_deletes_only_bundle(self, record):
        actions = plan(record, BUNDLE, Selection.none())
        assert [a.path for a in actions] == [BUNDLE]

    def test_all_in_category_then_path_order(self, record):
        actions = plan(record, BUNDLE, Selection.all())
        assert [a.path for a in actions] == [
            BUNDLE,
            Path("/home/Library/Preferences/com.test.app.plist"),
            Path("/home/Library/Preferences/com.test.app"),
            Path("/home/Library/Caches/com.test.app"),
            Path("/home/Library/Fonts/TestApp.ttf"),
        ]

    def test_per_item_asks_in_order_and_keeps_approved(self, record):
        asked: list[Path] = []

        def decide(path: Path) -> bool:
            asked.append(path)
            return path.suffix in (".plist", ".ttf")

        actions = plan(record, BUNDLE, Selection.per_item(decide))

        assert asked == record.all_paths()
        assert [a.path for a in actions] == [
            BUNDLE,
            Path("/home/Library/Preferences/com.test.app.plist"),
            Path("/home/Library/Fonts/TestApp.ttf"),
        ]

    def test_per_item_rejecting_everything(self, record):
        actions = plan(record, BUNDLE, Selection.per_item(lambda path: False))
        assert [a.path for a in actions] == [BUNDLE]

    def test_none_never_calls_back(self, record):
        actions = plan(record, BUNDLE, Selection.none())
        assert len(actions) == 1

    def test_empty_record(self):
        actions = plan(ArtifactRecord(), BUNDLE, Selection.all())
        assert [a.path for a in actions] == [BUNDLE]

    @pytest.mark.parametrize("dry_run, mode", [(True, DeletionMode.DRY_RUN), (False, DeletionMode.EXECUTE)])
    def test_mode_follows_flag(self, record, dry_run, mode):
        actions = plan(record, BUNDLE, Selection.all(), dry_run=dry_run)
        assert {a.mode for a in actions} == {mode}

    def test_does_not_touch_filesystem(self, tmp_path):
        record = ArtifactRecord()
        record.add(Category.CACHES, tmp_path / "does-not-exist")
        actions = plan(record, tmp_path / "Nope.app", Selection.all())
        assert len(actions) == 2
        assert list(tmp_path.iterdir()) == []
