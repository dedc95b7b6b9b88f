"""Turn a user's selection into an ordered list of deletion actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from zaap.models.artifact_record import ArtifactRecord
from zaap.models.deletion import DeletionAction, DeletionMode

log = logging.getLogger(__name__)

DecisionCallback = Callable[[Path], bool]


class SelectionKind(Enum):
    NONE = "none"
    ALL = "all"
    PER_ITEM = "per_item"


@dataclass(frozen=True)
class Selection:
    """Which associated artifacts to delete alongside the bundle."""

    kind: SelectionKind
    decide: DecisionCallback | None = None

    @classmethod
    def none(cls) -> Selection:
        return cls(SelectionKind.NONE)

    @classmethod
    def all(cls) -> Selection:
        return cls(SelectionKind.ALL)

    @classmethod
    def per_item(cls, decide: DecisionCallback) -> Selection:
        """Ask ``decide`` about each path; it returns True to delete."""
        return cls(SelectionKind.PER_ITEM, decide)


def plan(
    record: ArtifactRecord,
    bundle_path: Path,
    selection: Selection,
    dry_run: bool = False,
) -> list[DeletionAction]:
    """Sequence the deletion of ``bundle_path`` and the selected artifacts.

    The bundle always comes first.  Artifacts follow in category order,
    then in the order they were found.  Nothing here touches the
    filesystem; for PER_ITEM the callback is invoked once per path, in
    that same order.
    """
    mode = DeletionMode.DRY_RUN if dry_run else DeletionMode.EXECUTE
    actions = [DeletionAction(bundle_path, mode)]

    if selection.kind is SelectionKind.NONE:
        return actions

    for path in record.all_paths():
        if selection.kind is SelectionKind.PER_ITEM and not selection.decide(path):
            log.debug("Skipping %s", path)
            continue
        actions.append(DeletionAction(path, mode))

    log.debug("Planned %d deletion actions (%s)", len(actions), mode.value)
    return actions
