"""Apply deletion actions one by one."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from zaap.models.deletion import DeletionAction, DeletionMode, DeletionOutcome, OutcomeStatus
from zaap.utils import remove_path

log = logging.getLogger(__name__)

OutcomeCallback = Callable[[DeletionOutcome], None]


class DeletionExecutor:
    """Runs deletion actions strictly in order.

    A failing action never stops the batch and nothing is rolled back:
    every action gets exactly one outcome, reported in input order.
    """

    def __init__(self, on_outcome: OutcomeCallback | None = None) -> None:
        self.on_outcome = on_outcome

    def execute(self, actions: Iterable[DeletionAction]) -> list[DeletionOutcome]:
        outcomes: list[DeletionOutcome] = []
        for action in actions:
            outcome = self._apply(action)
            outcomes.append(outcome)
            if self.on_outcome:
                self.on_outcome(outcome)

        failed = sum(1 for o in outcomes if o.failed)
        if failed:
            log.warning("%d of %d deletions failed", failed, len(outcomes))
        return outcomes

    def _apply(self, action: DeletionAction) -> DeletionOutcome:
        if action.mode is DeletionMode.DRY_RUN:
            log.debug("Would delete: %s", action.path)
            return DeletionOutcome(action.path, OutcomeStatus.WOULD_DELETE)

        try:
            remove_path(action.path)
        except OSError as exc:
            log.debug("Error deleting %s: %s", action.path, exc)
            return DeletionOutcome(action.path, OutcomeStatus.FAILED, reason=exc.strerror or str(exc))

        log.info("Deleted: %s", action.path)
        return DeletionOutcome(action.path, OutcomeStatus.DELETED)


def execute(actions: Iterable[DeletionAction]) -> list[DeletionOutcome]:
    """Run ``actions`` with a default executor."""
    return DeletionExecutor().execute(actions)
