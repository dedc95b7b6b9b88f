"""Deletion action and outcome dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DeletionMode(Enum):
    DRY_RUN = "dry_run"
    EXECUTE = "execute"


class OutcomeStatus(Enum):
    DELETED = "deleted"
    WOULD_DELETE = "would_delete"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DeletionAction:
    """A single path scheduled for removal."""

    path: Path
    mode: DeletionMode


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of applying one DeletionAction.

    ``reason`` is only set for FAILED outcomes.
    """

    path: Path
    status: OutcomeStatus
    reason: str = ""

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED
