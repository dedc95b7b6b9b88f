"""Zaap data models."""

from zaap.models.artifact_record import ArtifactRecord, Category
from zaap.models.deletion import DeletionAction, DeletionMode, DeletionOutcome, OutcomeStatus
from zaap.models.identity import ApplicationIdentity, fallback_identifier

__all__ = [
    "ApplicationIdentity",
    "ArtifactRecord",
    "Category",
    "DeletionAction",
    "DeletionMode",
    "DeletionOutcome",
    "OutcomeStatus",
    "fallback_identifier",
]
