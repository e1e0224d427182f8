"""Commitledger data models: all Pydantic v2, all frozen (immutable)."""

from commitledger.models.builds import BuildRecord
from commitledger.models.ledger import LedgerEntry, RecordingKind
from commitledger.models.reference import ReferenceBuild

__all__ = [
    # builds
    "BuildRecord",
    # ledger
    "LedgerEntry",
    "RecordingKind",
    # reference
    "ReferenceBuild",
]
