"""Commitledger core: build history, reference resolution and recording."""

from commitledger.core.history import (
    BuildHistory,
    DuplicateEntryError,
    InMemoryBuildHistory,
    UnknownBuildError,
)
from commitledger.core.resolver import resolve_reference_point

__all__ = [
    "BuildHistory",
    "DuplicateEntryError",
    "InMemoryBuildHistory",
    "UnknownBuildError",
    "resolve_reference_point",
]
