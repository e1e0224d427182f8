"""Commitledger: incremental commit ledger and reference build resolution.

Each build records, per repository, only the commits that are new since
its previous build.  Two build lineages (e.g. a feature branch and its
target branch) are then compared by walking both ledgers backward until
their commits meet, yielding the reference build to diff against.
"""

__version__ = "0.1.0"

from commitledger.core.history import BuildHistory, InMemoryBuildHistory
from commitledger.core.resolver import resolve_reference_point
from commitledger.models.ledger import LedgerEntry, RecordingKind

__all__ = [
    "BuildHistory",
    "InMemoryBuildHistory",
    "LedgerEntry",
    "RecordingKind",
    "resolve_reference_point",
    "__version__",
]
