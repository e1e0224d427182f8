"""Commit ledger entry model: the commits one build introduced for one repository.

Each entry stores only the commits that are *new* since the previous build
of the same repository, never the full history:
- Immutable (frozen pydantic model, tuples for all sequences)
- One entry per (build, repository key)
- Diagnostics captured as a snapshot at construction time
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from commitledger.core.diagnostics import FilteredLog
    from commitledger.core.history import BuildHistory


class RecordingKind(str, Enum):
    """Whether an entry starts tracking or extends a previous entry."""

    START = "start"
    INCREMENTAL = "incremental"


class LedgerEntry(BaseModel):
    """The commits introduced by one build for one repository.

    The entry is a pure value object.  It names its owning build by id
    (``owner``); attaching it to that build is a separate step performed
    by the build history (see ``BuildHistory.attach``).
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repository_key: str = Field(min_length=1)
    latest_commit: str = Field(min_length=1)
    commits: tuple[str, ...] = ()
    kind: RecordingKind = RecordingKind.INCREMENTAL
    info_messages: tuple[str, ...] = ()
    error_messages: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        owner: str,
        repository_key: str,
        log: FilteredLog,
        latest_commit: str,
        commits: Sequence[str] | None = None,
        kind: RecordingKind = RecordingKind.INCREMENTAL,
    ) -> LedgerEntry:
        """Build an entry, snapshotting the diagnostics collected in ``log``.

        Without ``commits`` the entry is an empty INCREMENTAL record: the
        build saw no new commits and inherits ``latest_commit`` from its
        predecessor.
        """
        return cls(
            owner=owner,
            repository_key=repository_key,
            latest_commit=latest_commit,
            commits=tuple(commits or ()),
            kind=kind,
            info_messages=tuple(log.info_messages),
            error_messages=tuple(log.error_messages),
        )

    @classmethod
    def start(
        cls,
        owner: str,
        repository_key: str,
        log: FilteredLog,
        latest_commit: str,
        commits: Sequence[str] | None = None,
    ) -> LedgerEntry:
        """Build the first entry recorded for a repository."""
        return cls.create(
            owner, repository_key, log, latest_commit, commits, RecordingKind.START
        )

    def size(self) -> int:
        """Number of new commits in this entry."""
        return len(self.commits)

    def is_empty(self) -> bool:
        return self.size() == 0

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def is_first_build(self) -> bool:
        return self.kind == RecordingKind.START

    def get_reference_point(
        self,
        reference: LedgerEntry,
        history: BuildHistory,
        max_logs: int,
        skip_unknown_commits: bool = False,
    ) -> str | None:
        """Find the reference build whose history meets this entry's history.

        Returns the persisted identifier of the reference build, or
        ``None`` if no common commit was found within ``max_logs``.
        """
        from commitledger.core.resolver import resolve_reference_point

        return resolve_reference_point(
            self, reference, history, max_logs, skip_unknown_commits
        )

    def __str__(self) -> str:
        return f"Commits in '{self.owner}': {self.size()} (latest: {self.latest_commit})"
