"""CommitRecorder: creates the ledger entry of a build at checkout time.

For a build and a repository the recorder looks up the nearest previous
entry of the same repository and records only what is new:

- no previous entry: a START entry with the commits reachable from head
- same head as before: an empty INCREMENTAL entry
- otherwise: an INCREMENTAL entry with the commits ``previous..head``

Enumeration problems never abort recording.  They are captured in the
entry's error messages and an empty entry is attached instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from commitledger.core.diagnostics import FilteredLog
from commitledger.core.git_commits import CommitEnumerationError, CommitEnumerator
from commitledger.core.history import (
    BuildHistory,
    DuplicateEntryError,
    entry_for_repository,
    find_previous_entry,
)
from commitledger.models.ledger import LedgerEntry, RecordingKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_COMMITS = 200


class WritableBuildHistory(BuildHistory, Protocol):
    """A ``BuildHistory`` that entries can be attached to."""

    def attach(self, entry: LedgerEntry) -> LedgerEntry:
        ...


class CommitRecorder:
    """Records the new commits of each build into the ledger.

    Parameters
    ----------
    history:
        Build history the new entries are attached to.
    enumerator:
        Source of commit hashes for a repository.
    max_commits:
        Upper bound of commits recorded for a single build, 0 for no bound.
    """

    def __init__(
        self,
        history: WritableBuildHistory,
        enumerator: CommitEnumerator,
        max_commits: int = DEFAULT_MAX_COMMITS,
    ) -> None:
        if max_commits < 0:
            raise ValueError(f"max_commits must not be negative, got {max_commits}")
        self._history = history
        self._enumerator = enumerator
        self._max_commits = max_commits

    def record(
        self, build_id: str, repository_key: str, repository: Path
    ) -> LedgerEntry | None:
        """Create and attach the entry of ``build_id`` for ``repository_key``.

        Returns ``None`` only when neither the head commit nor a previous
        entry is known, so there is no latest commit to record.
        """
        if entry_for_repository(self._history, build_id, repository_key) is not None:
            raise DuplicateEntryError(
                f"Commits of repository {repository_key!r} are already "
                f"recorded for build {build_id!r}."
            )

        log = FilteredLog(f"Errors while recording commits of {repository_key}:")
        previous = find_previous_entry(self._history, build_id, repository_key)

        try:
            head = self._enumerator.head(repository)
        except CommitEnumerationError as exc:
            log.log_exception(exc, "Could not determine the head commit of %s", repository)
            return self._attach_without_commits(build_id, repository_key, log, previous)

        if previous is None:
            log.log_info(
                "Found no previous build with recorded commits of %s, "
                "starting initial recording",
                repository_key,
            )
            since = None
        elif previous.latest_commit == head:
            log.log_info("No new commits found, latest commit is still %s", head)
            return self._attach(
                LedgerEntry.create(build_id, repository_key, log, head)
            )
        else:
            log.log_info(
                "Recording commits of %s since %s (recorded in build %s)",
                repository_key,
                previous.latest_commit,
                previous.owner,
            )
            since = previous.latest_commit

        try:
            commits = self._enumerator.commits(
                repository, head, since=since, max_count=self._max_commits or None
            )
        except CommitEnumerationError as exc:
            log.log_exception(exc, "Could not list the commits of %s", repository)
            commits = []

        if log.has_errors():
            logger.warning(
                "Recording %s for build %s without its new commits",
                repository_key,
                build_id,
            )
        log.log_info("Found %d new commits", len(commits))
        if self._max_commits and len(commits) >= self._max_commits:
            log.log_info(
                "Reached the limit of %d commits, older commits are not recorded",
                self._max_commits,
            )

        kind = RecordingKind.START if previous is None else RecordingKind.INCREMENTAL
        return self._attach(
            LedgerEntry.create(build_id, repository_key, log, head, commits, kind)
        )

    def _attach_without_commits(
        self,
        build_id: str,
        repository_key: str,
        log: FilteredLog,
        previous: LedgerEntry | None,
    ) -> LedgerEntry | None:
        if previous is None:
            logger.warning(
                "Skipping commit recording of %s for build %s: no head commit",
                repository_key,
                build_id,
            )
            return None
        return self._attach(
            LedgerEntry.create(build_id, repository_key, log, previous.latest_commit)
        )

    def _attach(self, entry: LedgerEntry) -> LedgerEntry:
        self._history.attach(entry)
        logger.info("%s", entry)
        return entry
