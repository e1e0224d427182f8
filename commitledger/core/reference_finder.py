"""ReferenceFinder: chooses the reference build for a build.

A build may check out several repositories.  The finder tries each of the
build's ledger entries against the entry of the same repository in the
reference build, and takes the first reference point found.  Every step
is reported in the messages of the returned ``ReferenceBuild``.
"""

from __future__ import annotations

import logging

from commitledger.core.diagnostics import FilteredLog
from commitledger.core.history import BuildHistory, entry_for_repository
from commitledger.core.resolver import resolve_reference_point
from commitledger.models.reference import ReferenceBuild

logger = logging.getLogger(__name__)

DEFAULT_MAX_LOGS = 200


class ReferenceFinder:
    """Finds reference points between a build and a reference lineage.

    Parameters
    ----------
    history:
        Navigation over both lineages.
    max_logs:
        Commit budget per chain, see ``resolve_reference_point``.
    skip_unknown_commits:
        Ignore reference builds with commits unknown to the build.
    latest_build_if_not_found:
        Fall back to the given reference build when no point is found.
    """

    def __init__(
        self,
        history: BuildHistory,
        max_logs: int = DEFAULT_MAX_LOGS,
        skip_unknown_commits: bool = False,
        latest_build_if_not_found: bool = False,
    ) -> None:
        if max_logs < 0:
            raise ValueError(f"max_logs must not be negative, got {max_logs}")
        self._history = history
        self._max_logs = max_logs
        self._skip_unknown_commits = skip_unknown_commits
        self._latest_build_if_not_found = latest_build_if_not_found

    def find(self, build_id: str, reference_build_id: str) -> ReferenceBuild:
        """Return the reference build of ``build_id`` in the lineage of ``reference_build_id``."""
        log = FilteredLog(f"Errors while finding the reference build for {build_id}:")
        entries = self._history.ledger_entries_of(build_id)
        if not entries:
            log.log_info("Build %s has no recorded commits", build_id)

        found: str | None = None
        for entry in entries:
            reference = entry_for_repository(
                self._history, reference_build_id, entry.repository_key
            )
            if reference is None:
                log.log_info(
                    "Reference build %s has no recorded commits for repository %s",
                    reference_build_id,
                    entry.repository_key,
                )
                continue
            found = resolve_reference_point(
                entry,
                reference,
                self._history,
                self._max_logs,
                self._skip_unknown_commits,
            )
            if found is not None:
                log.log_info(
                    "Found reference build %s for repository %s",
                    found,
                    entry.repository_key,
                )
                break
            log.log_info(
                "No common commit with %s within %d commits for repository %s",
                reference_build_id,
                self._max_logs,
                entry.repository_key,
            )

        if found is None:
            if self._latest_build_if_not_found:
                found = self._history.identifier_of(reference_build_id)
                log.log_info(
                    "Falling back to the latest reference build %s", found
                )
            else:
                log.log_info("No reference build found for %s", build_id)

        return ReferenceBuild(
            owner=build_id,
            reference_build_id=found,
            info_messages=tuple(log.info_messages),
            error_messages=tuple(log.error_messages),
        )
