"""Reference point resolution between two build lineages.

Given a subject entry (e.g. the newest build of a feature branch) and a
reference entry (e.g. the newest build of the target branch), find the
most recent reference build whose accumulated commits share a commit with
the subject's accumulated commits.

Only incremental commit lists are ever combined; the commit graph itself
is never rebuilt.  The search is bounded by ``max_logs``, the number of
commits accumulated per chain.  Builds whose entry is empty, and builds
without an entry for the repository, cost nothing against that budget.

Bounds:
- The two seed entries are always considered, even when ``max_logs`` is 0.
- A further predecessor entry is only taken while the accumulated commit
  count of that chain is below ``max_logs``.
"""

from __future__ import annotations

import logging

from commitledger.core.history import BuildHistory, iter_ledger_chain
from commitledger.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)


def collect_commits(
    history: BuildHistory, seed: LedgerEntry, max_logs: int
) -> list[str]:
    """Accumulate the commits of ``seed`` and its predecessors, newest first.

    The result may contain duplicates; callers only test membership.
    """
    commits: list[str] = []
    for index, entry in enumerate(iter_ledger_chain(history, seed)):
        if index and len(commits) >= max_logs:
            break
        commits.extend(entry.commits)
    return commits


def resolve_reference_point(
    subject: LedgerEntry,
    reference: LedgerEntry,
    history: BuildHistory,
    max_logs: int,
    skip_unknown_commits: bool = False,
) -> str | None:
    """Return the identifier of the reference build where both histories meet.

    Parameters
    ----------
    subject:
        Entry of the build being evaluated (the branch).
    reference:
        Entry of the newest build of the reference lineage.  It must belong
        to the same repository as ``subject``.
    history:
        Navigation over predecessors and attached entries.
    max_logs:
        Maximum number of commits accumulated per chain.  Must not be negative.
    skip_unknown_commits:
        Skip reference builds that introduced any commit the subject chain
        has never seen.  Such builds are neither matched nor accumulated.

    Returns
    -------
    str | None
        The persisted identifier of the first (most recent) matching
        reference build, or ``None`` if there is no match within budget.
    """
    if max_logs < 0:
        raise ValueError(f"max_logs must not be negative, got {max_logs}")
    if subject.repository_key != reference.repository_key:
        raise ValueError(
            f"Cannot compare entries of repository {subject.repository_key!r} "
            f"with entries of repository {reference.repository_key!r}"
        )

    branch_commits = collect_commits(history, subject, max_logs)
    known = set(branch_commits)

    master_count = 0
    for index, entry in enumerate(iter_ledger_chain(history, reference)):
        if index and master_count >= max_logs:
            break
        if skip_unknown_commits and not known.issuperset(entry.commits):
            logger.debug(
                "Skipping reference build %s: it contains commits unknown to %s",
                entry.owner,
                subject.owner,
            )
            continue
        master_count += entry.size()
        if known.intersection(entry.commits):
            reference_id = history.identifier_of(entry.owner)
            logger.debug(
                "Reference point for %s in repository %s: %s",
                subject.owner,
                subject.repository_key,
                reference_id,
            )
            return reference_id

    logger.debug(
        "No reference point for %s in repository %s within %d commits",
        subject.owner,
        subject.repository_key,
        max_logs,
    )
    return None
