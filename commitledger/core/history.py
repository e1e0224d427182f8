"""Build history capability: backward navigation over build records.

The resolver never touches a concrete build type.  It is handed a
``BuildHistory`` that answers three questions about a build id:

- which build preceded it (``predecessor``)
- which ledger entries are attached to it (``ledger_entries_of``)
- under which persisted identifier it should be reported (``identifier_of``)

``InMemoryBuildHistory`` is the reference host used by tests and for
embedding; ``commitledger.core.build_store.BuildStore`` persists the same
structure in SQLite.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol, runtime_checkable

from commitledger.models.builds import BuildRecord
from commitledger.models.ledger import LedgerEntry


class UnknownBuildError(KeyError):
    """Raised when a build id is not known to the history."""


class DuplicateEntryError(ValueError):
    """Raised when a build already carries an entry for a repository key."""


@runtime_checkable
class BuildHistory(Protocol):
    """Read-only view of a backward-linked build sequence."""

    def predecessor(self, build_id: str) -> str | None:
        """Return the id of the previous build, or None at the start of history."""
        ...

    def ledger_entries_of(self, build_id: str) -> Sequence[LedgerEntry]:
        """Return all ledger entries attached to a build."""
        ...

    def identifier_of(self, build_id: str) -> str:
        """Return the persisted identifier reported for a build."""
        ...


def entry_for_repository(
    history: BuildHistory, build_id: str, repository_key: str
) -> LedgerEntry | None:
    """Return the entry of ``build_id`` for ``repository_key``, if any."""
    for entry in history.ledger_entries_of(build_id):
        if entry.repository_key == repository_key:
            return entry
    return None


def iter_ledger_chain(history: BuildHistory, seed: LedgerEntry) -> Iterator[LedgerEntry]:
    """Yield ``seed`` and then the entries of its predecessors, newest first.

    Only entries with the seed's repository key are yielded.  Builds that
    carry no such entry are skipped and do not end the walk.  The walk is
    lazy, so callers bound it simply by stopping iteration.
    """
    yield seed
    build_id = history.predecessor(seed.owner)
    while build_id is not None:
        entry = entry_for_repository(history, build_id, seed.repository_key)
        if entry is not None:
            yield entry
        build_id = history.predecessor(build_id)


def find_previous_entry(
    history: BuildHistory, build_id: str, repository_key: str
) -> LedgerEntry | None:
    """Return the nearest entry for ``repository_key`` before ``build_id``."""
    previous = history.predecessor(build_id)
    while previous is not None:
        entry = entry_for_repository(history, previous, repository_key)
        if entry is not None:
            return entry
        previous = history.predecessor(previous)
    return None


class InMemoryBuildHistory:
    """A ``BuildHistory`` held entirely in memory.

    Builds are registered with ``add_build`` and entries attached with
    ``attach``.  Neither builds nor entries can be removed or replaced.
    """

    def __init__(self) -> None:
        self._builds: dict[str, BuildRecord] = {}
        self._entries: dict[str, list[LedgerEntry]] = {}

    def add_build(
        self,
        build_id: str,
        previous: str | None = None,
        *,
        job: str = "",
        external_id: str = "",
    ) -> BuildRecord:
        if build_id in self._builds:
            raise ValueError(f"Build {build_id!r} is already registered.")
        if previous is not None and previous not in self._builds:
            raise UnknownBuildError(previous)
        record = BuildRecord(
            build_id=build_id,
            job=job,
            previous_build_id=previous,
            external_id=external_id,
        )
        self._builds[build_id] = record
        self._entries[build_id] = []
        return record

    def add_chain(self, *build_ids: str, job: str = "") -> list[BuildRecord]:
        """Register builds oldest first, each linked to the one before it."""
        records = []
        previous = None
        for build_id in build_ids:
            records.append(self.add_build(build_id, previous, job=job))
            previous = build_id
        return records

    def attach(self, entry: LedgerEntry) -> LedgerEntry:
        """Attach ``entry`` to its owning build."""
        entries = self._entries.get(entry.owner)
        if entries is None:
            raise UnknownBuildError(entry.owner)
        if any(e.repository_key == entry.repository_key for e in entries):
            raise DuplicateEntryError(
                f"Build {entry.owner!r} already has an entry for "
                f"repository {entry.repository_key!r}."
            )
        entries.append(entry)
        return entry

    def get_build(self, build_id: str) -> BuildRecord:
        try:
            return self._builds[build_id]
        except KeyError:
            raise UnknownBuildError(build_id) from None

    # BuildHistory protocol

    def predecessor(self, build_id: str) -> str | None:
        return self.get_build(build_id).previous_build_id

    def ledger_entries_of(self, build_id: str) -> Sequence[LedgerEntry]:
        self.get_build(build_id)
        return tuple(self._entries[build_id])

    def identifier_of(self, build_id: str) -> str:
        return self.get_build(build_id).identifier
