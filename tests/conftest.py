"""Shared test fixtures for Commitledger."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from commitledger.core.build_store import BuildStore
from commitledger.core.diagnostics import FilteredLog
from commitledger.core.history import InMemoryBuildHistory
from commitledger.models.ledger import LedgerEntry, RecordingKind

REPO = "https://example.org/repo.git"


@pytest.fixture
def repo_key() -> str:
    """Provide the repository key used by the factories by default."""
    return REPO


@pytest.fixture
def history() -> InMemoryBuildHistory:
    """Provide an empty in-memory build history."""
    return InMemoryBuildHistory()


@pytest.fixture
def store(tmp_path: Path) -> BuildStore:
    """Provide a fresh BuildStore backed by a temp SQLite database."""
    return BuildStore(tmp_path / "builds.db")


@pytest.fixture
def make_entry() -> Callable[..., LedgerEntry]:
    """Factory fixture: build a LedgerEntry with sensible defaults."""

    def _factory(
        owner: str = "build-1",
        commits: Sequence[str] = (),
        repository_key: str = REPO,
        kind: RecordingKind = RecordingKind.INCREMENTAL,
        latest_commit: str | None = None,
    ) -> LedgerEntry:
        latest = latest_commit or (commits[0] if commits else "0" * 40)
        return LedgerEntry.create(
            owner, repository_key, FilteredLog(), latest, commits, kind
        )

    return _factory


@pytest.fixture
def make_chain(
    history: InMemoryBuildHistory, make_entry: Callable[..., LedgerEntry]
) -> Callable[..., list[LedgerEntry | None]]:
    """Factory fixture: register a lineage and attach one entry per build.

    ``commit_lists`` is given oldest build first.  A ``None`` item
    registers a build without an entry for the repository.  Returns the
    attached entries in the same order (``None`` where skipped).
    """

    def _factory(
        job: str,
        commit_lists: Sequence[Sequence[str] | None],
        previous: str | None = None,
        repository_key: str = REPO,
    ) -> list[LedgerEntry | None]:
        entries: list[LedgerEntry | None] = []
        for number, commits in enumerate(commit_lists, start=1):
            build_id = f"{job}#{number}"
            history.add_build(build_id, previous, job=job)
            previous = build_id
            if commits is None:
                entries.append(None)
                continue
            kind = RecordingKind.START if number == 1 else RecordingKind.INCREMENTAL
            entries.append(
                history.attach(
                    make_entry(build_id, commits, repository_key=repository_key, kind=kind)
                )
            )
        return entries

    return _factory
