"""Append-only build store backed by SQLite.

Persists builds (linked to their predecessor) and the ledger entries
attached to them, and serves them back as a ``BuildHistory``.

Design:
- Append-only: ``add_build()`` and ``attach()`` are the only writes.
- One entry per (build, repository): UNIQUE(owner, repository_key).
- WAL journal mode for concurrent readers.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Sequence
from pathlib import Path

from commitledger.core.history import DuplicateEntryError, UnknownBuildError
from commitledger.models.builds import BuildRecord
from commitledger.models.ledger import LedgerEntry, RecordingKind


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_BUILDS = """
CREATE TABLE IF NOT EXISTS builds (
    id                 INTEGER PRIMARY KEY AUTOINCREMENT,
    build_id           TEXT NOT NULL UNIQUE,
    job                TEXT NOT NULL DEFAULT '',
    previous_build_id  TEXT REFERENCES builds(build_id),
    external_id        TEXT NOT NULL DEFAULT '',
    created_at         TEXT NOT NULL
);
"""

_CREATE_ENTRIES = """
CREATE TABLE IF NOT EXISTS ledger_entries (
    id                   INTEGER PRIMARY KEY AUTOINCREMENT,
    owner                TEXT NOT NULL REFERENCES builds(build_id),
    repository_key       TEXT NOT NULL,
    latest_commit        TEXT NOT NULL,
    kind                 TEXT NOT NULL,
    commits_json         TEXT NOT NULL DEFAULT '[]',
    info_messages_json   TEXT NOT NULL DEFAULT '[]',
    error_messages_json  TEXT NOT NULL DEFAULT '[]',
    UNIQUE (owner, repository_key)
);
"""

_CREATE_IDX_JOB = """
CREATE INDEX IF NOT EXISTS idx_builds_job ON builds(job, id);
"""


class BuildStore:
    """SQLite-backed ``BuildHistory``.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_BUILDS)
            conn.execute(_CREATE_ENTRIES)
            conn.execute(_CREATE_IDX_JOB)
            conn.commit()

    # ------------------------------------------------------------------
    # Writes (append-only)
    # ------------------------------------------------------------------

    def add_build(
        self,
        build_id: str,
        previous: str | None = None,
        *,
        job: str = "",
        external_id: str = "",
    ) -> BuildRecord:
        """Register a build, linked to ``previous`` if given."""
        if previous is not None:
            self.get_build(previous)
        record = BuildRecord(
            build_id=build_id,
            job=job,
            previous_build_id=previous,
            external_id=external_id,
        )
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO builds
                        (build_id, job, previous_build_id, external_id, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        record.build_id,
                        record.job,
                        record.previous_build_id,
                        record.external_id,
                        record.created_at.isoformat(),
                    ),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"Build {build_id!r} is already registered.") from exc
        return record

    def attach(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist ``entry`` as part of its owning build."""
        self.get_build(entry.owner)
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO ledger_entries
                        (owner, repository_key, latest_commit, kind, commits_json,
                         info_messages_json, error_messages_json)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.owner,
                        entry.repository_key,
                        entry.latest_commit,
                        entry.kind.value,
                        json.dumps(list(entry.commits)),
                        json.dumps(list(entry.info_messages)),
                        json.dumps(list(entry.error_messages)),
                    ),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise DuplicateEntryError(
                f"Build {entry.owner!r} already has an entry for "
                f"repository {entry.repository_key!r}."
            ) from exc
        return entry

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def get_build(self, build_id: str) -> BuildRecord:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM builds WHERE build_id = ?", (build_id,)
            ).fetchone()
        if row is None:
            raise UnknownBuildError(build_id)
        return self._row_to_build(row)

    def has_build(self, build_id: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM builds WHERE build_id = ?", (build_id,)
            ).fetchone()
        return row is not None

    def latest_build(self, job: str) -> BuildRecord | None:
        """Return the most recently registered build of ``job``, or None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM builds WHERE job = ? ORDER BY id DESC LIMIT 1",
                (job,),
            ).fetchone()
        return self._row_to_build(row) if row else None

    # BuildHistory protocol

    def predecessor(self, build_id: str) -> str | None:
        return self.get_build(build_id).previous_build_id

    def ledger_entries_of(self, build_id: str) -> Sequence[LedgerEntry]:
        self.get_build(build_id)
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM ledger_entries WHERE owner = ? ORDER BY id ASC",
                (build_id,),
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def identifier_of(self, build_id: str) -> str:
        return self.get_build(build_id).identifier

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_build(row: tuple) -> BuildRecord:
        _id, build_id, job, previous_build_id, external_id, created_at = row
        return BuildRecord(
            build_id=build_id,
            job=job,
            previous_build_id=previous_build_id,
            external_id=external_id,
            created_at=created_at,
        )

    @staticmethod
    def _row_to_entry(row: tuple) -> LedgerEntry:
        (
            _id,
            owner,
            repository_key,
            latest_commit,
            kind,
            commits_json,
            info_messages_json,
            error_messages_json,
        ) = row
        return LedgerEntry(
            owner=owner,
            repository_key=repository_key,
            latest_commit=latest_commit,
            kind=RecordingKind(kind),
            commits=json.loads(commits_json),
            info_messages=json.loads(info_messages_json),
            error_messages=json.loads(error_messages_json),
        )
