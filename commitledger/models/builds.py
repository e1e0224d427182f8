"""Build record model: one node in a backward-linked build sequence."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class BuildRecord(BaseModel):
    """A build known to the host, linked to its predecessor by id.

    ``external_id`` is the persisted identifier reported as a reference
    point (e.g. ``"feature-x#42"``).  It defaults to ``build_id``.
    """

    model_config = ConfigDict(frozen=True)

    build_id: str = Field(min_length=1)
    job: str = ""
    previous_build_id: str | None = None
    external_id: str = ""
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def identifier(self) -> str:
        return self.external_id or self.build_id
