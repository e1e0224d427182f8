"""Result of looking up the reference build for a build."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ReferenceBuild(BaseModel):
    """The reference build chosen for ``owner``, with the diagnostics of the search.

    ``reference_build_id`` is ``None`` when no reference point was found.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    reference_build_id: str | None = None
    info_messages: tuple[str, ...] = ()
    error_messages: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.reference_build_id is not None
