"""Domain models (Pydantic v2).

These models describe *what* the information is, not *how* it is obtained:
the store response is scanned elsewhere and only its outcome lives here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class CatalogRecord(BaseModel):
    """Outcome of one store lookup for an AppID.

    Ephemeral: recomputed on every validation attempt, never persisted.
    A display name is only ever attached to an AppID the store reports as
    existing.
    """

    model_config = ConfigDict(frozen=True)

    app_id: str = Field(
        ...,
        min_length=1,
        description="AppID the lookup was made for.",
    )
    exists: bool = Field(
        default=False,
        description="True when the store reports `success: true` for the AppID.",
    )
    display_name: str | None = Field(
        default=None,
        description="Game name from the `data.name` field, when available.",
    )

    @model_validator(mode="after")
    def _name_requires_existence(self) -> "CatalogRecord":
        if self.display_name is not None and not self.exists:
            raise ValueError("display_name requires exists=True")
        return self

    @classmethod
    def missing(cls, app_id: str) -> "CatalogRecord":
        return cls(app_id=app_id, exists=False)
