"""Domain model for stored short links."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LinkRecord(BaseModel):
    """A short link as held by a LinkStore.

    Records are frozen: once stored, neither the id nor the URL can change.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Short identifier, unique in the store")
    original_url: str = Field(..., description="Validated absolute URL")
    created_at: datetime = Field(default_factory=utc_now)
