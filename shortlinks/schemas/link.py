"""Request and response schemas for the short links HTTP API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ShortenRequest(BaseModel):
    """Body of POST /shorten.

    ``url`` is optional here so a missing value is reported by the validator
    as "URL is required" instead of a schema error.
    """

    url: Optional[str] = Field(None, description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for a created short link."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    short_url: str
    original_url: str


class ErrorResponse(BaseModel):
    """Model for error responses."""

    error: str
    details: Optional[str] = None
    retry_after: Optional[int] = Field(default=None, alias="retryAfter")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    timestamp: str
