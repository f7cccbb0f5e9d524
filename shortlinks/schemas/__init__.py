"""Schemas package for the short links service."""

from .link import (
    ShortenRequest,
    ShortenResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ShortenRequest",
    "ShortenResponse",
    "ErrorResponse",
    "HealthResponse",
]
