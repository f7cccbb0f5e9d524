"""Services package - validation, id allocation and the shortener service."""

from .allocator import IdAllocator
from .validator import UrlValidator, ValidationFailure, ValidationResult
from .shortener import ShortenerService, ShortenResult, get_service

__all__ = [
    "IdAllocator",
    "UrlValidator",
    "ValidationFailure",
    "ValidationResult",
    "ShortenerService",
    "ShortenResult",
    "get_service",
]
