"""Error type shared by every layer of the service.

A single exception class carries a closed set of kinds. The HTTP boundary
maps a kind to its status code through ``STATUS_CODES`` instead of
inspecting exception subclasses.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    ALLOCATION = "allocation"
    INTERNAL = "internal"


STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.ALLOCATION: 500,
    ErrorKind.INTERNAL: 500,
}


class ShortenerError(Exception):
    """Failure raised by the validator, allocator and service.

    Attributes:
        kind: Failure kind, decides the HTTP status code.
        message: User facing message.
        reason: Optional finer grained cause (e.g. a validation failure kind).
        retry_after: Seconds a rate limited client should wait.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        reason: Optional[str] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.reason = reason
        self.retry_after = retry_after

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def __repr__(self) -> str:
        return f"ShortenerError(kind={self.kind.value!r}, message={self.message!r}, reason={self.reason!r})"

    @classmethod
    def validation(cls, reason: str, message: str) -> "ShortenerError":
        return cls(ErrorKind.VALIDATION, message, reason)

    @classmethod
    def not_found(cls, message: str = "Link not found") -> "ShortenerError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def allocation_exhausted(cls, attempts: int) -> "ShortenerError":
        return cls(
            ErrorKind.ALLOCATION,
            f"Failed to allocate a unique link id after {attempts} attempts",
            "exhausted",
        )

    @classmethod
    def rate_limited(cls, retry_after: int) -> "ShortenerError":
        return cls(
            ErrorKind.RATE_LIMITED,
            "Too many requests from this IP, please try again later.",
            retry_after=retry_after,
        )

    @classmethod
    def internal(cls, details: str) -> "ShortenerError":
        return cls(ErrorKind.INTERNAL, "Internal server error", details)
