"""URL validation.

``UrlValidator.check`` runs a fixed sequence of checks over the sanitized
input and returns a ``ValidationResult`` naming the first failure, if any.
``UrlValidator.validate`` turns a failed result into a ``ShortenerError``.

Checks operate on the sanitized string, so a pattern cannot be smuggled past
the scan with characters that sanitization strips afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..core.errors import ShortenerError
from ..utils.shortener import sanitize_url_input

_url_adapter = TypeAdapter(AnyUrl)


class ValidationFailure(str, Enum):
    MISSING = "missing"
    TOO_LONG = "too_long"
    MALFORMED = "malformed"
    DISALLOWED_PROTOCOL = "disallowed_protocol"
    MALICIOUS_PATTERN = "malicious_pattern"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation run: either ``url`` or ``failure`` is set."""

    url: Optional[str] = None
    failure: Optional[ValidationFailure] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def rejected(cls, failure: ValidationFailure, message: str) -> "ValidationResult":
        return cls(failure=failure, message=message)


class UrlValidator:
    """Checks submitted URLs against length, protocol and pattern rules."""

    def __init__(
        self,
        max_length: int = 2048,
        allowed_schemes: Iterable[str] = ("http", "https"),
        suspicious_patterns: Iterable[str] = (),
    ):
        self.max_length = max_length
        self.allowed_schemes = frozenset(scheme.lower() for scheme in allowed_schemes)
        self.suspicious_patterns = tuple(pattern.lower() for pattern in suspicious_patterns)

    def check(self, raw_url) -> ValidationResult:
        url = sanitize_url_input(raw_url)

        if not url:
            return ValidationResult.rejected(ValidationFailure.MISSING, "URL is required")

        if len(url) > self.max_length:
            return ValidationResult.rejected(
                ValidationFailure.TOO_LONG,
                f"URL too long (max {self.max_length} characters)",
            )
        url = url[: self.max_length]

        scheme = self._parse_scheme(url)
        if scheme is None:
            return ValidationResult.rejected(ValidationFailure.MALFORMED, "Invalid URL format")

        if scheme not in self.allowed_schemes:
            return ValidationResult.rejected(
                ValidationFailure.DISALLOWED_PROTOCOL,
                "Only HTTP and HTTPS protocols are allowed",
            )

        lowered = url.lower()
        if any(pattern in lowered for pattern in self.suspicious_patterns):
            return ValidationResult.rejected(
                ValidationFailure.MALICIOUS_PATTERN,
                "URL contains potentially malicious content",
            )

        return ValidationResult(url=url)

    def validate(self, raw_url) -> str:
        """Return the sanitized URL or raise a validation ``ShortenerError``."""
        result = self.check(raw_url)
        if not result.ok:
            raise ShortenerError.validation(result.failure.value, result.message)
        return result.url

    @staticmethod
    def _parse_scheme(url: str) -> Optional[str]:
        """Parse ``url`` as an absolute URL and return its scheme.

        Returns None when the value is not an absolute URL, or is a web URL
        without a host.
        """
        try:
            parsed = _url_adapter.validate_python(url)
        except ValidationError:
            return None
        scheme = (parsed.scheme or "").lower()
        if not scheme:
            return None
        if scheme in ("http", "https") and not parsed.host:
            return None
        return scheme
