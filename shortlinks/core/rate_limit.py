"""Per-client rate limiting.

Uses slowapi keyed on the remote address. The limit string is read from
settings on every request so window and threshold follow configuration.
Exceeded limits are rendered as ``ShortenerError.rate_limited`` by the app.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings


def current_rate_limit() -> str:
    """Return the configured limit, e.g. ``"100/900 seconds"``."""
    return settings.rate_limit


limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)
