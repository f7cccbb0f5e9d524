"""Shortener service - the single entry point for shorten and resolve.

Wires the validator, the id allocator and a link store together:

- shorten: validate, then propose ids until ``put_if_absent`` accepts one.
- resolve: reject malformed ids, then look the id up in the store.

Every call to ``shorten`` mints a new id, even for a URL that is already
stored.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..core.config import Settings
from ..core.errors import ShortenerError
from ..models.link import LinkRecord, utc_now
from ..storage import LinkStore, build_store
from ..utils.shortener import create_short_url, is_valid_link_id
from .allocator import IdAllocator
from .validator import UrlValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenResult:
    id: str
    short_url: str
    original_url: str


class ShortenerService:
    """Orchestrates validation, id allocation and storage."""

    def __init__(
        self,
        store: LinkStore,
        validator: UrlValidator,
        allocator: IdAllocator,
        base_url: str,
    ):
        self.store = store
        self.validator = validator
        self.allocator = allocator
        self.base_url = base_url

    @classmethod
    def from_settings(cls, settings: Settings, store: Optional[LinkStore] = None) -> "ShortenerService":
        """Build a service from configuration.

        Args:
            settings: Application settings.
            store: Store to use instead of the configured backend.

        Returns:
            Configured service.
        """
        return cls(
            store=store if store is not None else build_store(settings),
            validator=UrlValidator(
                max_length=settings.max_url_length,
                allowed_schemes=settings.allowed_schemes,
                suspicious_patterns=settings.suspicious_patterns,
            ),
            allocator=IdAllocator(
                id_bytes=settings.link_id_bytes,
                max_attempts=settings.max_allocation_attempts,
            ),
            base_url=settings.base_url,
        )

    def shorten(self, raw_url) -> ShortenResult:
        """Store a new short link for ``raw_url``.

        Raises:
            ShortenerError: ``validation`` for rejected input,
                ``allocation`` when every proposed id collided.
        """
        original_url = self.validator.validate(raw_url)

        for attempt in range(1, self.allocator.max_attempts + 1):
            link_id = self.allocator.propose()
            record = LinkRecord(id=link_id, original_url=original_url, created_at=utc_now())
            if self.store.put_if_absent(record):
                logger.info(f"Created short link: {link_id}")
                return ShortenResult(
                    id=link_id,
                    short_url=create_short_url(self.base_url, link_id),
                    original_url=original_url,
                )
            logger.warning(f"Link id collision on attempt {attempt}/{self.allocator.max_attempts}: {link_id}")

        logger.error(f"Id allocation exhausted after {self.allocator.max_attempts} attempts")
        raise ShortenerError.allocation_exhausted(self.allocator.max_attempts)

    def resolve(self, link_id: str) -> str:
        """Return the original URL stored under ``link_id``.

        Raises:
            ShortenerError: ``not_found`` for unknown or malformed ids.
        """
        if not is_valid_link_id(link_id):
            logger.info(f"Rejected malformed link id: {link_id!r}")
            raise ShortenerError.not_found()

        record = self.store.get(link_id)
        if record is None:
            logger.info(f"Link not found: {link_id}")
            raise ShortenerError.not_found()
        return record.original_url


def get_service(request: Request) -> ShortenerService:
    """Get the application's service for dependency injection.

    Args:
        request: FastAPI request object.

    Returns:
        ShortenerService instance, created from the app's settings on first use.
    """
    state = request.app.state
    service = getattr(state, "service", None)
    if service is None:
        service = ShortenerService.from_settings(state.settings)
        state.service = service
    return service
