"""Link id allocation."""

import logging
from typing import Callable

from ..core.errors import ShortenerError
from ..utils.shortener import generate_link_id

logger = logging.getLogger(__name__)


class IdAllocator:
    """Proposes random hex ids and retries on collision a bounded number of times.

    ``allocate`` only checks membership; pairing a proposal with the store's
    ``put_if_absent`` is what makes allocation safe under concurrency.
    """

    def __init__(self, id_bytes: int = 4, max_attempts: int = 10):
        if id_bytes < 1:
            raise ValueError(f"Id byte count must be positive (given value: {id_bytes}).")
        if max_attempts < 1:
            raise ValueError(f"Attempt bound must be positive (given value: {max_attempts}).")
        self.id_bytes = id_bytes
        self.max_attempts = max_attempts

    @property
    def id_length(self) -> int:
        return self.id_bytes * 2

    def propose(self) -> str:
        return generate_link_id(self.id_bytes)

    def allocate(self, exists: Callable[[str], bool]) -> str:
        """Return an id for which ``exists`` is False.

        Raises:
            ShortenerError: kind ``allocation`` once ``max_attempts`` ids collided.
        """
        for attempt in range(1, self.max_attempts + 1):
            link_id = self.propose()
            if not exists(link_id):
                return link_id
            logger.info(f"Link id collision on attempt {attempt}/{self.max_attempts}")
        raise ShortenerError.allocation_exhausted(self.max_attempts)
