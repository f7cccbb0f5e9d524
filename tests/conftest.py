"""Shared fixtures for the short links tests."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shortlinks.core.config import DEFAULT_SUSPICIOUS_PATTERNS
from shortlinks.core.rate_limit import limiter
from shortlinks.main import app
from shortlinks.services.allocator import IdAllocator
from shortlinks.services.shortener import ShortenerService, get_service
from shortlinks.services.validator import UrlValidator
from shortlinks.storage.memory import MemoryLinkStore

BASE_URL = "https://sho.rt"


def make_service(store=None, allocator=None, max_length=2048):
    """Build a service with default rules around the given parts."""
    return ShortenerService(
        store=store if store is not None else MemoryLinkStore(),
        validator=UrlValidator(
            max_length=max_length,
            suspicious_patterns=DEFAULT_SUSPICIOUS_PATTERNS,
        ),
        allocator=allocator if allocator is not None else IdAllocator(),
        base_url=BASE_URL,
    )


class FixedAllocator(IdAllocator):
    """Allocator that proposes ids from a fixed list, repeating the last one."""

    def __init__(self, ids, max_attempts=10):
        super().__init__(max_attempts=max_attempts)
        self.ids = list(ids)
        self.proposed = []

    def propose(self) -> str:
        link_id = self.ids.pop(0) if len(self.ids) > 1 else self.ids[0]
        self.proposed.append(link_id)
        return link_id


@pytest.fixture
def service():
    """Create a fresh in-memory shortener service."""
    return make_service()


@pytest.fixture
def client(service):
    """Create a test client bound to the test service."""
    app.dependency_overrides[get_service] = lambda: service
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.dependency_overrides.clear()
    limiter.reset()
