"""Storage package - link store contract and backends."""

from ..core.config import Settings
from .base import LinkStore
from .memory import MemoryLinkStore
from .sqlite import SqliteLinkStore


def build_store(settings: Settings) -> LinkStore:
    """Create the backend selected by ``settings.storage_type``."""
    if settings.storage_type == "sqlite":
        return SqliteLinkStore(settings.database_url)
    return MemoryLinkStore(shards=settings.store_shards)


__all__ = [
    "LinkStore",
    "MemoryLinkStore",
    "SqliteLinkStore",
    "build_store",
]
