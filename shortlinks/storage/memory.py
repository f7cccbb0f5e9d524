"""In-memory link store split into independently locked shards."""

import threading
from typing import Optional

from ..models.link import LinkRecord
from .base import LinkStore


class _Shard:
    __slots__ = ("lock", "records")

    def __init__(self):
        self.lock = threading.Lock()
        self.records: dict[str, LinkRecord] = {}


class MemoryLinkStore(LinkStore):
    """Volatile store backed by a fixed number of locked dict shards.

    An id always hashes to the same shard, so ``put_if_absent`` and ``get``
    on one id serialize on that shard's lock while other shards stay free.
    """

    def __init__(self, shards: int = 16):
        if shards < 1:
            raise ValueError(f"Shard count must be positive (given value: {shards}).")
        self._shards = [_Shard() for _ in range(shards)]

    def _shard_for(self, link_id: str) -> _Shard:
        return self._shards[hash(link_id) % len(self._shards)]

    def put_if_absent(self, record: LinkRecord) -> bool:
        shard = self._shard_for(record.id)
        with shard.lock:
            if record.id in shard.records:
                return False
            shard.records[record.id] = record
        return True

    def get(self, link_id: str) -> Optional[LinkRecord]:
        shard = self._shard_for(link_id)
        with shard.lock:
            return shard.records.get(link_id)

    def size(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.records)
        return total
