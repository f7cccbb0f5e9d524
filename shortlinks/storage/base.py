"""Abstract base class for link stores.

Every backend (in-memory, SQLite, or another key-value engine) implements the
same contract so the service never depends on a concrete storage mechanism.

Responsibilities:
    - Own all LinkRecord instances; hand out immutable records only.
    - Provide a single atomic mutation primitive, ``put_if_absent``.
    - Stay consistent under concurrent ``put_if_absent``/``get`` callers.

Stores never validate URLs; the service validates before inserting.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.link import LinkRecord


class LinkStore(ABC):
    """Interface for link stores.

    Methods:
        put_if_absent(record: LinkRecord) -> bool:
            Insert the record only if its id is not yet present.
            Returns whether the insert happened.

        get(link_id: str) -> LinkRecord | None:
            Look up a record by id. Returns None if not found.

        size() -> int:
            Number of stored records (diagnostic only).
    """

    @abstractmethod
    def put_if_absent(self, record: LinkRecord) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get(self, link_id: str) -> Optional[LinkRecord]:
        raise NotImplementedError

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError

    def close(self) -> None:
        """Release backend resources."""
