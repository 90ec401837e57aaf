from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class RecordStore(ABC):
    """Storage for one collection of records keyed by their ``id`` field.

    Both backings share the same query semantics: equality filters on
    top-level fields (``None`` values are ignored), ordering by ``timestamp``
    ("asc" or "desc"), then ``skip``/``limit`` pagination.
    """

    @abstractmethod
    def create(self, record: Record) -> Record:
        pass

    @abstractmethod
    def find_by_id(self, record_id: str) -> Optional[Record]:
        pass

    @abstractmethod
    def update_by_id(self, record_id: str, fields: Record) -> Optional[Record]:
        """Apply ``fields`` to the record; return the updated record or None if unknown."""
        pass

    @abstractmethod
    def find(
        self,
        filters: Optional[Record] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        sort: str = "desc",
    ) -> List[Record]:
        pass

    @abstractmethod
    def count(self, filters: Optional[Record] = None) -> int:
        pass

    @property
    @abstractmethod
    def backend_name(self) -> str:
        pass


def active_filters(filters: Optional[Record]) -> Record:
    return {k: v for k, v in (filters or {}).items() if v is not None}
