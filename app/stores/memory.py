import copy
from datetime import datetime
from typing import List, Optional

from app.stores.base import Record, RecordStore, active_filters


class InMemoryRecordStore(RecordStore):
    """
    Ordered list standing in for the external database.

    Records are deep-copied on the way in and out, so callers never share
    state with the store and every read observes the latest write.
    """

    def __init__(self, records: Optional[List[Record]] = None):
        self._records: List[Record] = [copy.deepcopy(r) for r in records or []]

    @property
    def backend_name(self) -> str:
        return "memory"

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.get("id") == record_id:
                return i
        return -1

    def create(self, record: Record) -> Record:
        if record.get("id") is None:
            raise ValueError("record must have an id")
        if self._index_of(record["id"]) != -1:
            raise ValueError(f"duplicate id: {record['id']}")
        self._records.append(copy.deepcopy(record))
        return copy.deepcopy(record)

    def find_by_id(self, record_id: str) -> Optional[Record]:
        i = self._index_of(record_id)
        return copy.deepcopy(self._records[i]) if i != -1 else None

    def update_by_id(self, record_id: str, fields: Record) -> Optional[Record]:
        i = self._index_of(record_id)
        if i == -1:
            return None
        self._records[i].update(copy.deepcopy(fields))
        return copy.deepcopy(self._records[i])

    def _matching(self, filters: Optional[Record]) -> List[Record]:
        wanted = active_filters(filters)
        return [
            r for r in self._records
            if all(r.get(key) == value for key, value in wanted.items())
        ]

    def find(
        self,
        filters: Optional[Record] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        sort: str = "desc",
    ) -> List[Record]:
        matches = sorted(
            self._matching(filters),
            key=lambda r: r.get("timestamp") or datetime.min,
            reverse=(sort == "desc"),
        )
        end = None if limit is None else skip + limit
        return [copy.deepcopy(r) for r in matches[skip:end]]

    def count(self, filters: Optional[Record] = None) -> int:
        return len(self._matching(filters))
