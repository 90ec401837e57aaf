import logging
from typing import List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.database import Base
from app.exceptions import StoreUnavailableError
from app.stores.base import Record, RecordStore, active_filters

logger = logging.getLogger(__name__)


class SqlRecordStore(RecordStore):
    """Record store backed by one SQLAlchemy model; a session per operation."""

    def __init__(self, session_factory: sessionmaker, model: Type[Base]):
        self._session_factory = session_factory
        self.model = model
        self._columns = [c.name for c in model.__table__.columns]

    @property
    def backend_name(self) -> str:
        return "sql"

    def _to_record(self, row) -> Record:
        return {name: getattr(row, name) for name in self._columns}

    def _query(self, session, filters: Optional[Record]):
        query = session.query(self.model)
        for key, value in active_filters(filters).items():
            query = query.filter(getattr(self.model, key) == value)
        return query

    def create(self, record: Record) -> Record:
        try:
            with self._session_factory() as session:
                row = self.model(**record)
                session.add(row)
                session.commit()
                session.refresh(row)
                return self._to_record(row)
        except SQLAlchemyError as e:
            logger.error("Insert into %s failed: %s", self.model.__tablename__, e)
            raise StoreUnavailableError(f"Could not save record {record.get('id')}") from e

    def find_by_id(self, record_id: str) -> Optional[Record]:
        try:
            with self._session_factory() as session:
                row = session.get(self.model, record_id)
                return self._to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not load record {record_id}") from e

    def update_by_id(self, record_id: str, fields: Record) -> Optional[Record]:
        unknown = set(fields) - set(self._columns)
        if unknown:
            raise ValueError(f"Unknown fields for {self.model.__tablename__}: {sorted(unknown)}")
        try:
            with self._session_factory() as session:
                row = session.get(self.model, record_id)
                if row is None:
                    return None
                for key, value in fields.items():
                    setattr(row, key, value)
                session.commit()
                session.refresh(row)
                return self._to_record(row)
        except SQLAlchemyError as e:
            logger.error("Update of %s %s failed: %s", self.model.__tablename__, record_id, e)
            raise StoreUnavailableError(f"Could not update record {record_id}") from e

    def find(
        self,
        filters: Optional[Record] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        sort: str = "desc",
    ) -> List[Record]:
        order = self.model.timestamp.asc() if sort == "asc" else self.model.timestamp.desc()
        try:
            with self._session_factory() as session:
                query = self._query(session, filters).order_by(order).offset(skip)
                if limit is not None:
                    query = query.limit(limit)
                return [self._to_record(row) for row in query.all()]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not list {self.model.__tablename__}") from e

    def count(self, filters: Optional[Record] = None) -> int:
        try:
            with self._session_factory() as session:
                return self._query(session, filters).count()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not count {self.model.__tablename__}") from e
