import logging
from typing import NamedTuple

from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings
from app.stores.base import Record, RecordStore
from app.stores.memory import InMemoryRecordStore
from app.stores.sql import SqlRecordStore

logger = logging.getLogger(__name__)

__all__ = ["Record", "RecordStore", "InMemoryRecordStore", "SqlRecordStore", "Stores", "build_stores"]


class Stores(NamedTuple):
    transactions: RecordStore
    tickets: RecordStore


def memory_stores() -> Stores:
    return Stores(transactions=InMemoryRecordStore(), tickets=InMemoryRecordStore())


def build_stores(settings: Settings) -> Stores:
    """
    Pick the backing once at start-up.

    A configured database that cannot be reached falls back to the
    in-memory lists; callers see the same RecordStore interface either way.
    """
    if not settings.database_url:
        logger.info("No database configured, using in-memory record store")
        return memory_stores()

    from app import models
    from app.database import init_db, make_engine, make_session_factory

    try:
        engine = make_engine(settings.database_url)
        init_db(engine)
    except SQLAlchemyError as e:
        logger.warning("Database unavailable (%s), falling back to in-memory record store", e)
        return memory_stores()

    session_factory = make_session_factory(engine)
    logger.info("Using SQL record store")
    return Stores(
        transactions=SqlRecordStore(session_factory, models.Transaction),
        tickets=SqlRecordStore(session_factory, models.SupportTicket),
    )
