"""
Shared pytest fixtures for all test modules.

Stores are in-memory by default; `sql_stores` gives the SQLAlchemy backing
over an in-memory SQLite database (StaticPool) that is recreated per test.
Randomness and scheduling are injected so no test sleeps or depends on luck.
"""
import random
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient

from typing import Any, Dict, List, Optional

from app.database import Base, make_engine, make_session_factory
from app import models
from app.dependencies import get_notifier, get_rng, get_scheduler, get_stores
from app.stores import InMemoryRecordStore, SqlRecordStore, Stores


BASE_TIME = datetime(2024, 1, 15, 10, 0, 0)


class ScriptedRandom(random.Random):
    """random() returns the queued values first, then falls back to a seeded stream.

    getrandbits is redefined so choice()/randbelow keep using bits rather than
    consuming the scripted random() values.
    """

    def __init__(self, values=(), seed=1234):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()

    def getrandbits(self, k):
        return super().getrandbits(k)


class FakeScheduler:
    """Records deferred jobs instead of arming timers; run_all() fires them."""

    def __init__(self):
        self.jobs: List[tuple] = []

    def schedule(self, delay_seconds, job):
        self.jobs.append((delay_seconds, job))

    async def run_all(self):
        jobs, self.jobs = self.jobs, []
        return [await job() for _, job in jobs]


class RecordingNotifier:
    def __init__(self, result: bool = True):
        self.result = result
        self.notified: List[Dict[str, Any]] = []
        self.tickets: List[Dict[str, Any]] = []

    async def notify(self, transaction):
        self.notified.append(transaction)
        return self.result

    async def send_ticket_confirmation(self, ticket):
        self.tickets.append(ticket)
        return self.result


class FixedClock:
    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def stores():
    return Stores(transactions=InMemoryRecordStore(), tickets=InMemoryRecordStore())


@pytest.fixture
def sql_session_factory():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def sql_stores(sql_session_factory):
    return Stores(
        transactions=SqlRecordStore(sql_session_factory, models.Transaction),
        tickets=SqlRecordStore(sql_session_factory, models.SupportTicket),
    )


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def client(stores, scheduler, notifier, rng):
    """
    TestClient with stores/scheduler/notifier/rng overridden.
    Not used as a context manager so the lifespan hook is skipped.
    """
    from app.main import app

    app.dependency_overrides[get_stores] = lambda: stores
    app.dependency_overrides[get_scheduler] = lambda: scheduler
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_rng] = lambda: rng
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers, not fixtures, so any test file can import and call them directly.
# ---------------------------------------------------------------------------
def payment_request(method: str = "card", amount: Any = 1000, **overrides) -> Dict[str, Any]:
    """A complete, valid request for `method`; override or drop (value None) fields freely."""
    request: Dict[str, Any] = {
        "amount": amount,
        "payment_method": method,
        "description": "Foundation work",
        "customer_info": {"name": "Jane Doe", "email": "jane@example.com"},
    }
    if method in ("card", "credit-card", "debit-card"):
        request.update({
            "card_number": "4111 1111 1111 1111",
            "expiry_date": "12/29",
            "cvv": "123",
            "card_name": "Jane Doe",
        })
    if method in ("bitcoin", "ethereum", "litecoin", "dogecoin", "cardano", "solana"):
        request["wallet_address"] = "bc1qexamplewalletaddress"
    request.update(overrides)
    return request


def make_txn(
    store,
    txn_id: str,
    amount: float = 1000.0,
    payment_method: str = "card",
    status: str = "processing",
    email: str = "jane@example.com",
    timestamp: Optional[datetime] = None,
    payment_details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    fee = round(amount * 0.029, 2) if "card" in payment_method else 0.0
    return store.create({
        "id": txn_id,
        "amount": amount,
        "description": "Test payment",
        "payment_method": payment_method,
        "customer_info": {"name": "Jane Doe", "email": email},
        "payment_details": payment_details or {},
        "status": status,
        "timestamp": timestamp or BASE_TIME,
        "processing_fee": fee,
        "net_amount": round(amount - fee, 2),
        "confirmation_code": "CARD_TEST0001" if status == "completed" else None,
        "failure_reason": "Card expired" if status == "failed" else None,
        "processed_at": None,
        "ip_address": None,
        "user_agent": None,
    })


def make_ticket(
    store,
    ticket_id: str,
    ticket_type: str = "contact",
    status: str = "new",
    email: str = "jane@example.com",
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    return store.create({
        "id": ticket_id,
        "type": ticket_type,
        "name": "Jane Doe",
        "email": email,
        "phone": None,
        "company": None,
        "project_type": "Residential",
        "budget": None,
        "timeline": None,
        "message": "Hello",
        "description": None,
        "status": status,
        "priority": "normal",
        "timestamp": timestamp or BASE_TIME,
        "updated_at": None,
        "responses": [],
    })
