"""
Payment service: accepts a payment, persists it, schedules its outcome.

Flow: build -> store.create (write #1) -> scheduler.schedule(delay, resolve)
-> resolver (write #2) -> notifier.
"""
import asyncio
import logging
import random
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Mapping, NamedTuple, Optional, Set

from app.exceptions import RecordNotFoundError, StoreUnavailableError, ValidationError
from app.services.builder import TERMINAL_STATUSES, build_transaction
from app.services.rates import get_processing_delay_ms
from app.services.resolver import resolve_transaction, terminal_fields
from app.stores.base import RecordStore
from app.utils import utc_now

logger = logging.getLogger(__name__)


class AsyncioScheduler:
    """
    One-shot deferred jobs on the running event loop.

    Each job is started once via loop.call_later; there is no cancellation
    and no bound on the number of pending jobs.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def running(self) -> int:
        return len(self._tasks)

    def schedule(self, delay_seconds: float, job: Callable[[], Awaitable[Any]]) -> None:
        loop = asyncio.get_running_loop()
        loop.call_later(delay_seconds, self._start, job)

    def _start(self, job: Callable[[], Awaitable[Any]]) -> None:
        task = asyncio.ensure_future(job())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Deferred job failed: %r", task.exception())


class PaymentSubmission(NamedTuple):
    transaction: Dict[str, Any]
    delay_ms: float


class PaymentService:
    def __init__(
        self,
        store: RecordStore,
        notifier=None,
        scheduler=None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
        simulate: bool = True,
    ):
        self.store = store
        self.notifier = notifier
        self.scheduler = scheduler or AsyncioScheduler()
        self.rng = rng or random.Random()
        self.clock = clock
        self.simulate = simulate

    def submit(self, request: Mapping[str, Any], metadata: Optional[Mapping[str, Any]] = None) -> PaymentSubmission:
        """
        Validate and record a payment, then schedule its resolution.

        Raises:
            ValidationError: request rejected, nothing stored
            StoreUnavailableError: the initial write failed
        """
        transaction = build_transaction(request, rng=self.rng, now=self.clock(), metadata=metadata)
        method = transaction["payment_method"]

        try:
            self.store.create(transaction)
        except StoreUnavailableError:
            logger.error("Could not record %s payment %s", method, transaction["id"])
            raise

        delay_ms = get_processing_delay_ms(method, self.rng)
        if self.simulate:
            transaction_id = transaction["id"]
            self.scheduler.schedule(delay_ms / 1000, lambda: self.resolve(transaction_id))

        logger.info("New %s payment transaction created: %s", method.upper(), transaction["id"])
        return PaymentSubmission(transaction, delay_ms)

    async def resolve(self, transaction_id: str) -> Optional[Dict[str, Any]]:
        return await resolve_transaction(
            transaction_id, self.store, self.notifier, rng=self.rng, clock=self.clock
        )

    def get_transaction(self, transaction_id: str) -> Dict[str, Any]:
        transaction = self.store.find_by_id(transaction_id)
        if transaction is None:
            raise RecordNotFoundError("Transaction not found")
        return transaction

    def list_transactions(
        self,
        status: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        sort: str = "desc",
    ) -> List[Dict[str, Any]]:
        return self.store.find({"status": status}, skip=skip, limit=limit, sort=sort)

    def update_status(self, transaction_id: str, status: Optional[str]) -> Dict[str, Any]:
        """
        Manual admin resolution of a processing transaction.

        Only processing -> completed/failed is allowed; the same terminal
        fields as an automatic resolution are written, so the pending timer
        later finds a terminal record and skips it.
        """
        if not status:
            raise ValidationError("Status is required")
        if status not in TERMINAL_STATUSES:
            raise ValidationError(f"Invalid status: {status}")

        transaction = self.get_transaction(transaction_id)
        if transaction["status"] in TERMINAL_STATUSES:
            raise ValidationError(f"Transaction already {transaction['status']}")

        fields = terminal_fields(transaction, status, self.rng, self.clock())
        updated = self.store.update_by_id(transaction_id, fields)
        if updated is None:
            raise RecordNotFoundError("Transaction not found")
        logger.info("Transaction %s set to %s by admin", transaction_id, status)
        return updated
