"""
Outcome resolver.

Runs once per transaction after its settlement delay:
1. Load the record (missing -> skip silently)
2. Already terminal -> return as-is (a second fire changes nothing)
3. One Bernoulli draw against the method's success rate
4. completed: confirmation code (+ synthetic tx hash for crypto)
   failed:    failure reason from the method family's list
5. Persist (write #2); a failed write is logged, not raised
6. Notify on success (best effort)
"""
import logging
import random
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from app.exceptions import StoreUnavailableError
from app.processors import resolve_processor
from app.services.builder import STATUS_COMPLETED, STATUS_FAILED, TERMINAL_STATUSES
from app.services.rates import get_success_rate
from app.stores.base import RecordStore
from app.utils import utc_now

logger = logging.getLogger(__name__)


def terminal_fields(
    transaction: Dict[str, Any],
    status: str,
    rng: random.Random,
    now: datetime,
) -> Dict[str, Any]:
    """Fields that move a processing transaction to `status` (completed or failed)."""
    method = transaction["payment_method"]
    processor = resolve_processor(method)

    if status == STATUS_COMPLETED:
        fields = {
            "status": STATUS_COMPLETED,
            "confirmation_code": processor.generate_confirmation_code(rng),
            "failure_reason": None,
        }
        fields.update(processor.completion_fields(method, transaction, rng))
    else:
        fields = {
            "status": STATUS_FAILED,
            "confirmation_code": None,
            "failure_reason": processor.pick_failure_reason(rng),
        }
    fields["processed_at"] = now
    return fields


def decide_outcome(
    transaction: Dict[str, Any],
    rng: random.Random,
    now: datetime,
) -> Dict[str, Any]:
    """One draw against the method's success rate, then the matching terminal fields."""
    succeeded = rng.random() < get_success_rate(transaction["payment_method"])
    return terminal_fields(transaction, STATUS_COMPLETED if succeeded else STATUS_FAILED, rng, now)


async def resolve_transaction(
    transaction_id: str,
    store: RecordStore,
    notifier=None,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = utc_now,
) -> Optional[Dict[str, Any]]:
    """
    Resolve one transaction to completed/failed.

    Returns the resolved record, the unchanged record if it was already
    terminal, or None if it could not be loaded.
    """
    rng = rng or random.Random()

    try:
        transaction = store.find_by_id(transaction_id)
    except StoreUnavailableError as e:
        logger.error("Could not load %s for resolution: %s", transaction_id, e)
        return None

    if transaction is None:
        logger.info("Transaction %s vanished before resolution, skipping", transaction_id)
        return None

    if transaction["status"] in TERMINAL_STATUSES:
        logger.info("Transaction %s already %s, skipping", transaction_id, transaction["status"])
        return transaction

    fields = decide_outcome(transaction, rng, clock())
    transaction.update(fields)

    try:
        if store.update_by_id(transaction_id, fields) is None:
            logger.warning("Transaction %s disappeared while saving its outcome", transaction_id)
    except StoreUnavailableError as e:
        logger.error("Could not persist outcome of %s: %s", transaction_id, e)

    method = transaction["payment_method"].upper()
    if transaction["status"] == STATUS_COMPLETED:
        logger.info("%s payment completed: %s", method, transaction_id)
        if notifier is not None:
            await notifier.notify(transaction)
    else:
        logger.info("%s payment failed: %s (%s)", method, transaction_id, transaction["failure_reason"])

    return transaction
