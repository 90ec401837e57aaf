"""
FastAPI dependencies.

Stores, notifier, scheduler and random source are process-wide singletons;
tests swap them through app.dependency_overrides.
"""
import random
from functools import lru_cache

from fastapi import Depends

from app.config import Settings, get_settings
from app.services.notifier import EmailNotifier
from app.services.payments import AsyncioScheduler, PaymentService
from app.services.tickets import TicketService
from app.stores import Stores, build_stores


@lru_cache
def get_stores() -> Stores:
    return build_stores(get_settings())


@lru_cache
def get_notifier() -> EmailNotifier:
    return EmailNotifier(get_settings())


@lru_cache
def get_scheduler() -> AsyncioScheduler:
    return AsyncioScheduler()


@lru_cache
def get_rng() -> random.Random:
    return random.Random()


def get_payment_service(
    stores: Stores = Depends(get_stores),
    notifier=Depends(get_notifier),
    scheduler=Depends(get_scheduler),
    rng: random.Random = Depends(get_rng),
    settings: Settings = Depends(get_settings),
) -> PaymentService:
    return PaymentService(
        stores.transactions,
        notifier=notifier,
        scheduler=scheduler,
        rng=rng,
        simulate=settings.simulate_payments,
    )


def get_ticket_service(
    stores: Stores = Depends(get_stores),
    notifier=Depends(get_notifier),
    rng: random.Random = Depends(get_rng),
) -> TicketService:
    return TicketService(stores.tickets, notifier=notifier, rng=rng)
