from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings, get_settings
from app.dependencies import get_payment_service, get_stores, get_ticket_service
from app.schemas.requests import StatusUpdateRequest, TicketUpdateRequest
from app.schemas.responses import (
    AdminDashboard,
    ErrorResponse,
    Pagination,
    TicketList,
    TicketUpdateResponse,
    TransactionList,
    TransactionUpdateResponse,
)
from app.services.dashboard import build_admin_dashboard
from app.services.payments import PaymentService
from app.services.tickets import TicketService
from app.stores import Stores

router = APIRouter()

ERROR_RESPONSES = {404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}}


@router.get("/dashboard", response_model=AdminDashboard)
def admin_dashboard(stores: Stores = Depends(get_stores)):
    """Transaction/ticket counts, gross and net revenue over completed payments, recent items."""
    return build_admin_dashboard(stores.transactions, stores.tickets)


@router.get("/transactions", response_model=TransactionList)
def list_transactions(
    status: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1),
    sort: Literal["asc", "desc"] = "desc",
    service: PaymentService = Depends(get_payment_service),
    settings: Settings = Depends(get_settings),
):
    """List transactions by timestamp; `limit` is capped at `list_limit_max`."""
    limit = min(limit, settings.list_limit_max)
    transactions = service.list_transactions(status=status, skip=skip, limit=limit, sort=sort)
    return TransactionList(
        transactions=transactions,
        pagination=Pagination(
            skip=skip,
            limit=limit,
            count=len(transactions),
            total=service.store.count({"status": status}),
        ),
    )


@router.put("/transactions/{transaction_id}", response_model=TransactionUpdateResponse, responses=ERROR_RESPONSES)
def update_transaction(
    transaction_id: str,
    payload: StatusUpdateRequest,
    service: PaymentService = Depends(get_payment_service),
):
    return TransactionUpdateResponse(transaction=service.update_status(transaction_id, payload.status))


@router.get("/tickets", response_model=TicketList)
def list_tickets(
    status: Optional[str] = None,
    type: Optional[Literal["contact", "quote"]] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1),
    sort: Literal["asc", "desc"] = "desc",
    service: TicketService = Depends(get_ticket_service),
    settings: Settings = Depends(get_settings),
):
    limit = min(limit, settings.list_limit_max)
    tickets = service.list_tickets(status=status, ticket_type=type, skip=skip, limit=limit, sort=sort)
    return TicketList(
        tickets=tickets,
        pagination=Pagination(
            skip=skip,
            limit=limit,
            count=len(tickets),
            total=service.store.count({"status": status, "type": type}),
        ),
    )


@router.put("/tickets/{ticket_id}", response_model=TicketUpdateResponse, responses=ERROR_RESPONSES)
def update_ticket(
    ticket_id: str,
    payload: TicketUpdateRequest,
    service: TicketService = Depends(get_ticket_service),
):
    """Set a ticket's status and/or append an admin response."""
    ticket = service.update_ticket(
        ticket_id,
        status=payload.status,
        response=payload.response,
        admin_name=payload.admin_name,
    )
    return TicketUpdateResponse(ticket=ticket)
