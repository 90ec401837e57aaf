from fastapi import APIRouter, Depends

from app.dependencies import get_ticket_service
from app.schemas.requests import ContactRequest, QuoteRequest
from app.schemas.responses import ErrorResponse, TicketSubmitResponse
from app.services.tickets import TicketService

router = APIRouter()


@router.post("/contact", response_model=TicketSubmitResponse, responses={400: {"model": ErrorResponse}})
async def submit_contact(payload: ContactRequest, service: TicketService = Depends(get_ticket_service)):
    """Contact form: stores a `contact` ticket and emails a confirmation."""
    ticket = await service.create_contact_ticket(payload.model_dump())
    return TicketSubmitResponse(
        message="Your inquiry has been received! We will contact you soon.",
        ticket_id=ticket["id"],
    )


@router.post("/quote", response_model=TicketSubmitResponse, responses={400: {"model": ErrorResponse}})
async def submit_quote(payload: QuoteRequest, service: TicketService = Depends(get_ticket_service)):
    """Quote request: stores a `quote` ticket and emails a confirmation."""
    ticket = await service.create_quote_ticket(payload.model_dump())
    return TicketSubmitResponse(
        message="Your quote request has been received! We will send you a proposal soon.",
        ticket_id=ticket["id"],
    )
