"""
Contact / quote intake tickets.

Tickets only change status through update_ticket (an admin action);
nothing here advances them automatically.
"""
import logging
import random
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.exceptions import RecordNotFoundError, ValidationError
from app.stores.base import RecordStore
from app.utils import epoch_ms, random_base36, utc_now

logger = logging.getLogger(__name__)

TICKET_STATUSES = ("new", "in-progress", "closed")
TICKET_TYPES = ("contact", "quote")

CONTACT_FIELDS = ("name", "email", "phone", "company", "project_type", "budget", "message")
QUOTE_FIELDS = ("name", "email", "phone", "company", "project_type", "budget", "timeline", "description")


class TicketService:
    def __init__(
        self,
        store: RecordStore,
        notifier=None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.notifier = notifier
        self.rng = rng or random.Random()
        self.clock = clock

    def _build(self, ticket_type: str, form: Mapping[str, Any], fields) -> Dict[str, Any]:
        if not form.get("name") or not form.get("email"):
            raise ValidationError("Name and email are required")
        now = self.clock()
        ticket = {
            "id": f"TKT_{epoch_ms(now)}_{random_base36(6, self.rng)}",
            "type": ticket_type,
            "status": "new",
            "priority": "normal",
            "timestamp": now,
            "updated_at": None,
            "responses": [],
        }
        for field in fields:
            ticket[field] = form.get(field)
        return ticket

    async def _submit(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        ticket = self.store.create(ticket)
        if self.notifier is not None:
            await self.notifier.send_ticket_confirmation(ticket)
        logger.info("New %s ticket: %s", ticket["type"], ticket["id"])
        return ticket

    async def create_contact_ticket(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._submit(self._build("contact", form, CONTACT_FIELDS))

    async def create_quote_ticket(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._submit(self._build("quote", form, QUOTE_FIELDS))

    def list_tickets(
        self,
        status: Optional[str] = None,
        ticket_type: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        sort: str = "desc",
    ) -> List[Dict[str, Any]]:
        return self.store.find({"status": status, "type": ticket_type}, skip=skip, limit=limit, sort=sort)

    def update_ticket(
        self,
        ticket_id: str,
        status: Optional[str] = None,
        response: Optional[str] = None,
        admin_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not status and not response:
            raise ValidationError("Status is required")
        if status and status not in TICKET_STATUSES:
            raise ValidationError(f"Invalid status: {status}")

        ticket = self.store.find_by_id(ticket_id)
        if ticket is None:
            raise RecordNotFoundError("Ticket not found")

        now = self.clock()
        fields: Dict[str, Any] = {"updated_at": now}
        if status:
            fields["status"] = status
        if response:
            fields["responses"] = list(ticket.get("responses") or []) + [{
                "message": response,
                "timestamp": now.isoformat(),
                "admin_name": admin_name,
            }]

        updated = self.store.update_by_id(ticket_id, fields)
        if updated is None:
            raise RecordNotFoundError("Ticket not found")
        logger.info("Ticket %s updated (status=%s)", ticket_id, updated["status"])
        return updated
