from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase names the site forms post."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerInfo(CamelModel):
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None


class PaymentRequest(CamelModel):
    # Passed through untouched: the builder reports missing, boolean or
    # unparseable values with a 400 and a readable message.
    amount: Optional[Any] = None
    description: Optional[str] = None
    payment_method: Optional[str] = None
    customer_info: Optional[CustomerInfo] = None
    billing_address: Optional[str] = None
    # card
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None
    card_name: Optional[str] = None
    # crypto
    wallet_address: Optional[str] = None
    crypto_tx_hash: Optional[str] = None


class ContactRequest(CamelModel):
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    message: Optional[str] = None


class QuoteRequest(CamelModel):
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if v else v


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = None


class TicketUpdateRequest(CamelModel):
    status: Optional[str] = None
    response: Optional[str] = None
    admin_name: Optional[str] = None
