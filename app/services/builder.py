"""
Transaction builder.

Validates a payment request and produces the initial transaction record
(status="processing"). Nothing is persisted here; every validation failure
raises before a record exists.

Validation order:
  1. amount / payment_method / customer_info present
  2. amount numeric, finite, > 0
  3. payment_method on the allow-list (PROCESSOR_MAP)
  4. customer name + email resolvable
  5. method-specific fields (card details, wallet address)
"""
import math
import random
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from app.exceptions import PaymentValidationError, UnsupportedPaymentMethodError
from app.processors import get_processor
from app.services.rates import calculate_processing_fee
from app.utils import epoch_ms, random_base36, utc_now

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"
TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_FAILED)

DEFAULT_DESCRIPTION = "Construction Service Payment"


def generate_transaction_id(now: datetime, rng: Optional[random.Random] = None) -> str:
    return f"TXN_{epoch_ms(now)}_{random_base36(9, rng)}"


def parse_amount(raw: Any) -> float:
    # JSON true/false would otherwise pass float() as 1.0/0.0
    if isinstance(raw, bool):
        raise PaymentValidationError("Invalid payment amount")
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        raise PaymentValidationError("Invalid payment amount")
    if not math.isfinite(amount) or amount <= 0:
        raise PaymentValidationError("Invalid payment amount")
    return amount


def build_customer_info(customer: Mapping[str, Any], billing_address: Optional[str] = None) -> Dict[str, str]:
    """Denormalized copy of the payer, taken at payment time."""
    name = customer.get("name")
    if not name:
        parts = [customer.get("first_name"), customer.get("last_name")]
        name = " ".join(p for p in parts if p)
    email = customer.get("email")
    if not name or not email:
        raise PaymentValidationError("Customer name and email are required")

    return {
        "name": name,
        "email": email,
        "phone": customer.get("phone") or "Not provided",
        "company": customer.get("company") or "Individual",
        "address": billing_address or customer.get("address") or "Not provided",
    }


def build_transaction(
    request: Mapping[str, Any],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the initial record for a payment request.

    Raises:
        PaymentValidationError: missing/invalid fields
        UnsupportedPaymentMethodError: method not on the allow-list
    """
    amount_raw = request.get("amount")
    method = request.get("payment_method")
    customer = request.get("customer_info")

    if amount_raw is None or amount_raw == "" or not method or not customer:
        raise PaymentValidationError("Amount, payment method, and customer info are required")

    amount = parse_amount(amount_raw)

    processor = get_processor(method)
    if processor is None:
        raise UnsupportedPaymentMethodError(method)

    customer_info = build_customer_info(customer, request.get("billing_address"))
    payment_details = processor.build_payment_details(method, request, amount)

    now = now or utc_now()
    # Crypto network fee is informational only and stays out of net_amount
    processing_fee = calculate_processing_fee(method, amount)
    metadata = metadata or {}

    return {
        "id": generate_transaction_id(now, rng),
        "amount": amount,
        "description": request.get("description") or DEFAULT_DESCRIPTION,
        "payment_method": method,
        "customer_info": customer_info,
        "payment_details": payment_details,
        "status": STATUS_PROCESSING,
        "timestamp": now,
        "processing_fee": processing_fee,
        "net_amount": round(amount - processing_fee, 2),
        "confirmation_code": None,
        "failure_reason": None,
        "processed_at": None,
        "ip_address": metadata.get("ip_address"),
        "user_agent": metadata.get("user_agent"),
    }
