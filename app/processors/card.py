import re
from typing import Any, Dict

from app.exceptions import PaymentValidationError
from app.processors.base import BaseProcessor

REQUIRED_FIELDS = ("card_number", "expiry_date", "cvv", "card_name")
MIN_CARD_DIGITS = 13


def get_card_type(card_number: str) -> str:
    """Brand from the leading digits. Prefix match only, no Luhn check."""
    first_two = card_number[:2]
    if card_number.startswith("4"):
        return "Visa"
    if len(first_two) == 2 and "51" <= first_two <= "55":
        return "Mastercard"
    if first_two in ("34", "37"):
        return "American Express"
    if first_two in ("60", "65"):
        return "Discover"
    return "Unknown"


class CardProcessor(BaseProcessor):
    """
    card / credit-card / debit-card.
    Stores only last 4 digits, brand, expiry and holder name.
    """

    confirmation_prefix = "CARD"
    failure_reasons = [
        "Insufficient funds",
        "Card declined by issuer",
        "Invalid card details",
        "Card expired",
    ]

    @property
    def processor_name(self) -> str:
        return "card"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        if not all(request.get(field) for field in REQUIRED_FIELDS):
            raise PaymentValidationError("Card details are required for card payments")

        digits = re.sub(r"\D", "", str(request["card_number"]))
        if len(digits) < MIN_CARD_DIGITS:
            raise PaymentValidationError("Invalid card number")

        return {
            "card_last4": digits[-4:],
            "card_type": get_card_type(digits),
            "expiry_date": request["expiry_date"],
            "card_holder_name": request["card_name"],
        }
