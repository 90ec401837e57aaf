from typing import Any, Dict

from app.processors.base import BaseProcessor


class BankTransferProcessor(BaseProcessor):
    """bank-transfer / wire-transfer. Settles slowly, no extra request fields."""

    confirmation_prefix = "XFER"
    failure_reasons = [
        "Account not found",
        "Insufficient funds",
        "Transfer limit exceeded",
    ]

    @property
    def processor_name(self) -> str:
        return "bank"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        return {}
