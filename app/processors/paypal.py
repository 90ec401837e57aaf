from typing import Any, Dict

from app.processors.base import BaseProcessor


class PayPalProcessor(BaseProcessor):
    failure_reasons = [
        "PayPal account suspended",
        "Insufficient PayPal balance",
        "Payment disputed",
    ]

    @property
    def processor_name(self) -> str:
        return "paypal"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        return {}
