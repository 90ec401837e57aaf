from typing import Any, Dict

from app.processors.base import BaseProcessor


class CheckProcessor(BaseProcessor):
    failure_reasons = [
        "Invalid check number",
        "Account closed",
        "Insufficient funds",
    ]

    @property
    def processor_name(self) -> str:
        return "check"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        return {}
