import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from app.utils import random_base36


class BaseProcessor(ABC):
    """Abstract base for the simulated payment-method families."""

    confirmation_prefix = "PAY"
    failure_reasons: List[str] = ["Payment processing error"]

    @property
    @abstractmethod
    def processor_name(self) -> str:
        pass

    @abstractmethod
    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        """
        Validate the method-specific request fields and derive paymentDetails.
        Raises PaymentValidationError when required fields are missing.
        """
        pass

    def completion_fields(self, method: str, transaction: Dict[str, Any], rng: random.Random) -> Dict[str, Any]:
        """Extra fields written alongside status=completed."""
        return {}

    def generate_confirmation_code(self, rng: random.Random) -> str:
        return f"{self.confirmation_prefix}_{random_base36(8, rng).upper()}"

    def pick_failure_reason(self, rng: random.Random) -> str:
        return rng.choice(self.failure_reasons)


class GenericProcessor(BaseProcessor):
    """Fallback for records whose method has no dedicated processor (e.g. seeded data)."""

    @property
    def processor_name(self) -> str:
        return "generic"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        return {}
