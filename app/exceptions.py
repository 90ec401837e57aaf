"""Application exceptions, mapped to HTTP responses in app.main."""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base exception for all service-level errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppError):
    """Caller supplied an incomplete or invalid request."""

    status_code = 400


class PaymentValidationError(ValidationError):
    pass


class UnsupportedPaymentMethodError(PaymentValidationError):
    def __init__(self, method: str) -> None:
        super().__init__("Unsupported payment method", {"payment_method": method})


class RecordNotFoundError(AppError):
    status_code = 404


class StoreUnavailableError(AppError):
    """The record store could not persist a write."""

    status_code = 500
