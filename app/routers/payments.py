import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.dependencies import get_payment_service
from app.exceptions import AppError
from app.schemas.requests import PaymentRequest
from app.schemas.responses import (
    CryptoPaymentSummary,
    ErrorResponse,
    PaymentMethodList,
    PaymentResponse,
    TransactionStatusResponse,
)
from app.services.payments import PaymentService
from app.services.rates import format_processing_time, is_crypto_payment, payment_method_catalog

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/payment",
    response_model=PaymentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_payment(
    payload: PaymentRequest,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    settings: Settings = Depends(get_settings),
):
    """
    Accept a simulated payment.

    - Validates the request and method-specific fields (400 on failure)
    - Records the transaction with status="processing"
    - Schedules its completed/failed resolution after a method-dependent delay
    """
    metadata = {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }
    try:
        transaction, delay_ms = service.submit(payload.model_dump(), metadata)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Payment processing error")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Payment processing failed. Please try again or contact support.",
                detail=str(e) if settings.is_development else None,
            ).model_dump(exclude_none=True),
        )

    method = transaction["payment_method"]
    summary = None
    if is_crypto_payment(method):
        details = transaction["payment_details"]
        summary = CryptoPaymentSummary(
            crypto_amount=details["crypto_amount"],
            crypto_type=details["crypto_type"],
            network_fee=details["network_fee"],
        )

    return PaymentResponse(
        transaction_id=transaction["id"],
        message=(
            f"{method.upper()} payment is being processed. "
            "You will receive a confirmation shortly."
        ),
        estimated_processing_time=format_processing_time(delay_ms),
        payment_details=summary,
    )


@router.get(
    "/payment/{transaction_id}",
    response_model=TransactionStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_payment_status(transaction_id: str, service: PaymentService = Depends(get_payment_service)):
    return TransactionStatusResponse(transaction=service.get_transaction(transaction_id))


@router.get("/payment-methods", response_model=PaymentMethodList)
def list_payment_methods():
    return PaymentMethodList(payment_methods=payment_method_catalog())
