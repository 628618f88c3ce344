"""
Payment Routes — Registration form intake.
Creates the Centiiv payment intent and records the pending registration.
"""
from fastapi import APIRouter, Depends

from app.config import get_settings
from app.dependencies import get_registration_service
from app.schemas.schemas import InitiatePaymentRequest, InitiatePaymentResponse, ErrorResponse
from app.services.registration_service import RegistrationService
from app.utils.rate_limiter import rate_limit

settings = get_settings()

router = APIRouter(prefix="/api", tags=["Payment"])


@router.post(
    "/initiate-payment",
    response_model=InitiatePaymentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def initiate_payment(
    payload: InitiatePaymentRequest,
    service: RegistrationService = Depends(get_registration_service),
    _throttle: bool = Depends(
        rate_limit(
            requests=settings.INITIATE_RATE_LIMIT,
            window=settings.INITIATE_RATE_WINDOW,
            scope="initiate-payment",
        )
    ),
):
    """Start a registration payment and return the hosted checkout URL."""
    result = service.initiate(payload)
    return InitiatePaymentResponse(success=True, payment_url=result.payment_url)
