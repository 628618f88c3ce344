"""
Webhook Routes — Centiiv payment notifications.
Reads the raw body so parsing errors map to 400 instead of FastAPI's 422.
"""
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from app.dependencies import get_registration_service
from app.schemas.schemas import WebhookAck, ErrorResponse
from app.services.registration_service import RegistrationService

router = APIRouter(prefix="/webhook", tags=["Webhook"])


@router.post(
    "/payment",
    response_model=WebhookAck,
    responses={400: {"model": ErrorResponse}},
)
async def payment_webhook(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
):
    """Acknowledge a gateway event after applying it to its registration."""
    raw_body = await request.body()
    await run_in_threadpool(service.reconcile, raw_body)
    return WebhookAck()
