"""
FastAPI dependencies — build the store, gateway and services per request.
Tests swap any of these through `app.dependency_overrides`.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.database import get_db
from app.repository.registration_store import RegistrationStore, SqlAlchemyRegistrationStore
from app.services.admin_service import AdminQueryService
from app.services.gateway_client import CentiivGateway, PaymentGateway
from app.services.registration_service import RegistrationService


def get_registration_store(db: Session = Depends(get_db)) -> RegistrationStore:
    return SqlAlchemyRegistrationStore(db)


def get_payment_gateway(settings: Settings = Depends(get_settings)) -> PaymentGateway:
    return CentiivGateway(
        base_url=settings.CENTIIV_BASE_URL,
        api_key=settings.CENTIIV_API_KEY,
        timeout=settings.GATEWAY_TIMEOUT_SECONDS,
    )


def get_registration_service(
    store: RegistrationStore = Depends(get_registration_store),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    return RegistrationService(
        store,
        gateway,
        callback_url=settings.CALLBACK_URL,
        webhook_url=settings.WEBHOOK_URL,
        currency=settings.PAYMENT_CURRENCY,
        resource_prefix=settings.RESOURCE_ID_PREFIX,
    )


def get_admin_service(
    store: RegistrationStore = Depends(get_registration_store),
) -> AdminQueryService:
    return AdminQueryService(store)
