from app.services.gateway_client import PaymentGateway, CentiivGateway, PaymentRequest, PaymentIntent
from app.services.registration_service import RegistrationService, ReconcileOutcome, normalize_status
from app.services.admin_service import AdminQueryService

__all__ = [
    "PaymentGateway", "CentiivGateway", "PaymentRequest", "PaymentIntent",
    "RegistrationService", "ReconcileOutcome", "normalize_status",
    "AdminQueryService",
]
