"""
Registration Service — payment initiation and webhook reconciliation.

Intake: validate the form, create a payment intent on the gateway, then persist
a pending registration keyed by the gateway's payment id.

Reconciliation: parse the gateway webhook, resolve the payment id, classify the
event into pending/success/failed and move the record out of pending at most
once. Later deliveries for a settled payment never touch status or paid_at.
"""
import enum
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from app.errors import (
    MalformedEventError,
    PersistenceError,
    UnresolvableIdentifierError,
    ValidationError,
)
from app.models.registration import Registration, RegistrationStatus, utcnow
from app.repository.registration_store import RegistrationStore
from app.schemas.schemas import InitiatePaymentRequest
from app.services.gateway_client import PaymentGateway, PaymentRequest
from app.utils.hashing import delivery_id
from app.utils.validators import clean_text, parse_amount, validate_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "location", "program_type")


def normalize_status(event_name) -> RegistrationStatus:
    """Classify a gateway event name by case-insensitive substring.

    "success" anywhere → SUCCESS, else "fail" anywhere → FAILED, else PENDING.
    Loose on purpose: Centiiv does not publish a closed list of event names
    ("PAYMENT_SUCCESS", "payment-failed", ...). Swap this for an exact mapping
    if that ever changes.
    """
    if not isinstance(event_name, str):
        return RegistrationStatus.PENDING

    lowered = event_name.lower()
    if "success" in lowered:
        return RegistrationStatus.SUCCESS
    if "fail" in lowered:
        return RegistrationStatus.FAILED
    return RegistrationStatus.PENDING


def resolve_payment_id(event: dict, resource_prefix: str = "DPL-") -> Optional[str]:
    """data.id, falling back to data.metadata.resourceId minus its prefix."""
    data = event.get("data")
    if not isinstance(data, dict):
        return None

    primary = data.get("id")
    if isinstance(primary, bool):
        primary = None
    if isinstance(primary, int):
        return str(primary)
    if isinstance(primary, str) and primary.strip():
        return primary.strip()

    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        return None

    resource_id = metadata.get("resourceId")
    if not isinstance(resource_id, str):
        return None

    payment_id = resource_id.strip().removeprefix(resource_prefix)
    return payment_id or None


def parse_event(raw_event: bytes) -> dict:
    try:
        event = json.loads(raw_event)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedEventError(f"Webhook body is not valid JSON: {exc}") from exc

    if not isinstance(event, dict):
        raise MalformedEventError("Webhook body is not a JSON object")
    return event


class ReconcileOutcome(str, enum.Enum):
    APPLIED = "applied"
    IGNORED_PENDING = "ignored_pending"
    ALREADY_SETTLED = "already_settled"
    UNKNOWN_PAYMENT = "unknown_payment"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class ReconcileResult:
    """Acknowledgement of a webhook delivery. Always means "respond 200"."""

    payment_id: str
    status: RegistrationStatus
    outcome: ReconcileOutcome
    delivery_id: str


@dataclass(frozen=True)
class InitiateResult:
    payment_url: str
    payment_id: str


class RegistrationService:
    """Orchestrates registration intake and payment reconciliation."""

    def __init__(
        self,
        store: RegistrationStore,
        gateway: PaymentGateway,
        *,
        callback_url: str,
        webhook_url: str,
        currency: str = "NGN",
        resource_prefix: str = "DPL-",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.gateway = gateway
        self.callback_url = callback_url
        self.webhook_url = webhook_url
        self.currency = currency
        self.resource_prefix = resource_prefix
        self.clock = clock

    # ──────────────── Intake ────────────────

    def initiate(self, payload: InitiatePaymentRequest) -> InitiateResult:
        """Create the gateway payment, then persist the pending registration.

        Raises:
            ValidationError: missing/blank fields, bad email, non-positive amount.
            GatewayError: the gateway call failed; nothing was persisted.
            PersistenceError: the insert failed after the gateway succeeded.
        """
        form = self._validate(payload)

        intent = self.gateway.create_payment(
            PaymentRequest(
                amount=form["amount"],
                name=form["name"],
                email=form["email"],
                currency=self.currency,
                note=f"Payment for {form['program_type']}",
                callback_url=self.callback_url,
                webhook_url=self.webhook_url,
                metadata={
                    "phone": form["phone"],
                    "location": form["location"],
                    "programType": form["program_type"],
                },
            )
        )

        registration = Registration(
            name=form["name"],
            email=form["email"],
            phone=form["phone"],
            location=form["location"],
            program_type=form["program_type"],
            amount=form["amount"],
            payment_id=intent.id,
            status=RegistrationStatus.PENDING.value,
            paid_at=None,
            created_at=self.clock(),
        )

        try:
            self.store.insert(registration)
        except PersistenceError:
            # No compensation contract with the gateway: the intent stays open
            # there and has to be cleared by hand.
            logger.error(
                "RECONCILIATION DEBT: gateway payment %s created but not recorded "
                "(email=%s, program_type=%s, amount=%s)",
                intent.id, form["email"], form["program_type"], form["amount"],
            )
            raise

        logger.info("Centiiv payment created: %s (%s)", intent.id, form["program_type"])
        return InitiateResult(payment_url=intent.link, payment_id=intent.id)

    def _validate(self, payload: InitiatePaymentRequest) -> dict:
        form = {field: clean_text(getattr(payload, field)) for field in REQUIRED_FIELDS}

        missing = [field for field, value in form.items() if not value]
        if missing:
            labels = ", ".join("programType" if f == "program_type" else f for f in missing)
            raise ValidationError(f"Missing required fields: {labels}")

        if not validate_email(form["email"]):
            raise ValidationError("email is not a valid email address")

        amount = parse_amount(payload.amount)
        if amount is None:
            raise ValidationError("amount must be a positive number with at most 2 decimal places")

        form["amount"] = amount
        return form

    # ──────────────── Reconciliation ────────────────

    def reconcile(self, raw_event: bytes) -> ReconcileResult:
        """Apply a gateway webhook to its registration.

        Raises MalformedEventError / UnresolvableIdentifierError for payloads the
        gateway should not bother redelivering. Store failures are logged and
        reported as STORE_ERROR instead of raised, so the gateway is still acked.
        """
        delivery = delivery_id(raw_event)
        event = parse_event(raw_event)

        payment_id = resolve_payment_id(event, self.resource_prefix)
        if not payment_id:
            raise UnresolvableIdentifierError(
                f"Delivery {delivery}: no data.id or data.metadata.resourceId"
            )

        status = normalize_status(event.get("event"))

        def result(outcome: ReconcileOutcome) -> ReconcileResult:
            logger.info(
                "Webhook %s: payment=%s event=%r status=%s outcome=%s",
                delivery, payment_id, event.get("event"), status.value, outcome.value,
            )
            return ReconcileResult(payment_id, status, outcome, delivery)

        if not status.is_terminal:
            return result(ReconcileOutcome.IGNORED_PENDING)

        try:
            if self.store.settle(payment_id, status, self.clock()):
                return result(ReconcileOutcome.APPLIED)

            existing = self.store.get(payment_id)
        except PersistenceError as exc:
            logger.error("Webhook %s: store update failed for payment %s: %s", delivery, payment_id, exc)
            return result(ReconcileOutcome.STORE_ERROR)

        if existing is None:
            return result(ReconcileOutcome.UNKNOWN_PAYMENT)
        return result(ReconcileOutcome.ALREADY_SETTLED)


__all__ = [
    "RegistrationService",
    "ReconcileOutcome",
    "ReconcileResult",
    "InitiateResult",
    "normalize_status",
    "resolve_payment_id",
    "parse_event",
]
