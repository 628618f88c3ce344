"""
Payment Gateway Client — creates payment intents on the Centiiv API.

`PaymentGateway` is the interface the registration service depends on;
`CentiivGateway` is the HTTPS implementation. Every transport or protocol
failure surfaces as `GatewayError`.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import httpx

from app.errors import GatewayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentRequest:
    amount: Decimal
    name: str
    email: str
    currency: str
    note: str
    callback_url: str
    webhook_url: str
    metadata: dict = field(default_factory=dict)

    def to_payload(self) -> dict:
        amount = self.amount
        return {
            "amount": int(amount) if amount == amount.to_integral_value() else float(amount),
            "name": self.name,
            "email": self.email,
            "currency": self.currency,
            "note": self.note,
            "callback_url": self.callback_url,
            "webhook_url": self.webhook_url,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class PaymentIntent:
    """Gateway-side payment: its identifier and the hosted checkout link."""

    id: str
    link: str


class PaymentGateway(ABC):
    @abstractmethod
    def create_payment(self, request: PaymentRequest) -> PaymentIntent:
        """Create a payment intent. Raises GatewayError on any failure."""

    @property
    def is_configured(self) -> bool:
        return True


class CentiivGateway(PaymentGateway):
    """Centiiv payments API over HTTPS."""

    PAYMENTS_PATH = "/api/v1/payments"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") if base_url else ""
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url and self._api_key)

    def create_payment(self, request: PaymentRequest) -> PaymentIntent:
        if not self.is_configured:
            raise GatewayError("Centiiv gateway is not configured (CENTIIV_BASE_URL / CENTIIV_API_KEY)")

        url = f"{self._base_url}{self.PAYMENTS_PATH}"
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            if self._client is not None:
                response = self._client.post(url, json=request.to_payload(), headers=headers, timeout=self._timeout)
            else:
                response = httpx.post(url, json=request.to_payload(), headers=headers, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Centiiv returned HTTP %s while creating payment: %s",
                exc.response.status_code,
                exc.response.text,
            )
            raise GatewayError(f"Centiiv returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.warning("Failed to reach Centiiv: %s", exc)
            raise GatewayError(f"Failed to reach Centiiv: {exc}") from exc
        except ValueError as exc:
            raise GatewayError("Centiiv returned a non-JSON response") from exc

        return self._parse_intent(body)

    @staticmethod
    def _parse_intent(body) -> PaymentIntent:
        if not isinstance(body, dict) or body.get("success") is not True:
            message = body.get("message") if isinstance(body, dict) else None
            raise GatewayError(f"Centiiv API error: {message or 'no success indicator'}")

        data = body.get("data") or {}
        payment_id = data.get("id") if isinstance(data, dict) else None
        link = data.get("link") if isinstance(data, dict) else None
        if not payment_id or not link:
            raise GatewayError("Centiiv response is missing data.id or data.link")

        return PaymentIntent(id=str(payment_id), link=str(link))


__all__ = ["PaymentRequest", "PaymentIntent", "PaymentGateway", "CentiivGateway"]
