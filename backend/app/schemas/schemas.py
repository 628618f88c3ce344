"""
Pydantic Schemas — Request & Response models for API validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Numeric columns go out as JSON numbers, not strings
JsonAmount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ──────────────── Payment Initiation ────────────────

class InitiatePaymentRequest(BaseModel):
    """Registration form as posted by the browser.
    Field rules (non-blank, positive amount) are enforced by RegistrationService.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    program_type: str = Field("", alias="programType")
    amount: Optional[Union[Decimal, str]] = None


class InitiatePaymentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    payment_url: str = Field(..., alias="paymentUrl")


# ──────────────── Webhook ────────────────

class WebhookAck(BaseModel):
    success: bool = True


# ──────────────── Admin ────────────────

class RegistrationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    location: str
    program_type: str
    amount: JsonAmount
    payment_id: str
    status: str
    paid_at: Optional[datetime] = None
    created_at: datetime


class RegistrationListResponse(BaseModel):
    success: bool = True
    registrations: List[RegistrationOut]


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    database: str
    gateway: str
    uptime_seconds: float
    version: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
