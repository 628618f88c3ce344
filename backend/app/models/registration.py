"""
Registration Model — One row per programme registration and its payment.
Maps to the 'registrations' table; payment_id correlates with the gateway.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, Numeric

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not RegistrationStatus.PENDING


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    name = Column(String(120), nullable=False)
    email = Column(String(254), nullable=False, index=True)  # contact key, not unique
    phone = Column(String(32), nullable=False)
    location = Column(String(120), nullable=False)
    program_type = Column(String(64), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)          # NGN, major units

    payment_id = Column(String(64), nullable=False, unique=True, index=True)
    status = Column(String(16), nullable=False, default=RegistrationStatus.PENDING.value)
    # Statuses: pending → success | failed (terminal)

    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"Registration(payment_id={self.payment_id!r}, "
            f"program_type={self.program_type!r}, status={self.status!r})"
        )
