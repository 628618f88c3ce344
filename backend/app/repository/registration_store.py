"""
Registration Store — persistence boundary for registration records.

`RegistrationStore` is the contract the services depend on; the SQLAlchemy
implementation translates driver errors into `PersistenceError` so nothing
above this layer needs to know about the database.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import PersistenceError
from app.models.registration import Registration, RegistrationStatus


class RegistrationStore(ABC):
    """Abstract record store keyed by the gateway payment identifier."""

    @abstractmethod
    def insert(self, registration: Registration) -> Registration:
        """Persist a new record. Duplicate payment ids must fail."""

    @abstractmethod
    def get(self, payment_id: str) -> Optional[Registration]:
        """Return the record for `payment_id`, or None."""

    @abstractmethod
    def settle(self, payment_id: str, status: RegistrationStatus, paid_at: datetime) -> bool:
        """Move a pending record to `status`.

        Applies only while the stored status is still pending. Returns True when
        a row was changed, False when none matched (unknown id or already settled).
        """

    @abstractmethod
    def list(self, program_type: Optional[str] = None) -> list[Registration]:
        """All records newest first, optionally restricted to one program type."""


class SqlAlchemyRegistrationStore(RegistrationStore):
    def __init__(self, db: Session):
        self.db = db

    def insert(self, registration: Registration) -> Registration:
        try:
            self.db.add(registration)
            self.db.commit()
            self.db.refresh(registration)
            return registration
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Failed to insert registration {registration.payment_id}: {exc}") from exc

    def get(self, payment_id: str) -> Optional[Registration]:
        try:
            return self.db.query(Registration).filter(Registration.payment_id == payment_id).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load registration {payment_id}: {exc}") from exc

    def settle(self, payment_id: str, status: RegistrationStatus, paid_at: datetime) -> bool:
        # Single UPDATE ... WHERE status = 'pending': concurrent deliveries
        # serialize on the row and only the first one matches.
        stmt = (
            update(Registration)
            .where(
                Registration.payment_id == payment_id,
                Registration.status == RegistrationStatus.PENDING.value,
            )
            .values(status=status.value, paid_at=paid_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Failed to update registration {payment_id}: {exc}") from exc
        return result.rowcount > 0

    def list(self, program_type: Optional[str] = None) -> list[Registration]:
        query = self.db.query(Registration)
        if program_type:
            query = query.filter(Registration.program_type == program_type)

        try:
            return query.order_by(Registration.created_at.desc(), Registration.id.desc()).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list registrations: {exc}") from exc


__all__ = ["RegistrationStore", "SqlAlchemyRegistrationStore"]
