"""
Admin Query Service — read-only listing of registrations for the dashboard.
"""
from typing import Optional

from app.errors import PersistenceError, QueryError
from app.models.registration import Registration
from app.repository.registration_store import RegistrationStore


class AdminQueryService:
    def __init__(self, store: RegistrationStore):
        self.store = store

    def list(self, program_type: Optional[str] = None) -> list[Registration]:
        """Newest registrations first, optionally for a single program type."""
        try:
            return self.store.list(program_type=program_type or None)
        except PersistenceError as exc:
            raise QueryError(exc.detail) from exc
