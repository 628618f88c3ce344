"""Persistence helpers for registrations."""

from app.repository.registration_store import RegistrationStore, SqlAlchemyRegistrationStore

__all__ = ["RegistrationStore", "SqlAlchemyRegistrationStore"]
