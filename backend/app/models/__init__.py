from app.models.registration import Registration, RegistrationStatus

__all__ = ["Registration", "RegistrationStatus"]
