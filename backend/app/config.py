"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "Registration Payment Relay"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'registrations.db'}"

    # --- Payment Gateway (Centiiv) ---
    CENTIIV_BASE_URL: str = "https://api.centiiv.com"
    CENTIIV_API_KEY: str = ""
    GATEWAY_TIMEOUT_SECONDS: float = 15.0
    PAYMENT_CURRENCY: str = "NGN"
    CALLBACK_URL: str = "https://opolo-global.vercel.app/payment-status"
    WEBHOOK_URL: str = "https://opolo-api.vercel.app/webhook/payment"
    RESOURCE_ID_PREFIX: str = "DPL-"

    # --- Security ---
    CORS_ORIGINS: list[str] = ["https://opolo-global.vercel.app"]
    INITIATE_RATE_LIMIT: int = 10
    INITIATE_RATE_WINDOW: int = 60

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
