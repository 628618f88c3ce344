"""
Registration Payment Relay — FastAPI Application Entry Point

Aggregates all routers, configures middleware and error handling,
and initializes the database on startup.
"""
import logging
import time
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.config import get_settings
from app.database import SessionLocal, init_db
from app.dependencies import get_payment_gateway
from app.errors import register_exception_handlers
from app.routes import payment_router, webhook_router, admin_router
from app.schemas.schemas import HealthResponse
from app.services.gateway_client import PaymentGateway
from app.utils.log_setup import configure_logging

settings = get_settings()
logger = logging.getLogger("app")

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Relays programme registrations to the Centiiv payment gateway, records them "
        "as pending, and reconciles them from Centiiv payment webhooks."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Initialize logging and database tables, then log boot info."""
    configure_logging(settings)
    init_db()

    logger.info(
        "\n%s\n  %s v%s\n  TIME: %s\n  GATEWAY KEY: %s\n  DATABASE: %s\n  DEBUG: %s\n%s",
        "=" * 60,
        settings.APP_NAME,
        settings.APP_VERSION,
        datetime.now().isoformat(),
        "[OK] Loaded" if settings.CENTIIV_API_KEY else "[!] Missing",
        settings.DATABASE_URL,
        settings.DEBUG,
        "=" * 60,
    )


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API and webhook request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith(("/api", "/webhook")):
        logger.info("-> %s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


register_exception_handlers(app)

# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(payment_router)
app.include_router(webhook_router)
app.include_router(admin_router)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def deep_health(gateway: PaymentGateway = Depends(get_payment_gateway)):
    """Health check including database connectivity and gateway configuration."""
    db_ok = False
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except Exception:
        logger.warning("Health check: database unreachable", exc_info=True)
    finally:
        db.close()

    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        database="connected" if db_ok else "disconnected",
        gateway="configured" if gateway.is_configured else "unconfigured",
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
        version=settings.APP_VERSION,
    )
