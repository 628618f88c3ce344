import os
import tempfile
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Settings are cached on first use, so the test environment must be in place
# before anything under `app` is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "registration-relay-test-logs"))
os.environ.setdefault("CENTIIV_BASE_URL", "https://gateway.test")
os.environ.setdefault("CENTIIV_API_KEY", "test-key")
os.environ.setdefault("INITIATE_RATE_LIMIT", "3")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, init_db
from app.dependencies import get_payment_gateway
from app.errors import GatewayError
from app.main import app
from app.repository.registration_store import SqlAlchemyRegistrationStore
from app.services.gateway_client import PaymentGateway, PaymentIntent, PaymentRequest
from app.services.registration_service import RegistrationService
from app.utils.rate_limiter import reset_rate_limits

CALLBACK_URL = "https://frontend.test/payment-status"
WEBHOOK_URL = "https://api.test/webhook/payment"


class FakeGateway(PaymentGateway):
    """Configurable in-process gateway that records every request."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Centiiv API error"
        self.next_ids: list[str] = []
        self.calls: list[PaymentRequest] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Centiiv API error") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def queue_ids(self, *payment_ids: str) -> None:
        self.next_ids.extend(payment_ids)

    def create_payment(self, request: PaymentRequest) -> PaymentIntent:
        self.calls.append(request)
        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        payment_id = self.next_ids.pop(0) if self.next_ids else f"pay_{uuid4().hex[:10]}"
        return PaymentIntent(id=payment_id, link=f"https://pay.test/{payment_id}")


class FakeClock:
    """Deterministic clock: every call advances one second."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return SqlAlchemyRegistrationStore(db_session)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store, gateway, clock):
    return RegistrationService(
        store,
        gateway,
        callback_url=CALLBACK_URL,
        webhook_url=WEBHOOK_URL,
        clock=clock,
    )


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registration_form():
    return {
        "name": "Ada",
        "email": "a@x.com",
        "phone": "555",
        "location": "Lagos",
        "programType": "cohort-3",
        "amount": 5000,
    }
