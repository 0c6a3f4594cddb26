"""
Pytest configuration.

The app reads its configuration at import time, so the test environment is
set before anything from ``app`` is imported: an in-memory SQLite database,
rate limiting off, no email or Stripe API keys, and a known webhook secret.
"""

import hashlib
import hmac
import itertools
import os
import time

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["RESEND_API_KEY"] = ""
os.environ["STRIPE_SECRET_KEY"] = ""
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test"
os.environ["FRONTEND_URL"] = "https://app.example.com"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import User  # noqa: E402
from app.security_utils import create_access_token, hash_password  # noqa: E402

WEBHOOK_SECRET = "whsec_test"
TEST_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    """Factory for tenants; ``subscription_status="active"`` makes a Pro tenant"""
    counter = itertools.count(1)

    def _make(subscription_status="free", role="owner", **kwargs):
        n = next(counter)
        user = User(
            email=kwargs.pop("email", f"owner{n}@example.com"),
            password_hash=hash_password(TEST_PASSWORD),
            name=kwargs.pop("name", f"Owner {n}"),
            business_name=kwargs.pop("business_name", f"Sparkle Clean {n}"),
            subscription_status=subscription_status,
            role=role,
            **kwargs,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def create_quote(client, auth_headers):
    """POST a quote for a user and return the created quote JSON"""

    def _create(user, **fields):
        payload = {
            "clientName": "Jane Doe",
            "clientEmail": "jane@example.com",
            "serviceType": "standard",
            "basePrice": "150.00",
            "totalPrice": "150.00",
        }
        payload.update(fields)
        response = client.post("/api/quotes", json=payload, headers=auth_headers(user))
        assert response.status_code == 201, response.text
        return response.json()["quote"]

    return _create


@pytest.fixture
def sign_stripe_payload():
    """Build a Stripe-Signature header for a raw payload"""

    def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp=None) -> str:
        timestamp = int(time.time()) if timestamp is None else timestamp
        signed = f"{timestamp}.{payload}".encode("utf-8")
        signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={signature}"

    return _sign
