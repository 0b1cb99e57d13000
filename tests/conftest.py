# tests/conftest.py
import os

# app.main builds a module-level app from the environment on import.
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.payment_client import StaticPaymentProcessor
from app.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.sqlite'}",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        PAYMENT_LATENCY_SECONDS=0,
        ENVIRONMENT="test",
        _env_file=None,
    )


@pytest.fixture
def payment():
    return StaticPaymentProcessor(succeed=True)


@pytest.fixture
def app(settings, payment):
    return create_app(settings=settings, payment_processor=payment)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(client, app):
    with app.state.db.session() as s:
        yield s


@pytest.fixture
def signup(client):
    def _signup(email="jane@example.com", password="secret123", name="Jane"):
        return client.post(
            "/api/auth/signup",
            json={"email": email, "password": password, "name": name},
        )

    return _signup


@pytest.fixture
def user(signup):
    """Signed-up user: {"id", "email", "name", "token"}."""
    body = signup().json()["data"]
    return {**body["user"], "token": body["token"]}


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user['token']}"}


@pytest.fixture
def product_id(client):
    """Look up a seeded product id by name."""

    def _product_id(name: str) -> int:
        products = client.get("/api/products").json()["data"]
        return next(p["id"] for p in products if p["name"] == name)

    return _product_id
