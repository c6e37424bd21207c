"""Shared fixtures for API tests: a fresh schema per test and helpers to create users and content."""

import unittest

from fastapi.testclient import TestClient

from app.core.database import SessionLocal, engine
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import Base, User

DEFAULT_PASSWORD = "Abcd1234"


def reset_database() -> None:
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)


def create_user(
    email: str = "a@b.com",
    name: str = "Alice Admin",
    role: str = "admin",
    password: str | None = DEFAULT_PASSWORD,
    is_active: bool = True,
) -> User:
    with SessionLocal() as db:
        user = User(
            email=email,
            name=name,
            role=role,
            password_hash=hash_password(password) if password else None,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user


def bearer(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.email, user.name, user.role)
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Runs against the real app over https so Secure cookies round-trip."""

    def setUp(self) -> None:
        reset_database()
        self.client = TestClient(app, base_url="https://testserver")

    def tearDown(self) -> None:
        self.client.close()

    def error_code(self, response) -> str:
        body = response.json()
        self.assertFalse(body["success"])
        return body["error"]["code"]

    def data(self, response) -> dict:
        body = response.json()
        self.assertTrue(body["success"], body)
        self.assertNotIn("error", body)
        return body["data"]
