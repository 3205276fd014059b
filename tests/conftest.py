# tests/conftest.py
"""
Pytest configuration and fixtures.

Every test gets its own SQLite file under ``tmp_path`` and a credential
service with a test secret and a low PBKDF2 work factor.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from nonprofit_api.app.core import security  # noqa: E402
from nonprofit_api.app.core.config import settings  # noqa: E402
from nonprofit_api.app.core.db import init_db  # noqa: E402
from nonprofit_api.app.core.security import CredentialConfig  # noqa: E402
from nonprofit_api.app.core.storage import Storage  # noqa: E402

TEST_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def database(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "nonprofit_test.db"))
    monkeypatch.setattr(
        security.credentials,
        "config",
        CredentialConfig(secret_key="test-secret", hash_iterations=1_000),
    )
    init_db()
    yield tmp_path / "nonprofit_test.db"


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from nonprofit_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user():
    """Create a user directly in storage; returns ``(user_row, token)``."""
    counter = {"n": 0}

    def _make(role: str = "donor", email: str | None = None, name: str = "Test User"):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        row = Storage.create_user(name, email, security.credentials.hash_password(TEST_PASSWORD), role)
        return row, security.credentials.issue_token(row["id"])

    return _make


@pytest.fixture
def make_event():
    def _make(capacity: int = 10, **overrides):
        fields = {
            "title": "Food Distribution Drive",
            "description": "Monthly food distribution.",
            "date": "2025-12-25T10:00:00",
            "location": "Hope Foundation Center",
            "capacity": capacity,
            "status": "upcoming",
        }
        fields.update(overrides)
        return Storage.create_event(fields)

    return _make
