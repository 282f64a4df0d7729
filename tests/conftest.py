import os

# must be set before priorityparcel.core.config is imported
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ["DEMO_ADMIN_PASSWORD"] = "admin123"
os.environ["DEMO_KLANT_PASSWORD"] = "klant123"

import pytest
from fastapi.testclient import TestClient

from priorityparcel.db.fixtures import seed_demo_data
from priorityparcel.main import create_app
from priorityparcel.repositories.memory import MemStorage

ADMIN = {"email": "admin@priorityparcel.nl", "password": "admin123"}
KLANT = {"email": "huso@priorityparcel.nl", "password": "klant123"}


@pytest.fixture
def storage():
    """Fresh, empty in-memory store."""
    return MemStorage()


@pytest.fixture
async def seeded_storage():
    store = MemStorage()
    await seed_demo_data(store)
    return store


@pytest.fixture
def client():
    app = create_app(MemStorage(), seed=True)
    with TestClient(app) as c:
        yield c


def login(client, credentials) -> dict:
    r = client.post("/api/login", json=credentials)
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, ADMIN)["token"])


@pytest.fixture
def klant_headers(client):
    return bearer(login(client, KLANT)["token"])
