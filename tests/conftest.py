"""Shared fixtures: an in-memory SQLite database and a TestClient bound to it."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_PASSWORD"] = "correct-horse-battery"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from imei_registry.db.db import get_session
from imei_registry.main import app

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]
VALID_IMEI = "490154203237518"
OTHER_VALID_IMEI = "356938035643809"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="admin_client")
def admin_client_fixture(client: TestClient):
    response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
