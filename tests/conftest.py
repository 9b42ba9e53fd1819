import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-the-expense-api-suite")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings, get_settings
from database import Base, get_db
from main import app

TEST_PASSWORD = "password123"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        environment="test",
        database_url="sqlite://",
        jwt_secret="test-secret-key-for-the-expense-api-suite",
        jwt_expiration=3600,
        bcrypt_rounds=4,
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, test_settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, name="Test User", email="test@example.com", password=TEST_PASSWORD):
    return client.post(
        "/auth/register", json={"name": name, "email": email, "password": password}
    )


def login(client, email="test@example.com", password=TEST_PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


def auth_headers_for(client, email="test@example.com", name="Test User"):
    register(client, name=name, email=email)
    token = login(client, email=email).json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    return auth_headers_for(client)
