"""
Shared fixtures: an in-memory database, an API client and tenant tokens
"""

import os

# Must be set before the application modules read their configuration
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_laundry.db")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.auth_handler import auth_handler
from app.database import Base, get_db
from app.models.customer import Customer
from app.models.user import User
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def session_factory():
    """Opens additional sessions on the shared test database"""
    return TestingSessionLocal

@pytest.fixture
def client():
    return TestClient(app)

def make_auth_headers(subject: str, **claims) -> dict:
    token = auth_handler.create_access_token({"sub": subject, **claims})
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def auth_headers():
    return make_auth_headers("tenant-a", email="owner@laundry.test", first_name="Ada")

@pytest.fixture
def other_auth_headers():
    return make_auth_headers("tenant-b", email="rival@laundry.test")

@pytest.fixture
def tenant(db_session):
    user = User(external_id="tenant-a", email="owner@laundry.test", first_name="Ada")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def other_tenant(db_session):
    user = User(external_id="tenant-b", email="rival@laundry.test")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def customer(db_session, tenant):
    record = Customer(name="John Doe", phone="08031234567", user_id=tenant.id)
    db_session.add(record)
    db_session.commit()
    db_session.refresh(record)
    return record

@pytest.fixture
def due_date():
    return datetime.utcnow() + timedelta(days=3)

@pytest.fixture
def token_headers():
    """Factory for bearer headers of an arbitrary identity provider subject"""
    return make_auth_headers
