import os

# Must be set before storerating.core.config is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-at-least-32-bytes"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["BACKEND_CORS_ORIGINS"] = ""

import pytest
from fastapi.testclient import TestClient

from storerating.core.database import SessionLocal, engine
from storerating.core.security import hash_password
from storerating.main import app
from storerating.models import Base, Store


ADMIN_EMAIL = "admin@storerating.com"
ADMIN_PASSWORD = "Admin123!"
DEFAULT_PASSWORD = "Abcdef1!"


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # Entering the context runs startup, which creates the bootstrap admin
    with TestClient(app) as c:
        yield c


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email, name="Jonathan Q. Publicsmith II", password=DEFAULT_PASSWORD, address="1 A St"):
    r = client.post("/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "address": address,
    })
    assert r.status_code == 201, r.text
    return r.json()


def login(client, email, password=DEFAULT_PASSWORD):
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture
def admin_token(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def make_store(db, email, name="Corner Hardware and Supplies", address="42 Market Street", password=DEFAULT_PASSWORD):
    """Insert a store row directly, as if its owner had been promoted."""
    store = Store(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        address=address,
        role="store_owner",
    )
    db.add(store)
    db.commit()
    db.refresh(store)
    return store
