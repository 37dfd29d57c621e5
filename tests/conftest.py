import os

# must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEFAULT_DATA"] = "1"

import pytest
from fastapi.testclient import TestClient

from app.core.rate_limit import limiter
from app.db.init import init_db
from app.db.session import Base, SessionLocal, engine
from app.main import app

FARMER = {"email": "farmer@example.com", "password": "password123"}
ADMIN = {"email": "admin@agripredict.com", "password": "admin123"}


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    init_db(seed=True)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session):
    limiter.reset()
    yield TestClient(app)
    limiter.reset()


def login(client, credentials):
    response = client.post("/api/login", json=credentials)
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def farmer_headers(client):
    return {"Authorization": f"Bearer {login(client, FARMER)}"}


@pytest.fixture
def admin_headers(client):
    return {"Authorization": f"Bearer {login(client, ADMIN)}"}
