# tests/conftest.py
import os

# Settings are read once at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from azure_blob import StoredObject
from database import get_session
from firebase_auth import FederatedIdentity
from main import create_app
from models import Base
from utils.errors import Unauthenticated, UpstreamFailure


class FakeVerifier:
    """Maps known ID tokens to identities; anything else is rejected."""

    def __init__(self):
        self.identities = {}

    def verify(self, id_token: str) -> FederatedIdentity:
        if id_token not in self.identities:
            raise Unauthenticated("Invalid or expired Firebase token")
        return self.identities[id_token]


class FakeObjectStore:
    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.uploads = 0
        # Raise on the upload with this 1-based index
        self.fail_on = None

    def upload(self, data, filename, folder, content_type=None) -> StoredObject:
        self.uploads += 1
        if self.fail_on == self.uploads:
            raise UpstreamFailure("File upload failed")
        public_id = f"{folder}/{self.uploads}-{filename}"
        self.objects[public_id] = data.read()
        return StoredObject(url=f"https://blob.test/{public_id}", public_id=public_id)

    def delete(self, public_id: str) -> None:
        # Missing objects count as deleted
        self.objects.pop(public_id, None)
        self.deleted.append(public_id)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def store():
    return FakeObjectStore()


@pytest.fixture
def client(session_factory, verifier, store):
    app = create_app(identity_verifier=verifier, object_store=store)

    def _session_override():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = _session_override
    return TestClient(app)


def register(client, name, email, roles, password="secret123"):
    r = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "roles": roles},
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    return {
        "id": data["user"]["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


PROPERTY_BODY = {
    "title": "Sunny 2BHK near the park",
    "address": {
        "society_name": "Green Meadows",
        "street": "12 MG Road",
        "city": "Pune",
        "state": "MH",
        "pincode": "411001",
    },
    "specs": {
        "bhk": "2BHK",
        "bathrooms": 2,
        "furnishing_status": "semi_furnished",
        "size_sq_ft": 950.0,
    },
    "amenities": ["lift", "parking"],
    "expected_rent": 20000,
    "expected_deposit": 60000,
}


@pytest.fixture
def tenant(client):
    return register(client, "Asha Tenant", "asha@example.com", ["tenant"])


@pytest.fixture
def landlord(client):
    return register(client, "Bala Landlord", "bala@example.com", ["landlord"])


@pytest.fixture
def outsider(client):
    return register(client, "Chitra Outsider", "chitra@example.com", ["landlord", "tenant"])


@pytest.fixture
def property_id(client, landlord):
    r = client.post("/api/properties", json=PROPERTY_BODY, headers=landlord["headers"])
    assert r.status_code == 201, r.text
    return r.json()["data"]["id"]


@pytest.fixture
def agreement(client, landlord, tenant, property_id):
    r = client.post(
        "/api/agreements",
        json={
            "property_id": property_id,
            "tenant_id": tenant["id"],
            "start_date": "2024-01-01",
            "end_date": "2024-12-01",
            "rent_amount": 20000,
            "security_deposit": 60000,
        },
        headers=landlord["headers"],
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def active_agreement(client, landlord, tenant, agreement):
    client.post(f"/api/agreements/{agreement['id']}/sign", json={"role": "landlord"}, headers=landlord["headers"])
    r = client.post(f"/api/agreements/{agreement['id']}/sign", json={"role": "tenant"}, headers=tenant["headers"])
    assert r.json()["data"]["status"] == "active"
    return r.json()["data"]
