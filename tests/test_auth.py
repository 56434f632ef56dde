# tests/test_auth.py
from fastapi.testclient import TestClient
from jose import jwt

from config import get_settings
from database import get_session
from firebase_auth import FederatedIdentity
from main import create_app
from models import User

from conftest import register


def test_register_returns_token_and_user_without_hash(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Asha Tenant", "email": "Asha@Example.com", "password": "secret123", "roles": ["tenant"]},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == "asha@example.com"
    assert user["roles"] == ["tenant"]
    assert user["checkpoint"] == "onboarding"
    assert "password_hash" not in user
    assert "password" not in user

    settings = get_settings()
    claims = jwt.decode(body["data"]["token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert claims["user_id"] == user["id"]
    assert claims["email"] == "asha@example.com"
    assert claims["roles"] == ["tenant"]
    assert claims["exp"] > claims["iat"]


def test_register_stores_a_hash_not_the_password(client, db):
    register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    user = db.query(User).filter(User.email == "asha@example.com").one()
    assert user.password_hash
    assert user.password_hash != "secret123"


def test_register_duplicate_email_conflicts(client):
    register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    r = client.post(
        "/api/auth/register",
        json={"name": "Asha Again", "email": "ASHA@example.com", "password": "another1", "roles": []},
    )
    assert r.status_code == 409
    assert r.json()["error"]["message"] == "User already exists with this email"


def test_register_validates_input(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "not-an-email", "password": "123", "roles": ["owner"]},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["message"] == "Validation error"
    fields = {d["field"] for d in body["error"]["details"]}
    assert {"name", "email", "password"} <= fields
    assert any(f.startswith("roles") for f in fields)


def test_login_succeeds_with_correct_password(client):
    register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    r = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["data"]["token"]
    assert r.json()["data"]["user"]["email"] == "asha@example.com"


def test_login_failures_share_one_message(client):
    register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    wrong_password = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["message"] == "Invalid email or password"


def test_me_requires_a_token(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "No token provided"


def test_me_rejects_garbage_and_foreign_tokens(client):
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

    forged = jwt.encode({"user_id": 1, "email": "x@example.com", "roles": []}, "other-secret", algorithm="HS256")
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_token_for_removed_user_is_rejected(client, db):
    asha = register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    db.query(User).filter(User.id == asha["id"]).delete()
    db.commit()

    r = client.get("/api/auth/me", headers=asha["headers"])
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "User not found"


def test_me_returns_current_user(client, tenant):
    r = client.get("/api/auth/me", headers=tenant["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["id"] == tenant["id"]


def test_federated_sign_in_creates_user(client, verifier):
    verifier.identities["tok-1"] = FederatedIdentity(
        subject_id="fb-123", email="Dev@Example.com", name="Dev Kumar", picture="https://img.test/dev.png"
    )
    r = client.post("/api/auth/firebase", json={"id_token": "tok-1"})
    assert r.status_code == 200
    user = r.json()["data"]["user"]
    assert user["email"] == "dev@example.com"
    assert user["name"] == "Dev Kumar"
    assert user["image"] == "https://img.test/dev.png"
    assert user["roles"] == []

    # Second sign-in finds the same account
    r = client.post("/api/auth/firebase", json={"id_token": "tok-1"})
    assert r.json()["data"]["user"]["id"] == user["id"]


def test_federated_sign_in_links_existing_account(client, db, verifier):
    asha = register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    verifier.identities["tok-2"] = FederatedIdentity(
        subject_id="fb-asha", email="asha@example.com", name="Asha R", picture="https://img.test/asha.png"
    )

    r = client.post("/api/auth/firebase", json={"id_token": "tok-2"})
    assert r.status_code == 200
    user = r.json()["data"]["user"]
    assert user["id"] == asha["id"]
    assert user["name"] == "Asha R"
    assert user["image"] == "https://img.test/asha.png"
    assert user["roles"] == ["tenant"]

    stored = db.get(User, asha["id"])
    assert stored.firebase_uid == "fb-asha"
    assert stored.password_hash

    # Local login still works after linking
    r = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    assert r.status_code == 200


def test_federated_sign_in_without_email_is_rejected(client, verifier):
    verifier.identities["tok-3"] = FederatedIdentity(subject_id="fb-anon", email=None)
    r = client.post("/api/auth/firebase", json={"id_token": "tok-3"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Email not found in Firebase token"


def test_federated_sign_in_with_bad_token(client):
    r = client.post("/api/auth/firebase", json={"id_token": "unknown"})
    assert r.status_code == 401


def test_federated_sign_in_when_not_configured(session_factory):
    app = create_app()
    app.state.identity_verifier = None

    def _session_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _session_override
    r = TestClient(app).post("/api/auth/firebase", json={"id_token": "anything"})
    assert r.status_code == 502
    assert r.json()["success"] is False


def test_federated_only_account_cannot_change_password(client, verifier):
    verifier.identities["tok-4"] = FederatedIdentity(subject_id="fb-dev", email="dev@example.com", name="Dev")
    token = client.post("/api/auth/firebase", json={"id_token": "tok-4"}).json()["data"]["token"]

    r = client.put(
        "/api/auth/change-password",
        json={"current_password": "whatever", "new_password": "newpass1"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 400


def test_change_password(client, tenant):
    r = client.put(
        "/api/auth/change-password",
        json={"current_password": "wrong-one", "new_password": "newpass1"},
        headers=tenant["headers"],
    )
    assert r.status_code == 400

    r = client.put(
        "/api/auth/change-password",
        json={"current_password": "secret123", "new_password": "newpass1"},
        headers=tenant["headers"],
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Password changed successfully"}

    assert client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"}).status_code == 401
    assert client.post("/api/auth/login", json={"email": "asha@example.com", "password": "newpass1"}).status_code == 200


def test_profile_update_merges_sub_profiles(client, tenant):
    r = client.put(
        "/api/auth/profile",
        json={"tenant_profile": {"phone": "9876543210", "city": "Pune"}},
        headers=tenant["headers"],
    )
    assert r.status_code == 200

    r = client.put(
        "/api/auth/profile",
        json={
            "checkpoint": "complete",
            "roles": ["tenant", "landlord", "tenant"],
            "tenant_profile": {"current_employer": "Acme"},
        },
        headers=tenant["headers"],
    )
    user = r.json()["data"]
    assert user["checkpoint"] == "complete"
    assert user["roles"] == ["tenant", "landlord"]
    assert user["tenant_profile"]["phone"] == "9876543210"
    assert user["tenant_profile"]["city"] == "Pune"
    assert user["tenant_profile"]["current_employer"] == "Acme"
    assert user["landlord_profile"] is None


def test_profile_update_rejects_unknown_role(client, tenant):
    r = client.put("/api/auth/profile", json={"roles": ["superuser"]}, headers=tenant["headers"])
    assert r.status_code == 400
