# tests/test_scenarios.py
from datetime import datetime

from conftest import PROPERTY_BODY, register


def test_signing_workflow_end_to_end(client):
    a = register(client, "Asha Tenant", "asha@example.com", ["tenant"])
    b = register(client, "Bala Landlord", "bala@example.com", ["landlord"])

    prop = client.post("/api/properties", json=PROPERTY_BODY, headers=b["headers"]).json()["data"]
    r = client.post(
        "/api/agreements",
        json={
            "property_id": prop["id"],
            "tenant_id": a["id"],
            "start_date": "2024-01-01",
            "end_date": "2024-12-01",
            "rent_amount": 20000,
            "security_deposit": 60000,
        },
        headers=b["headers"],
    )
    ag = r.json()["data"]
    assert ag["status"] == "draft"
    assert ag["landlord_id"] == b["id"]

    r = client.post(f"/api/agreements/{ag['id']}/sign", json={"role": "landlord"}, headers=b["headers"])
    assert r.json()["data"]["status"] == "pending_signature"

    r = client.post(f"/api/agreements/{ag['id']}/sign", json={"role": "tenant"}, headers=a["headers"])
    assert r.json()["data"]["status"] == "active"

    r = client.put(f"/api/agreements/{ag['id']}", json={"rent_amount": 1000}, headers=a["headers"])
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_payment_end_to_end(client, monkeypatch, landlord, tenant, outsider, active_agreement):
    import services.payment_service as payment_service

    r = client.post(
        "/api/payments",
        json={
            "agreement_id": active_agreement["id"],
            "amount": 20000,
            "type": "rent",
            "due_date": "2024-02-05",
            "receiver_id": outsider["id"],
        },
        headers=tenant["headers"],
    )
    payment = r.json()["data"]
    assert payment["receiver_id"] == landlord["id"]
    assert payment["paid_date"] is None

    paid_at = datetime(2024, 2, 4, 9, 15, 0)
    monkeypatch.setattr(payment_service, "utcnow", lambda: paid_at)
    r = client.put(f"/api/payments/{payment['id']}", json={"status": "paid"}, headers=tenant["headers"])
    assert r.json()["data"]["status"] == "paid"
    assert r.json()["data"]["paid_date"].startswith("2024-02-04T09:15:00")
