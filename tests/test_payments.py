# tests/test_payments.py
from models import Agreement


def _payment_body(agreement_id, **overrides):
    body = {"agreement_id": agreement_id, "amount": 20000, "type": "rent", "due_date": "2024-02-05"}
    body.update(overrides)
    return body


def test_tenant_creates_payment_to_landlord(client, landlord, tenant, active_agreement):
    r = client.post("/api/payments", json=_payment_body(active_agreement["id"]), headers=tenant["headers"])
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["payer_id"] == tenant["id"]
    assert data["receiver_id"] == landlord["id"]
    assert data["amount"] == 20000
    assert data["status"] == "pending"
    assert data["paid_date"] is None
    assert data["late_fee"] == 0


def test_receiver_in_body_is_ignored(client, landlord, tenant, outsider, active_agreement):
    r = client.post(
        "/api/payments",
        json=_payment_body(active_agreement["id"], receiver_id=outsider["id"], payer_id=outsider["id"]),
        headers=tenant["headers"],
    )
    assert r.status_code == 201
    assert r.json()["data"]["receiver_id"] == landlord["id"]
    assert r.json()["data"]["payer_id"] == tenant["id"]


def test_landlord_cannot_create_payment(client, landlord, active_agreement):
    r = client.post("/api/payments", json=_payment_body(active_agreement["id"]), headers=landlord["headers"])
    assert r.status_code == 403


def test_non_participant_gets_not_found(client, outsider, active_agreement):
    r = client.post("/api/payments", json=_payment_body(active_agreement["id"]), headers=outsider["headers"])
    assert r.status_code == 404
    r = client.post("/api/payments", json=_payment_body(9999), headers=outsider["headers"])
    assert r.status_code == 404


def test_no_payments_on_terminated_agreement(client, db, tenant, active_agreement):
    db.get(Agreement, active_agreement["id"]).status = "terminated"
    db.commit()

    r = client.post("/api/payments", json=_payment_body(active_agreement["id"]), headers=tenant["headers"])
    assert r.status_code == 400


def test_payments_allowed_before_activation(client, tenant, agreement):
    r = client.post("/api/payments", json=_payment_body(agreement["id"], type="deposit"), headers=tenant["headers"])
    assert r.status_code == 201
    assert r.json()["data"]["type"] == "deposit"


def test_amount_must_not_be_negative(client, tenant, active_agreement):
    r = client.post("/api/payments", json=_payment_body(active_agreement["id"], amount=-1), headers=tenant["headers"])
    assert r.status_code == 400


def test_paid_sets_paid_date(client, landlord, tenant, active_agreement):
    payment = client.post(
        "/api/payments", json=_payment_body(active_agreement["id"]), headers=tenant["headers"]
    ).json()["data"]

    r = client.put(
        f"/api/payments/{payment['id']}",
        json={"status": "processing", "gateway_order_id": "order_1"},
        headers=tenant["headers"],
    )
    assert r.json()["data"]["status"] == "processing"
    assert r.json()["data"]["paid_date"] is None
    assert r.json()["data"]["gateway_order_id"] == "order_1"

    r = client.put(
        f"/api/payments/{payment['id']}",
        json={"status": "paid", "payment_method": "upi", "transaction_id": "UPI-1"},
        headers=landlord["headers"],
    )
    data = r.json()["data"]
    assert data["status"] == "paid"
    assert data["paid_date"] is not None
    assert data["payment_method"] == "upi"
    assert data["transaction_id"] == "UPI-1"
    assert data["gateway_order_id"] == "order_1"


def test_payment_visibility(client, landlord, tenant, outsider, active_agreement):
    payment = client.post(
        "/api/payments", json=_payment_body(active_agreement["id"]), headers=tenant["headers"]
    ).json()["data"]

    for user in (landlord, tenant):
        assert client.get(f"/api/payments/{payment['id']}", headers=user["headers"]).status_code == 200
        r = client.get("/api/payments", headers=user["headers"])
        assert [p["id"] for p in r.json()["data"]] == [payment["id"]]

    assert client.get(f"/api/payments/{payment['id']}", headers=outsider["headers"]).status_code == 404
    r = client.put(f"/api/payments/{payment['id']}", json={"status": "paid"}, headers=outsider["headers"])
    assert r.status_code == 404
    assert client.get("/api/payments", headers=outsider["headers"]).json()["data"] == []


def test_list_filters(client, tenant, active_agreement):
    rent = client.post(
        "/api/payments", json=_payment_body(active_agreement["id"]), headers=tenant["headers"]
    ).json()["data"]
    deposit = client.post(
        "/api/payments",
        json=_payment_body(active_agreement["id"], type="deposit", amount=60000, due_date="2024-01-01"),
        headers=tenant["headers"],
    ).json()["data"]
    client.put(f"/api/payments/{deposit['id']}", json={"status": "paid"}, headers=tenant["headers"])

    r = client.get("/api/payments", params={"type": "rent"}, headers=tenant["headers"])
    assert [p["id"] for p in r.json()["data"]] == [rent["id"]]

    r = client.get("/api/payments", params={"status": "paid"}, headers=tenant["headers"])
    assert [p["id"] for p in r.json()["data"]] == [deposit["id"]]

    # Newest due date first
    r = client.get("/api/payments", params={"agreement_id": active_agreement["id"]}, headers=tenant["headers"])
    assert [p["id"] for p in r.json()["data"]] == [rent["id"], deposit["id"]]

    assert client.get("/api/payments", params={"payer": "me"}, headers=tenant["headers"]).status_code == 400
