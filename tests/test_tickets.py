# tests/test_tickets.py
import pytest


@pytest.fixture
def ticket(client, tenant, landlord, active_agreement):
    r = client.post(
        "/api/tickets",
        json={
            "agreement_id": active_agreement["id"],
            "assigned_to_id": landlord["id"],
            "type": "maintenance",
            "title": "Leaking kitchen tap",
            "description": "The tap has been dripping since Monday.",
            "priority": "high",
        },
        headers=tenant["headers"],
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_new_ticket_is_open(ticket, tenant, landlord):
    assert ticket["status"] == "open"
    assert ticket["author_id"] == tenant["id"]
    assert ticket["assigned_to_id"] == landlord["id"]
    assert ticket["priority"] == "high"
    assert ticket["messages"] == []


def test_ticket_without_agreement(client, tenant):
    r = client.post(
        "/api/tickets",
        json={"type": "general", "title": "Question", "description": "How do I pay by UPI?"},
        headers=tenant["headers"],
    )
    assert r.status_code == 201
    assert r.json()["data"]["agreement_id"] is None
    assert r.json()["data"]["priority"] == "medium"


def test_ticket_on_invisible_agreement_is_not_found(client, outsider, active_agreement):
    r = client.post(
        "/api/tickets",
        json={
            "agreement_id": active_agreement["id"],
            "type": "dispute",
            "title": "Noise",
            "description": "Loud music at night",
        },
        headers=outsider["headers"],
    )
    assert r.status_code == 404


def test_unknown_assignee_is_not_found(client, tenant):
    r = client.post(
        "/api/tickets",
        json={"assigned_to_id": 9999, "type": "general", "title": "Help", "description": "Anyone?"},
        headers=tenant["headers"],
    )
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Assignee not found"


def test_visibility_is_author_or_assignee(client, ticket, tenant, landlord, outsider):
    for user in (tenant, landlord):
        assert client.get(f"/api/tickets/{ticket['id']}", headers=user["headers"]).status_code == 200
        r = client.get("/api/tickets", headers=user["headers"])
        assert [t["id"] for t in r.json()["data"]] == [ticket["id"]]

    assert client.get(f"/api/tickets/{ticket['id']}", headers=outsider["headers"]).status_code == 404
    assert client.get("/api/tickets", headers=outsider["headers"]).json()["count"] == 0
    r = client.post(f"/api/tickets/{ticket['id']}/messages", json={"content": "hi"}, headers=outsider["headers"])
    assert r.status_code == 404


def test_messages_append_in_order(client, ticket, tenant, landlord):
    client.post(f"/api/tickets/{ticket['id']}/messages", json={"content": "Any update?"}, headers=tenant["headers"])
    r = client.post(
        f"/api/tickets/{ticket['id']}/messages",
        json={"content": "Plumber booked for Friday"},
        headers=landlord["headers"],
    )
    assert r.status_code == 201
    messages = r.json()["data"]["messages"]
    assert [m["content"] for m in messages] == ["Any update?", "Plumber booked for Friday"]
    assert [m["sender_id"] for m in messages] == [tenant["id"], landlord["id"]]
    assert messages[0]["sender_type"] == "user"
    assert r.json()["data"]["status"] == "open"


def test_message_on_closed_ticket_reopens_it(client, ticket, tenant, landlord):
    r = client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "closed"}, headers=landlord["headers"])
    assert r.json()["data"]["status"] == "closed"

    r = client.post(
        f"/api/tickets/{ticket['id']}/messages",
        json={"content": "It started leaking again"},
        headers=tenant["headers"],
    )
    assert r.json()["data"]["status"] == "open"
    assert len(r.json()["data"]["messages"]) == 1


def test_message_does_not_reopen_resolved_ticket(client, ticket, tenant, landlord):
    client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "resolved"}, headers=landlord["headers"])
    r = client.post(f"/api/tickets/{ticket['id']}/messages", json={"content": "Thanks"}, headers=tenant["headers"])
    assert r.json()["data"]["status"] == "resolved"


def test_resolve_with_notes_records_resolver(client, ticket, landlord):
    r = client.put(
        f"/api/tickets/{ticket['id']}/status",
        json={"status": "resolved", "resolution_notes": "Washer replaced"},
        headers=landlord["headers"],
    )
    data = r.json()["data"]
    assert data["status"] == "resolved"
    assert data["resolution_notes"] == "Washer replaced"
    assert data["resolved_by_id"] == landlord["id"]
    assert data["resolved_at"] is not None


def test_resolve_without_notes_only_changes_status(client, ticket, landlord):
    r = client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "resolved"}, headers=landlord["headers"])
    data = r.json()["data"]
    assert data["status"] == "resolved"
    assert data["resolved_at"] is None
    assert data["resolved_by_id"] is None


def test_escalate(client, ticket, tenant):
    r = client.put(
        f"/api/tickets/{ticket['id']}/status",
        json={"status": "escalated", "escalation_reason": "No response in a week"},
        headers=tenant["headers"],
    )
    data = r.json()["data"]
    assert data["status"] == "escalated"
    assert data["escalated_at"] is not None
    assert data["escalation_reason"] == "No response in a week"


def test_list_filters(client, ticket, tenant):
    client.post(
        "/api/tickets",
        json={"type": "general", "title": "Question", "description": "Parking slot?"},
        headers=tenant["headers"],
    )
    r = client.get("/api/tickets", params={"type": "maintenance"}, headers=tenant["headers"])
    assert [t["id"] for t in r.json()["data"]] == [ticket["id"]]
    r = client.get("/api/tickets", params={"status": "closed"}, headers=tenant["headers"])
    assert r.json()["data"] == []
    assert client.get("/api/tickets", params={"status": "lost"}, headers=tenant["headers"]).status_code == 400
