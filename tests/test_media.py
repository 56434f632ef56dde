# tests/test_media.py
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from config import get_settings
from models import Document


def _upload(client, user, filename="lease.pdf", content=b"%PDF-1.4", mime="application/pdf", **form):
    return client.post(
        "/api/media/upload",
        files={"file": (filename, content, mime)},
        data=form,
        headers=user["headers"],
    )


def test_upload_without_type_goes_to_user_folder(client, tenant, store):
    r = _upload(client, tenant)
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["public_id"].startswith(f"rentfit/users/{tenant['id']}/")
    assert data["url"] == f"https://blob.test/{data['public_id']}"
    assert data["name"] == "lease.pdf"
    assert data["size"] == len(b"%PDF-1.4")
    assert data["mime_type"] == "application/pdf"
    assert data["document"] is None
    assert store.objects[data["public_id"]] == b"%PDF-1.4"


def test_upload_with_type_and_category(client, tenant):
    r = _upload(client, tenant, type="kyc", category="pan")
    assert r.json()["data"]["public_id"].startswith("rentfit/kyc/pan/")


def test_upload_can_record_document(client, db, tenant):
    r = _upload(client, tenant, type="agreement", save_to_documents="true", related_model="Agreement", related_id="3")
    document = r.json()["data"]["document"]
    assert document["uploaded_by_id"] == tenant["id"]
    assert document["type"] == "agreement"
    assert document["storage_public_id"] == r.json()["data"]["public_id"]
    assert document["related_model"] == "Agreement"
    assert document["related_id"] == 3
    assert document["status"] == "pending"
    assert db.query(Document).count() == 1


def test_upload_rejects_bad_type(client, tenant, store):
    r = _upload(client, tenant, filename="run.sh", content=b"echo hi", mime="text/x-shellscript")
    assert r.status_code == 400
    assert r.json()["error"]["message"].startswith("Invalid file type")
    assert store.objects == {}


def test_upload_rejects_oversized_file(client, tenant, store):
    too_big = b"0" * (get_settings().max_upload_bytes + 1)
    r = _upload(client, tenant, filename="big.png", content=too_big, mime="image/png")
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "File too large"
    assert store.objects == {}


def test_upload_requires_auth(client):
    r = client.post("/api/media/upload", files={"file": ("a.png", b"x", "image/png")})
    assert r.status_code == 401


def test_upload_multiple(client, tenant, store):
    r = client.post(
        "/api/media/upload-multiple",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.jpg", b"b", "image/jpeg")),
        ],
        data={"type": "inspection"},
        headers=tenant["headers"],
    )
    assert r.status_code == 200, r.text
    files = r.json()["data"]["files"]
    assert [f["name"] for f in files] == ["a.png", "b.jpg"]
    assert len(store.objects) == 2


def test_upload_multiple_rejects_batch_with_one_bad_file(client, tenant, store):
    r = client.post(
        "/api/media/upload-multiple",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.exe", b"b", "application/x-msdownload")),
        ],
        headers=tenant["headers"],
    )
    assert r.status_code == 400
    assert store.objects == {}


def test_upload_multiple_enforces_file_limit(client, tenant, store):
    limit = get_settings().max_upload_files
    files = [("files", (f"{i}.png", b"x", "image/png")) for i in range(limit + 1)]
    r = client.post("/api/media/upload-multiple", files=files, headers=tenant["headers"])
    assert r.status_code == 400
    assert store.objects == {}


def test_delete_file_only(client, tenant, store):
    public_id = _upload(client, tenant).json()["data"]["public_id"]

    r = client.delete(f"/api/media/delete/{public_id}", headers=tenant["headers"])
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "message": "File deleted successfully",
        "data": {"public_id": public_id, "document_id": None},
    }
    assert public_id not in store.objects

    # Already gone still succeeds
    r = client.delete(f"/api/media/delete/{public_id}", headers=tenant["headers"])
    assert r.status_code == 200


def test_delete_with_document(client, db, tenant, store):
    data = _upload(client, tenant, save_to_documents="true").json()["data"]

    r = client.delete(
        f"/api/media/delete/{data['public_id']}",
        params={"delete_from_documents": "true"},
        headers=tenant["headers"],
    )
    assert r.status_code == 200
    assert r.json()["message"] == "File and document deleted successfully"
    assert r.json()["data"]["document_id"] == data["document"]["id"]
    assert data["public_id"] in store.deleted
    assert db.query(Document).count() == 0


def test_delete_someone_elses_document_is_not_found(client, db, tenant, landlord, store):
    public_id = _upload(client, tenant, save_to_documents="true").json()["data"]["public_id"]

    r = client.delete(
        f"/api/media/delete/{public_id}",
        params={"delete_from_documents": "true"},
        headers=landlord["headers"],
    )
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Document not found or access denied"

    r = client.delete(f"/api/media/delete/{public_id}", headers=landlord["headers"])
    assert r.status_code == 404

    assert store.deleted == []
    assert db.query(Document).count() == 1


def test_delete_someone_elses_property_media_is_not_found(client, landlord, outsider, property_id, store):
    r = client.post(
        f"/api/properties/{property_id}/media",
        files={"file": ("front.jpg", b"jpeg", "image/jpeg")},
        headers=landlord["headers"],
    )
    public_id = r.json()["data"]["media"][0]["public_id"]

    assert client.delete(f"/api/media/delete/{public_id}", headers=outsider["headers"]).status_code == 404
    assert store.deleted == []
    assert client.delete(f"/api/media/delete/{public_id}", headers=landlord["headers"]).status_code == 200


def test_document_row_failure_is_reported(client, db, monkeypatch, tenant, store):
    public_id = _upload(client, tenant, save_to_documents="true").json()["data"]["public_id"]

    def broken_delete(self, instance):
        raise OperationalError("DELETE FROM documents", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "delete", broken_delete)
    r = client.delete(
        f"/api/media/delete/{public_id}",
        params={"delete_from_documents": "true"},
        headers=tenant["headers"],
    )
    monkeypatch.undo()

    assert r.status_code == 500
    assert r.json()["success"] is False
    assert public_id in store.deleted
    assert db.query(Document).count() == 1

    # Retrying finishes the job
    r = client.delete(
        f"/api/media/delete/{public_id}",
        params={"delete_from_documents": "true"},
        headers=tenant["headers"],
    )
    assert r.status_code == 200
    assert db.query(Document).count() == 0


def test_delete_plain_upload_of_another_user_is_not_found(client, tenant, landlord, store):
    public_id = _upload(client, tenant, filename="id.pdf").json()["data"]["public_id"]
    assert public_id.startswith(f"rentfit/users/{tenant['id']}/")

    r = client.delete(f"/api/media/delete/{public_id}", headers=landlord["headers"])
    assert r.status_code == 404
    assert store.deleted == []
    assert public_id in store.objects


def test_delete_untracked_file_outside_own_folder_is_not_found(client, tenant, store):
    public_id = _upload(client, tenant, type="kyc", category="pan").json()["data"]["public_id"]

    r = client.delete(f"/api/media/delete/{public_id}", headers=tenant["headers"])
    assert r.status_code == 404
    assert store.deleted == []


def test_delete_tracked_file_outside_own_folder(client, tenant, store):
    public_id = _upload(client, tenant, type="kyc", save_to_documents="true").json()["data"]["public_id"]

    r = client.delete(f"/api/media/delete/{public_id}", headers=tenant["headers"])
    assert r.status_code == 200
    assert store.deleted == [public_id]


def test_delete_inspection_photo_by_party(client, tenant, landlord, outsider, active_agreement, store):
    r = client.post(
        "/api/inspections",
        json={
            "agreement_id": active_agreement["id"],
            "type": "move_in",
            "inspection_date": "2024-01-01T10:00:00",
            "overall_condition": "good",
        },
        headers=tenant["headers"],
    )
    inspection_id = r.json()["data"]["id"]
    r = client.post(
        f"/api/inspections/{inspection_id}/photos",
        files={"file": ("wall.png", b"png", "image/png")},
        headers=tenant["headers"],
    )
    public_id = r.json()["data"]["photos"][0]["public_id"]

    assert client.delete(f"/api/media/delete/{public_id}", headers=outsider["headers"]).status_code == 404
    assert client.delete(f"/api/media/delete/{public_id}", headers=landlord["headers"]).status_code == 200


def test_failed_batch_removes_stored_files(client, db, tenant, store):
    store.fail_on = 2
    r = client.post(
        "/api/media/upload-multiple",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.png", b"b", "image/png")),
        ],
        data={"save_to_documents": "true"},
        headers=tenant["headers"],
    )
    assert r.status_code == 502
    assert store.objects == {}
    assert len(store.deleted) == 1
    assert store.deleted[0].startswith(f"rentfit/users/{tenant['id']}/")
    assert db.query(Document).count() == 0


def test_batch_records_one_document_per_file(client, db, tenant):
    r = client.post(
        "/api/media/upload-multiple",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.pdf", b"b", "application/pdf")),
        ],
        data={"save_to_documents": "true", "type": "receipt"},
        headers=tenant["headers"],
    )
    files = r.json()["data"]["files"]
    assert [f["document"]["name"] for f in files] == ["a.png", "b.pdf"]
    assert [f["document"]["storage_public_id"] for f in files] == [f["public_id"] for f in files]
    assert db.query(Document).count() == 2
