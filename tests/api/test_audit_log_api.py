"""HTTP tests for /api/v1/audit-log: audited operations leave entries."""

from httpx import AsyncClient


async def test_upload_and_download_are_audited(client: AsyncClient, record_id: str) -> None:
    upload = await client.post(
        "/api/v1/documents",
        data={"medical_record_id": record_id},
        files={"file": ("a.pdf", b"%PDF-audit", "application/pdf")},
        headers={
            "X-User-ID": "clerk-1",
            "X-Request-ID": "req-upload-1",
            "X-Forwarded-For": "203.0.113.9, 10.0.0.1",
            "User-Agent": "scanner/2.0",
        },
    )
    document_id = upload.json()["id"]
    await client.get(
        f"/api/v1/documents/{document_id}/download", headers={"X-User-ID": "doctor-2"}
    )

    response = await client.get(
        "/api/v1/audit-log", params={"entity_type": "document", "entity_id": document_id}
    )
    assert response.status_code == 200
    entries = response.json()["items"]
    assert [e["action"] for e in entries] == ["download", "upload"]

    download, upload_entry = entries
    assert download["user_id"] == "doctor-2"
    assert upload_entry["user_id"] == "clerk-1"
    assert upload_entry["request_id"] == "req-upload-1"
    assert upload_entry["ip_address"] == "203.0.113.9"
    assert upload_entry["user_agent"] == "scanner/2.0"
    assert upload_entry["details"]["medical_record_id"] == record_id


async def test_record_creation_audited(client: AsyncClient, record_id: str) -> None:
    response = await client.get(
        "/api/v1/audit-log",
        params={"action": "create", "entity_type": "medical_record", "user_id": "clerk-1"},
    )
    entries = response.json()["items"]
    assert [e["entity_id"] for e in entries] == [record_id]
    assert entries[0]["details"] == {"patient_id": "patient-001"}


async def test_checklist_update_audited(client: AsyncClient, record_id: str) -> None:
    await client.put(
        f"/api/v1/records/{record_id}/checklist",
        json={"has_backup": True},
        headers={"X-User-ID": "officer-7"},
    )
    response = await client.get(
        "/api/v1/audit-log", params={"entity_type": "checklist", "action": "update"}
    )
    entries = response.json()["items"]
    assert len(entries) == 1
    assert entries[0]["details"]["items"] == ["has_backup"]


async def test_invalid_filter_value_is_422(client: AsyncClient) -> None:
    response = await client.get("/api/v1/audit-log", params={"action": "explode"})
    assert response.status_code == 422


async def test_failed_operation_not_audited(client: AsyncClient) -> None:
    await client.get("/api/v1/records/missing")
    response = await client.get("/api/v1/audit-log", params={"entity_id": "missing"})
    assert response.json()["items"] == []
