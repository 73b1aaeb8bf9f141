import pytest


@pytest.fixture
def notifications(fake_supabase, current_user):
    rows = [
        {"id": "n1", "recipient_id": current_user["id"], "title": "Job approved", "message": None,
         "type": "job_update", "read": False, "created_at": "2024-03-01T10:00:00+00:00", "updated_at": None},
        {"id": "n2", "recipient_id": current_user["id"], "title": "Invoice paid", "message": None,
         "type": "invoice", "read": True, "created_at": "2024-03-02T10:00:00+00:00", "updated_at": None},
        {"id": "n3", "recipient_id": "someone-else", "title": "Other", "message": None,
         "type": "job_update", "read": False, "created_at": "2024-03-03T10:00:00+00:00", "updated_at": None},
    ]
    fake_supabase.tables["notifications"] = rows
    return rows


def _row(fake_supabase, notification_id):
    return next((n for n in fake_supabase.tables["notifications"] if n["id"] == notification_id), None)


def test_list_only_own_newest_first(client, notifications):
    resp = client.get("/api/v1/notifications")

    assert resp.status_code == 200
    assert [n["id"] for n in resp.json()] == ["n2", "n1"]


def test_list_unread_only(client, notifications):
    resp = client.get("/api/v1/notifications", params={"unread_only": True})

    assert [n["id"] for n in resp.json()] == ["n1"]


def test_mark_read(client, fake_supabase, notifications):
    resp = client.patch("/api/v1/notifications/n1", json={"read": True})

    assert resp.status_code == 200
    assert resp.json()["message"] == "Notification marked as read successfully"
    assert _row(fake_supabase, "n1")["read"] is True
    assert _row(fake_supabase, "n1")["updated_at"] is not None


def test_update_requires_read_flag(client, notifications):
    assert client.patch("/api/v1/notifications/n1", json={}).status_code == 422


def test_update_foreign_notification_is_403(client, fake_supabase, notifications):
    resp = client.patch("/api/v1/notifications/n3", json={"read": True})

    assert resp.status_code == 403
    assert _row(fake_supabase, "n3")["read"] is False


def test_delete_missing_is_404(client, notifications):
    assert client.delete("/api/v1/notifications/nope").status_code == 404


def test_delete_own(client, fake_supabase, notifications):
    resp = client.delete("/api/v1/notifications/n2")

    assert resp.status_code == 200
    assert _row(fake_supabase, "n2") is None


def test_delete_foreign_is_403(client, fake_supabase, notifications):
    assert client.delete("/api/v1/notifications/n3").status_code == 403
    assert _row(fake_supabase, "n3") is not None


def test_bulk_delete_skips_foreign(client, fake_supabase, notifications):
    resp = client.post("/api/v1/notifications/bulk-delete", json={"notification_ids": ["n1", "n3"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["deleted_count"] == 1
    assert body["deleted_ids"] == ["n1"]
    assert _row(fake_supabase, "n3") is not None


def test_bulk_delete_nothing_owned_is_404(client, notifications):
    resp = client.post("/api/v1/notifications/bulk-delete", json={"notification_ids": ["n3"]})

    assert resp.status_code == 404


def test_bulk_delete_empty_list_is_422(client, notifications):
    resp = client.post("/api/v1/notifications/bulk-delete", json={"notification_ids": []})

    assert resp.status_code == 422


def test_mark_all_read(client, fake_supabase, notifications):
    resp = client.post("/api/v1/notifications/mark-all-read")

    assert resp.status_code == 200
    assert _row(fake_supabase, "n1")["read"] is True
    assert _row(fake_supabase, "n3")["read"] is False
