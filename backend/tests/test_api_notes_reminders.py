def test_create_and_list_manual_note(client, auth_headers):
    r = client.post(
        "/api/v1/notes",
        json={"title": "Retro", "key_discussions": "Too many meetings\n\nFlaky CI", "decisions_made": ["Async standups"]},
        headers=auth_headers,
    )
    assert r.status_code == 201
    note = r.json()["note"]
    assert note["key_discussions"] == ["Too many meetings", "Flaky CI"]
    assert note["decisions_made"] == ["Async standups"]
    assert note["summary_id"] is None

    notes = client.get("/api/v1/notes", headers=auth_headers).json()
    assert [n["id"] for n in notes] == [note["id"]]


def test_note_without_title_is_rejected(client, auth_headers):
    r = client.post("/api/v1/notes", json={"title": "  "}, headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["message"] == "Title cannot be empty."


def test_delete_notes(client, auth_headers):
    note_id = client.post("/api/v1/notes", json={"title": "Tmp"}, headers=auth_headers).json()["note"]["id"]
    r = client.post("/api/v1/notes/delete", json={"ids": [note_id]}, headers=auth_headers)
    assert r.json()["deleted_notes"] == 1
    assert client.get("/api/v1/notes", headers=auth_headers).json() == []


def test_create_reminder_with_date_and_time(client, auth_headers):
    r = client.post(
        "/api/v1/reminders",
        json={"text": "Book room", "remind_date": "2025-04-02", "remind_time": "14:30"},
        headers=auth_headers,
    )
    assert r.status_code == 201
    reminder = r.json()["reminder"]
    assert reminder["remind_at"].startswith("2025-04-02T14:30")
    assert reminder["completed"] is False


def test_reminder_text_is_required(client, auth_headers):
    r = client.post("/api/v1/reminders", json={"text": ""}, headers=auth_headers)
    assert r.status_code == 422


def test_toggle_and_edit_reminder(client, auth_headers):
    reminder_id = client.post(
        "/api/v1/reminders", json={"text": "Book room"}, headers=auth_headers
    ).json()["reminder"]["id"]

    r = client.patch(f"/api/v1/reminders/{reminder_id}/toggle", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["reminder"]["completed"] is True
    assert r.json()["message"] == "Reminder completed"

    r = client.patch(f"/api/v1/reminders/{reminder_id}", json={"text": "Book big room"}, headers=auth_headers)
    assert r.json()["reminder"]["text"] == "Book big room"

    r = client.patch(f"/api/v1/reminders/{reminder_id}", json={"text": "   "}, headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["message"] == "Cannot save empty reminder."


def test_toggle_unknown_reminder(client, auth_headers):
    r = client.patch("/api/v1/reminders/999999/toggle", headers=auth_headers)
    assert r.status_code == 404


def test_delete_reminders(client, auth_headers):
    ids = [
        client.post("/api/v1/reminders", json={"text": f"r{i}"}, headers=auth_headers).json()["reminder"]["id"]
        for i in range(2)
    ]
    r = client.post("/api/v1/reminders/delete", json={"ids": ids}, headers=auth_headers)
    assert r.json()["deleted_reminders"] == 2
    assert client.get("/api/v1/reminders", headers=auth_headers).json() == []


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
