import pytest

from conftest import TEST_SECRET, auth_headers, register
from sleep_diary.services import SessionIssuer

ENTRY = {
    "date": "2024-01-01",
    "bedTime": "23:00",
    "wakeTime": "07:00",
    "duration": 8,
    "screenTime": 1.5,
    "energy": 4,
}


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer"},
    {"Authorization": "Token abc"},
    {"Authorization": "Bearer garbage"},
])
def test_entries_require_valid_token(client, headers):
    assert client.get("/api/entries", headers=headers).status_code == 401
    assert client.post("/api/entries", json=ENTRY, headers=headers).status_code == 401
    assert client.delete("/api/entries/1", headers=headers).status_code == 401


def test_token_signed_with_other_secret_is_rejected(client, alice):
    forged = SessionIssuer("not-" + TEST_SECRET).issue(1, "alice", True)
    assert client.get("/api/entries", headers=auth_headers(forged)).status_code == 401


def test_entries_are_returned_with_stored_fields(client, alice):
    headers = auth_headers(alice["token"])
    resp = client.post("/api/entries", json={**ENTRY, "notes": "slept well"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    entries = client.get("/api/entries", headers=headers).json()
    assert len(entries) == 1
    entry = entries[0]
    assert entry["date"] == "2024-01-01"
    assert entry["bed_time"] == "23:00"
    assert entry["wake_time"] == "07:00"
    assert entry["duration"] == 8
    assert entry["screen_time"] == 1.5
    assert entry["energy"] == 4
    assert entry["notes"] == "slept well"
    assert entry["user_id"] == SessionIssuer(TEST_SECRET).validate(alice["token"]).user_id
    assert entry["created_at"]


def test_notes_default_to_empty(client, alice):
    headers = auth_headers(alice["token"])
    client.post("/api/entries", json=ENTRY, headers=headers)
    assert client.get("/api/entries", headers=headers).json()[0]["notes"] == ""


@pytest.mark.parametrize("overrides", [
    {"date": None},
    {"date": "yesterday"},
    {"bedTime": ""},
    {"duration": -1},
    {"screenTime": "lots"},
    {"energy": None},
])
def test_invalid_entries_are_rejected(client, alice, overrides):
    headers = auth_headers(alice["token"])
    payload = {k: v for k, v in {**ENTRY, **overrides}.items() if v is not None}
    resp = client.post("/api/entries", json=payload, headers=headers)
    assert resp.status_code == 400
    assert client.get("/api/entries", headers=headers).json() == []


def test_entries_sorted_newest_first(client, alice):
    headers = auth_headers(alice["token"])
    for day in ["2024-03-01", "2024-03-15", "2024-02-28"]:
        client.post("/api/entries", json={**ENTRY, "date": day}, headers=headers)
    dates = [e["date"] for e in client.get("/api/entries", headers=headers).json()]
    assert dates == ["2024-03-15", "2024-03-01", "2024-02-28"]


def test_deleting_someone_elses_entry_is_a_silent_no_op(client, alice):
    bob = register(client, username="bob")
    alice_headers = auth_headers(alice["token"])
    bob_headers = auth_headers(bob["token"])

    client.post("/api/entries", json=ENTRY, headers=alice_headers)
    entry_id = client.get("/api/entries", headers=alice_headers).json()[0]["id"]

    resp = client.delete(f"/api/entries/{entry_id}", headers=bob_headers)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert len(client.get("/api/entries", headers=alice_headers).json()) == 1

    assert client.delete("/api/entries/99999", headers=alice_headers).status_code == 200


def test_same_date_for_different_users_does_not_collide(client, alice):
    bob = register(client, username="bob")
    client.post("/api/entries", json=ENTRY, headers=auth_headers(alice["token"]))
    client.post("/api/entries", json={**ENTRY, "energy": 1}, headers=auth_headers(bob["token"]))

    assert client.get("/api/entries", headers=auth_headers(alice["token"])).json()[0]["energy"] == 4
    assert client.get("/api/entries", headers=auth_headers(bob["token"])).json()[0]["energy"] == 1


def test_non_finite_hours_are_rejected(client, alice):
    headers = {**auth_headers(alice["token"]), "Content-Type": "application/json"}
    body = (
        '{"date": "2024-01-01", "bedTime": "23:00", "wakeTime": "07:00", '
        '"duration": Infinity, "screenTime": 1, "energy": 4}'
    )
    resp = client.post("/api/entries", content=body, headers=headers)
    assert resp.status_code == 400
    assert client.get("/api/entries", headers=auth_headers(alice["token"])).json() == []


@pytest.mark.parametrize("day", ["20240101", "2024-W01-1"])
def test_only_calendar_dates_are_accepted(client, alice, day):
    headers = auth_headers(alice["token"])
    resp = client.post("/api/entries", json={**ENTRY, "date": day}, headers=headers)
    assert resp.status_code == 400
