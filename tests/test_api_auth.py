import pytest

from conftest import TEST_SECRET, auth_headers, login, register
from sleep_diary.services import SECURITY_QUESTIONS, SessionIssuer


def test_register_returns_session(client):
    body = register(client, username="Alice")
    assert body["username"] == "alice"
    assert body["isAdmin"] is False
    identity = SessionIssuer(TEST_SECRET).validate(body["token"])
    assert identity.username == "alice"
    assert identity.is_admin is False


def test_register_same_name_any_case_conflicts(client, alice):
    resp = client.post(
        "/api/register",
        json={"username": "ALICE", "password": "other", "secQ": 1, "secA": "x"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Username already taken."}


@pytest.mark.parametrize("payload", [
    {"username": "admin", "password": "pass1", "secQ": 0, "secA": "x"},
    {"username": "bob", "password": "abc", "secQ": 0, "secA": "x"},
    {"username": "bob", "password": "pass1", "secQ": 9, "secA": "x"},
    {"username": "bob", "password": "pass1", "secQ": 0},
    {"username": "", "password": "pass1", "secQ": 0, "secA": "x"},
    {"password": "pass1", "secQ": 0, "secA": "x"},
])
def test_register_rejects_bad_input(client, payload):
    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_register_rejects_non_json_body(client):
    resp = client.post("/api/register", content=b"nope", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_login_claims_match_stored_user(client, alice):
    resp = login(client, "ALICE", "pass1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["username"] == "alice"
    assert body["isAdmin"] is False

    identity = SessionIssuer(TEST_SECRET).validate(body["token"])
    alice_id = SessionIssuer(TEST_SECRET).validate(alice["token"]).user_id
    assert identity.user_id == alice_id


def test_login_does_not_distinguish_unknown_user(client, alice):
    wrong = login(client, "alice", "nope1")
    unknown = login(client, "ghost", "pass1")
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_login_missing_fields(client):
    assert client.post("/api/login", json={"username": "alice"}).status_code == 400


def test_admin_login_carries_admin_role(client):
    body = login(client, "admin", "admin123").json()
    assert body["isAdmin"] is True
    assert SessionIssuer(TEST_SECRET).validate(body["token"]).is_admin is True


def test_security_questions_listed(client):
    resp = client.get("/api/security-questions")
    assert resp.json() == {"questions": SECURITY_QUESTIONS}


def test_recovery_flow(client):
    register(client, username="alice", sec_q=0, sec_a="Rex")

    resp = client.post("/api/recover/question", json={"username": "alice"})
    assert resp.status_code == 200
    assert resp.json() == {"question": SECURITY_QUESTIONS[0]}

    resp = client.post(
        "/api/recover/verify",
        json={"username": "alice", "answer": "Max", "newPassword": "newpass"},
    )
    assert resp.status_code == 401

    resp = client.post(
        "/api/recover/verify",
        json={"username": "alice", "answer": " rex ", "newPassword": "newpass"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    assert login(client, "alice", "newpass").status_code == 200
    assert login(client, "alice", "pass1").status_code == 401


@pytest.mark.parametrize("username", ["admin", "ghost"])
def test_recovery_not_found(client, username):
    resp = client.post("/api/recover/question", json={"username": username})
    assert resp.status_code == 404
    resp = client.post(
        "/api/recover/verify",
        json={"username": username, "answer": "x", "newPassword": "newpass"},
    )
    assert resp.status_code == 404


def test_recovery_validation(client, alice):
    assert client.post("/api/recover/question", json={}).status_code == 400
    resp = client.post(
        "/api/recover/verify",
        json={"username": "alice", "answer": "rex", "newPassword": "abc"},
    )
    assert resp.status_code == 400


def test_change_password(client, alice):
    headers = auth_headers(alice["token"])

    resp = client.post(
        "/api/change-password",
        json={"currentPassword": "wrong", "newPassword": "newpass"},
        headers=headers,
    )
    assert resp.status_code == 401

    resp = client.post(
        "/api/change-password",
        json={"currentPassword": "pass1", "newPassword": "abc"},
        headers=headers,
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/change-password",
        json={"currentPassword": "pass1", "newPassword": "newpass"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert login(client, "alice", "newpass").status_code == 200
    assert login(client, "alice", "pass1").status_code == 401


def test_change_password_requires_token(client):
    resp = client.post(
        "/api/change-password",
        json={"currentPassword": "pass1", "newPassword": "newpass"},
    )
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
