import time

from skateroom.config import settings


def test_sign_up_sign_in_and_session_flow(client) -> None:
    payload = {"email": "Tester@Example.com", "password": "SecretPass123"}
    r = client.post("/auth/sign-up", json=payload)
    assert r.status_code == 201
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "tester@example.com"

    r = client.post("/auth/sign-in", json={"email": "tester@example.com", "password": "SecretPass123"})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

    session = client.get("/auth/session", headers=headers)
    assert session.status_code == 200
    assert session.json()["user"]["email"] == "tester@example.com"


def test_session_is_null_without_token(client) -> None:
    r = client.get("/auth/session")
    assert r.status_code == 200
    assert r.json() == {"user": None}


def test_sign_up_provisions_a_profile(client, auth_headers) -> None:
    r = client.get("/users/me/profile", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["profile"]["total_sessions"] == 0


def test_duplicate_sign_up_is_rejected(client) -> None:
    payload = {"email": "dup@example.com", "password": "SecretPass123"}
    assert client.post("/auth/sign-up", json=payload).status_code == 201
    r = client.post("/auth/sign-up", json=payload)
    assert r.status_code == 400
    assert r.json()["detail"] == "User already registered"


def test_bad_credentials_return_provider_message(client) -> None:
    client.post("/auth/sign-up", json={"email": "who@example.com", "password": "SecretPass123"})
    r = client.post("/auth/sign-in", json={"email": "who@example.com", "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid login credentials"


def test_sign_out_revokes_the_token(client, auth_headers) -> None:
    assert client.get("/sessions", headers=auth_headers).status_code == 200

    r = client.post("/auth/sign-out", headers=auth_headers)
    assert r.status_code == 204

    assert client.get("/sessions", headers=auth_headers).status_code == 401
    assert client.get("/auth/session", headers=auth_headers).json() == {"user": None}


def test_protected_routes_require_a_token(client) -> None:
    assert client.get("/gear").status_code == 401
    assert client.get("/users/me/profile").status_code == 401
    assert client.get("/gear", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_slow_identity_check_times_out(client, auth_headers, monkeypatch) -> None:
    identity = client.app.state.identity

    def slow_get_session(token):
        time.sleep(0.5)
        return None

    monkeypatch.setattr(identity, "get_session", slow_get_session)
    monkeypatch.setattr(settings, "auth_timeout_seconds", 0.05)

    r = client.get("/gear", headers=auth_headers)
    assert r.status_code == 504
    assert r.json()["detail"] == "Connection timeout. Please try again."
