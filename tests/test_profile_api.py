from pathlib import Path

from skateroom.config import settings


def test_profile_update_and_derived_stats(client, auth_headers) -> None:
    payload = {
        "full_name": "Tony",
        "stance": "Goofy",
        "date_of_birth": "2000-06-15",
        "skating_since": "2015-01-01",
        "hometown": "San Diego",
        "total_sessions": 12,
    }
    r = client.put("/users/me/profile", json=payload, headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["profile"]["full_name"] == "Tony"
    assert body["profile"]["stance"] == "Goofy"
    assert body["profile"]["total_sessions"] == 12
    assert body["profile"]["decks_used"] == 0
    assert body["stats"]["age"] >= 24
    assert "years" in body["stats"]["skating_duration"]

    r = client.put("/users/me/profile", json={"hometown": "Encinitas"}, headers=auth_headers)
    assert r.json()["profile"]["full_name"] == "Tony"
    assert r.json()["profile"]["hometown"] == "Encinitas"


def test_profile_rejects_unknown_stance(client, auth_headers) -> None:
    r = client.put("/users/me/profile", json={"stance": "Mongo"}, headers=auth_headers)
    assert r.status_code == 422


def test_avatar_upload_sets_public_url(client, auth_headers) -> None:
    user_id = client.get("/auth/session", headers=auth_headers).json()["user"]["id"]
    files = {"file": ("me.PNG", b"\x89PNG fake image", "image/png")}

    r = client.post("/users/me/avatar", files=files, headers=auth_headers)
    assert r.status_code == 200
    avatar_url = r.json()["profile"]["avatar_url"]
    assert avatar_url == f"http://testserver/storage/avatars/{user_id}/avatar.png"

    stored = Path(settings.storage_dir) / "avatars" / user_id / "avatar.png"
    assert stored.read_bytes() == b"\x89PNG fake image"

    # Uploading again overwrites the same path.
    files = {"file": ("again.png", b"second", "image/png")}
    assert client.post("/users/me/avatar", files=files, headers=auth_headers).status_code == 200
    assert stored.read_bytes() == b"second"

    served = client.get(f"/storage/avatars/{user_id}/avatar.png")
    assert served.status_code == 200
    assert served.content == b"second"


def test_avatar_must_be_an_image(client, auth_headers) -> None:
    files = {"file": ("notes.txt", b"hello", "text/plain")}
    r = client.post("/users/me/avatar", files=files, headers=auth_headers)
    assert r.status_code == 400


def test_profile_counters_cannot_be_cleared(client, auth_headers) -> None:
    for field in ("total_sessions", "decks_used"):
        r = client.put("/users/me/profile", json={field: None}, headers=auth_headers)
        assert r.status_code == 422, r.text

    r = client.get("/users/me/profile", headers=auth_headers)
    assert r.json()["profile"]["total_sessions"] == 0
    assert r.json()["profile"]["decks_used"] == 0
