"""Tests for account, login and profile endpoints."""


def _register(client, username="alice", password="pw", confirm="pw", files=None):
    return client.post(
        "/register",
        data={"new_username": username, "new_password": password, "confirm_password": confirm},
        files=files,
    )


def test_default_admins_seeded(client):
    users = {u["username"]: u for u in client.get("/users").json()}
    assert users["advan"]["role"] == "admin"
    assert users["advan"]["profile_photo"] is None
    assert users["admin"]["profile_photo"] == "python.png"


def test_register_and_login(client):
    assert _register(client).status_code == 200

    response = client.post("/login", json={"username": "alice", "password": "pw"})
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["role"] == "member"
    assert user["lastLogin"] is not None


def test_register_rejects_mismatch_and_duplicates(client):
    assert _register(client, confirm="other").status_code == 400
    assert _register(client).status_code == 200
    assert _register(client).status_code == 400


def test_register_with_profile_photo(client, isolated_dirs):
    files = {"profile_photo": ("me.jpg", b"jpeg bytes", "image/jpeg")}
    assert _register(client, files=files).status_code == 200
    user = next(u for u in client.get("/users").json() if u["username"] == "alice")
    assert user["profile_photo"].startswith("profile_photo-")
    assert (isolated_dirs / "uploads" / user["profile_photo"]).exists()


def test_login_wrong_password(client):
    _register(client)
    response = client.post("/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401


def test_logout(client):
    _register(client)
    assert client.post("/logout", json={"username": "alice"}).status_code == 200
    user = next(u for u in client.get("/users").json() if u["username"] == "alice")
    assert user["lastLogout"] is not None
    assert client.post("/logout", json={"username": "ghost"}).status_code == 404


def test_add_user_roles(client):
    form = {"username": "bob", "password": "pw", "confirm_password": "pw", "role": "member"}
    assert client.post("/api/add-user", data=form).status_code == 200

    admin_form = {**form, "username": "boss", "role": "admin", "added_by": "bob"}
    assert client.post("/api/add-user", data=admin_form).status_code == 403

    admin_form["added_by"] = "advan"
    assert client.post("/api/add-user", data=admin_form).status_code == 200

    bad_role = {**form, "username": "eve", "role": "owner"}
    assert client.post("/api/add-user", data=bad_role).status_code == 400

    missing = {"username": "zed", "password": "pw"}
    assert client.post("/api/add-user", data=missing).status_code == 400


def test_delete_account_removes_photo(client, isolated_dirs):
    files = {"profile_photo": ("me.png", b"png", "image/png")}
    _register(client, files=files)
    user = next(u for u in client.get("/users").json() if u["username"] == "alice")
    photo = isolated_dirs / "uploads" / user["profile_photo"]
    assert photo.exists()

    assert client.post("/delete-account", json={"username": "alice"}).status_code == 200
    assert not photo.exists()
    assert "alice" not in {u["username"] for u in client.get("/users").json()}
    assert client.post("/delete-account", json={"username": "alice"}).status_code == 404


def test_profile_roundtrip(client):
    _register(client)
    response = client.post(
        "/api/update-profile",
        json={"whatsapp": "+62123", "instagram": ""},
        headers={"X-Username": "alice"},
    )
    assert response.status_code == 200

    profile = client.get("/api/profile", params={"username": "alice"}).json()
    assert profile == {"whatsapp": "+62123", "instagram": None}

    via_header = client.get("/api/profile", headers={"X-Username": "alice"})
    assert via_header.json() == profile


def test_profile_errors(client):
    assert client.get("/api/profile").status_code == 400
    assert client.get("/api/profile", params={"username": "ghost"}).status_code == 404
    assert client.post("/api/update-profile", json={}).status_code == 400


def test_update_profile_photo_replaces_old_file(client, isolated_dirs):
    _register(client, files={"profile_photo": ("a.png", b"old", "image/png")})
    old = next(u for u in client.get("/users").json() if u["username"] == "alice")["profile_photo"]

    response = client.post(
        "/api/update-profile-photo",
        files={"profile_photo": ("b.png", b"new", "image/png")},
        headers={"X-Username": "alice"},
    )
    assert response.status_code == 200
    new = response.json()["profile_photo"]
    assert new != old
    assert not (isolated_dirs / "uploads" / old).exists()
    assert (isolated_dirs / "uploads" / new).read_bytes() == b"new"


def test_update_profile_photo_errors(client):
    files = {"profile_photo": ("b.png", b"new", "image/png")}
    assert client.post("/api/update-profile-photo", files=files).status_code == 400
    assert client.post(
        "/api/update-profile-photo", files=files, headers={"X-Username": "ghost"}
    ).status_code == 404
    _register(client)
    assert client.post(
        "/api/update-profile-photo", data={}, headers={"X-Username": "alice"}
    ).status_code == 400
