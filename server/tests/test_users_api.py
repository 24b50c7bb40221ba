from conftest import DEFAULT_PASSWORD, auth_headers


def test_user_management_is_admin_only(client, tech_headers):
    assert client.get("/users").status_code == 401
    assert client.get("/users", headers=tech_headers).status_code == 403
    resp = client.post("/users", json={"username": "x", "email": "x@aqualims.com"}, headers=tech_headers)
    assert resp.status_code == 403


def test_list_users_hides_credentials(client, admin_headers):
    resp = client.get("/users", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [u["username"] for u in body] == ["admin", "tech1"]
    assert all("passwordHash" not in u for u in body)


def test_create_user_with_default_password(client, admin_headers, users):
    resp = client.post(
        "/users",
        json={"username": "tech2", "email": "tech2@aqualims.com", "role": "USER"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    created = resp.json()
    assert created["isActive"] is True
    assert created["role"] == "USER"
    assert users.get(created["id"]).username == "tech2"

    login = client.post("/token", data={"username": "tech2", "password": DEFAULT_PASSWORD})
    assert login.status_code == 200


def test_duplicate_username_is_rejected(client, admin_headers):
    resp = client.post(
        "/users",
        json={"username": "tech1", "email": "other@aqualims.com"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


def test_invalid_email_is_rejected(client, admin_headers):
    resp = client.post("/users", json={"username": "tech3", "email": "nope"}, headers=admin_headers)
    assert resp.status_code == 422


def test_toggle_disables_and_reenables(client, admin_headers):
    resp = client.post("/users/user-1/toggle", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["isActive"] is False
    assert client.post("/token", data={"username": "tech1", "password": DEFAULT_PASSWORD}).status_code == 401

    resp = client.post("/users/user-1/toggle", headers=admin_headers)
    assert resp.json()["isActive"] is True
    assert client.post("/token", data={"username": "tech1", "password": DEFAULT_PASSWORD}).status_code == 200


def test_main_admin_cannot_be_disabled(client, admin_headers, users):
    resp = client.post("/users/admin-1/toggle", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cannot disable the main admin."
    assert users.get("admin-1").is_active is True


def test_reset_password(client, admin_headers):
    resp = client.post("/users/user-1/password", json={"password": "n3w-secret"}, headers=admin_headers)
    assert resp.status_code == 200

    assert client.post("/token", data={"username": "tech1", "password": DEFAULT_PASSWORD}).status_code == 401
    auth_headers(client, "tech1", "n3w-secret")


def test_reset_password_requires_value(client, admin_headers):
    resp = client.post("/users/user-1/password", json={"password": ""}, headers=admin_headers)
    assert resp.status_code == 400


def test_unknown_user(client, admin_headers):
    assert client.post("/users/ghost/toggle", headers=admin_headers).status_code == 404
