from conftest import auth


def test_get_profile(client, user_token):
    response = client.get("/api/user", headers=auth(user_token))

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "user@example.com"
    assert data["name"] == "Aru"
    assert data["role"] == "customer"
    assert "password_hash" not in data


def test_profile_requires_token(client):
    assert client.get("/api/user").status_code == 401
    assert client.put("/api/user", json={"name": "X"}).status_code == 401


def test_update_name_and_phone(client, user_token):
    response = client.put(
        "/api/user",
        json={"name": "  Aruzhan ", "phone": "+77020000000"},
        headers=auth(user_token),
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Profile updated successfully"
    profile = client.get("/api/user", headers=auth(user_token)).json()
    assert profile["name"] == "Aruzhan"
    assert profile["phone"] == "+77020000000"
    assert profile["email"] == "user@example.com"


def test_email_cannot_be_changed(client, user_token):
    response = client.put("/api/user", json={"email": "new@example.com"}, headers=auth(user_token))

    assert response.status_code == 400


def test_blank_name_rejected(client, user_token):
    response = client.put("/api/user", json={"name": "   "}, headers=auth(user_token))

    assert response.status_code == 400
    assert client.get("/api/user", headers=auth(user_token)).json()["name"] == "Aru"


def test_password_change_requires_current_password(client, user_token):
    response = client.put("/api/user", json={"new_password": "secret2"}, headers=auth(user_token))

    assert response.status_code == 400
    assert response.json() == {"error": "Current password is required to change password"}


def test_wrong_current_password(client, user_token):
    response = client.put(
        "/api/user",
        json={"current_password": "nope", "new_password": "secret2"},
        headers=auth(user_token),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Current password is incorrect"}


def test_password_change(client, user_token):
    response = client.put(
        "/api/user",
        json={"current_password": "secret1", "new_password": "secret2"},
        headers=auth(user_token),
    )
    assert response.status_code == 200

    old = client.post("/api/login", json={"email": "user@example.com", "password": "secret1"})
    new = client.post("/api/login", json={"email": "user@example.com", "password": "secret2"})

    assert old.status_code == 400
    assert new.status_code == 200


def test_password_change_with_client_field_names(client, user_token):
    response = client.put(
        "/api/user",
        json={"currentPassword": "secret1", "newPassword": "secret3"},
        headers=auth(user_token),
    )
    assert response.status_code == 200

    login = client.post("/api/login", json={"email": "user@example.com", "password": "secret3"})
    assert login.status_code == 200


def test_new_password_over_byte_limit_rejected(client, user_token):
    response = client.put(
        "/api/user",
        json={"currentPassword": "secret1", "newPassword": "пароль" * 10},
        headers=auth(user_token),
    )

    assert response.status_code == 400
    login = client.post("/api/login", json={"email": "user@example.com", "password": "secret1"})
    assert login.status_code == 200
