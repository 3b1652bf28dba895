from conftest import PASSWORD, bearer, signup


def test_signup_without_referral(client):
    body = signup(client, "new@portal.io", name="New Student", mobile="9876543210")

    assert body["token_type"] == "bearer"
    assert body["redirect_to"] == "/dashboard"
    user = body["user"]
    assert user["email"] == "new@portal.io"
    assert user["mobile"] == "9876543210"
    assert user["is_admin"] is False
    assert user["referred_by"] is None


def test_signup_rejects_duplicate_email(client):
    signup(client, "dup@portal.io")
    resp = client.post("/auth/signup", json={"email": "DUP@portal.io", "password": PASSWORD, "name": "Again"})
    assert resp.status_code == 409


def test_signup_validates_mobile_and_password(client):
    resp = client.post(
        "/auth/signup",
        json={"email": "m@portal.io", "password": PASSWORD, "name": "M", "mobile": "12345"},
    )
    assert resp.status_code == 422
    resp = client.post("/auth/signup", json={"email": "p@portal.io", "password": "short", "name": "P"})
    assert resp.status_code == 422


def test_admin_emails_become_admins(client):
    assert signup(client, "admin@portal.io")["user"]["is_admin"] is True


def test_login_and_me(client):
    signup(client, "login@portal.io", name="Login User")
    resp = client.post("/auth/login", data={"username": "login@portal.io", "password": PASSWORD})
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    me = client.get("/auth/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["name"] == "Login User"


def test_login_with_wrong_password(client):
    signup(client, "login@portal.io")
    resp = client.post("/auth/login", data={"username": "login@portal.io", "password": "wrong-password"})
    assert resp.status_code == 401


def test_set_admin(client, admin_headers):
    signup(client, "promote@portal.io")
    resp = client.post("/admin/set-admin", json={"email": "promote@portal.io"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["is_admin"] is True

    resp = client.post("/admin/set-admin", json={"email": "ghost@portal.io"}, headers=admin_headers)
    assert resp.status_code == 404
