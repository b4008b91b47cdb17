from datetime import timedelta

from dental_visits.security_utils import create_jwt_token

TEST_PASSWORD = "password123"


def test_login_returns_token_and_user(client, user):
    response = client.post("/api/auth/login", json={"username": "admin", "password": TEST_PASSWORD})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"] == {"id": user.id, "username": "admin", "role": "admin", "hygienistId": None}

    verify = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {data['token']}"})
    assert verify.status_code == 200
    assert verify.json()["data"]["username"] == "admin"


def test_login_with_wrong_password(client, user):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_login_with_unknown_user_uses_same_error(client, user):
    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": TEST_PASSWORD})
    wrong = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

    assert unknown.status_code == 401
    assert unknown.json() == wrong.json()


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"username": "admin"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_logout(client):
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json()["data"]["message"]


def test_missing_token(client):
    response = client.get("/api/patients")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_invalid_and_expired_tokens(client, user):
    expired = create_jwt_token(
        {"sub": str(user.id), "username": "admin", "role": "admin"},
        expires_delta=timedelta(minutes=-5),
    )
    for token in ("not-a-jwt", expired):
        response = client.get("/api/patients", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"


def test_verify_for_deleted_account(client):
    token = create_jwt_token({"sub": "424242", "username": "gone", "role": "user"})

    response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


def test_health_endpoints(client):
    assert client.get("/health").json()["status"] == "OK"

    body = client.get("/api/health").json()
    assert body["status"] == "OK"
    assert body["version"]
    assert body["environment"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
