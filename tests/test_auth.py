import pytest

from tests.conftest import auth


def test_health_and_security_headers(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
    assert res.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


def test_register_login_me(client):
    res = client.post("/api/auth/register", json={"email": "Alice@Example.com", "password": "secret123"})
    assert res.status_code == 201
    user = res.get_json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["total_points"] == 0
    assert user["last_solved_date"] is None

    res = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert res.status_code == 200
    token = res.get_json()["token"]

    res = client.get("/api/auth/me", headers=auth(token))
    assert res.status_code == 200
    assert res.get_json()["user"]["id"] == user["id"]


def test_register_validation(client):
    res = client.post("/api/auth/register", json={"email": "a@example.com"})
    assert res.status_code == 400
    assert res.get_json() == {"message": "email and password are required", "error": "validation"}

    res = client.post("/api/auth/register", json={"email": "a@example.com", "password": "123"})
    assert res.status_code == 400
    assert res.get_json()["error"] == "validation"

    assert client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"}).status_code == 201
    res = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    assert res.status_code == 409
    assert res.get_json() == {"message": "email already in use", "error": "conflict"}


@pytest.mark.parametrize(
    "body",
    [
        {"email": 123, "password": "secret123"},
        {"email": "a@example.com", "password": ["secret123"]},
        {"email": "a@example.com", "password": "secret123", "display_name": 7},
        {"email": "a@example.com", "password": "secret123", "display_name": "n" * 101},
        {"email": "a" * 250 + "@example.com", "password": "secret123"},
    ],
)
def test_register_rejects_malformed_fields(client, body):
    res = client.post("/api/auth/register", json=body)
    assert res.status_code == 400
    assert res.get_json()["error"] == "validation"


def test_bad_login(client, register):
    register("bob@example.com", password="right-password")
    res = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "wrong-password"})
    assert res.status_code == 401
    assert res.get_json() == {"message": "invalid credentials", "error": "unauthenticated"}

    res = client.post("/api/auth/login", json={"email": "bob@example.com"})
    assert res.status_code == 400
    assert res.get_json()["error"] == "validation"


def test_missing_and_invalid_token(client):
    res = client.get("/api/challenges")
    assert res.status_code == 401
    assert res.get_json()["error"] == "unauthenticated"

    res = client.get("/api/challenges", headers=auth("not-a-jwt"))
    assert res.status_code == 401
