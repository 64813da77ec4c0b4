import asyncio
import time

import httpx
from jose import jwt

from food_ordering.core.config import settings
from food_ordering.core.security import create_access_token, decode_access_token
from food_ordering.main import app
from food_ordering.models.user import User
from food_ordering.services import auth_service

SIGNUP = {
    "email": "Thor@Shield.com",
    "password": "member123",
    "name": "Thor",
    "country": "india",
}


def signup(client, **overrides):
    return client.post("/auth/signup", json={**SIGNUP, **overrides})


def test_signup_returns_token_and_user(client, db):
    response = signup(client)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    user = body["data"]["user"]
    assert user["email"] == "thor@shield.com"
    assert user["role"] == "member"
    assert user["country"] == "india"
    assert "hashedPassword" not in user and "password" not in user

    stored = db.query(User).filter(User.email == "thor@shield.com").one()
    assert stored.hashed_password != "member123"


def test_signup_then_login_yields_same_claims(client):
    created = signup(client, role="manager").json()["data"]
    response = client.post("/auth/login", json={"email": "thor@shield.com", "password": "member123"})
    assert response.status_code == 200
    data = response.json()["data"]

    claims = decode_access_token(data["access_token"])
    assert claims["sub"] == str(created["user"]["id"])
    assert claims["role"] == "manager"
    assert claims["country"] == "india"
    assert claims["email"] == "thor@shield.com"


def test_duplicate_email_conflicts_case_insensitively(client):
    assert signup(client).status_code == 201
    response = signup(client, email="THOR@shield.COM", password="x", name="", country="mars")
    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "User with this email already exists"}


def test_signup_validation_errors(client):
    cases = [
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"password": "12345"}, "Password must be at least 6 characters long"),
        ({"name": "   "}, "Name is required"),
        ({"country": "france"}, "Country must be india or america"),
        ({"role": "owner"}, "Role must be admin, manager, or member"),
    ]
    for overrides, message in cases:
        response = signup(client, **overrides)
        assert response.status_code == 400, overrides
        assert response.json() == {"success": False, "message": message}


def test_login_uses_one_message_for_unknown_email_and_bad_password(client):
    signup(client)
    unknown = client.post("/auth/login", json={"email": "nobody@shield.com", "password": "member123"})
    wrong = client.post("/auth/login", json={"email": "thor@shield.com", "password": "wrong-pass"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["message"] == wrong.json()["message"] == "Invalid email or password"


def test_login_requires_credentials(client):
    response = client.post("/auth/login", json={"email": "thor@shield.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_verify_token_echoes_claims(client, india_manager, headers):
    response = client.post("/auth/verify-token", headers=headers(india_manager))
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Token is valid",
        "data": {
            "userId": india_manager.id,
            "email": india_manager.email,
            "role": "manager",
            "country": "india",
        },
    }


def test_missing_or_invalid_token_is_unauthorized(client):
    assert client.post("/auth/verify-token").status_code == 401
    response = client.get("/orders", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_token_signed_with_other_key_is_rejected(client, india_member):
    forged = jwt.encode({"sub": str(india_member.id), "role": "admin"}, "other-key", algorithm=settings.ALGORITHM)
    response = client.get("/orders", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


def test_token_for_deleted_user_is_rejected(client, db, make_user):
    user = make_user()
    token = create_access_token({"sub": str(user.id), "email": user.email, "role": "member", "country": "india"})
    db.delete(user)
    db.commit()
    response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_with_non_numeric_subject_is_unauthorized(client):
    token = create_access_token({"sub": "nick.fury", "email": "nick.fury@shield.com",
                                 "role": "admin", "country": "america"})
    response = client.post("/auth/verify-token", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid or expired token"}


def test_slow_login_does_not_stall_other_requests(client, make_user, monkeypatch):
    email = make_user().email
    check_password = auth_service.verify_password

    def slow_verify(plain_password, hashed_password):
        time.sleep(0.5)
        return check_password(plain_password, hashed_password)

    monkeypatch.setattr(auth_service, "verify_password", slow_verify)

    async def login_and_ping():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            login = asyncio.create_task(
                http.post("/auth/login", json={"email": email, "password": "secret123"})
            )
            await asyncio.sleep(0.1)
            started = time.monotonic()
            health = await http.get("/health")
            elapsed = time.monotonic() - started
            login_finished_first = login.done()
            return health, elapsed, login_finished_first, await login

    health, elapsed, login_finished_first, login = asyncio.run(login_and_ping())
    assert health.status_code == 200
    assert elapsed < 0.3
    assert not login_finished_first
    assert login.status_code == 200
