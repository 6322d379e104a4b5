import pytest
from httpx import AsyncClient

from campaign_portal.server.core.config import settings

pytestmark = pytest.mark.asyncio

COOKIE = settings.session.cookie_name


async def test_login_sets_http_only_cookie(client: AsyncClient, users, password):
    response = await client.post("/api/v1/auth/login", json={"email": "Admin@Campaign-Portal.org", "password": password})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "admin@campaign-portal.org"
    assert body["data"]["role"] == "admin"
    assert body["data"]["last_login_at"] is not None
    assert "password_hash" not in body["data"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


async def test_login_then_me(client: AsyncClient, users, password):
    await client.post("/api/v1/auth/login", json={"email": "moderator@campaign-portal.org", "password": password})
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "moderator"


@pytest.mark.parametrize(
    "email,secret",
    [("admin@campaign-portal.org", "wrong-password"), ("nobody@campaign-portal.org", "correct-horse-battery")],
)
async def test_bad_credentials(client: AsyncClient, users, email, secret):
    response = await client.post("/api/v1/auth/login", json={"email": email, "password": secret})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid email or password"}
    assert "set-cookie" not in response.headers


async def test_inactive_user_cannot_sign_in(client: AsyncClient, session, users, password):
    users["moderator"].is_active = False
    await session.commit()
    response = await client.post("/api/v1/auth/login", json={"email": "moderator@campaign-portal.org", "password": password})
    assert response.status_code == 401


async def test_malformed_login_body(client: AsyncClient):
    response = await client.post("/api/v1/auth/login", json={"email": "not-an-email", "password": ""})
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


async def test_me_requires_session(client: AsyncClient):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


async def test_me_with_tampered_cookie(client: AsyncClient):
    client.cookies.set(COOKIE, "not.a.jwt")
    assert (await client.get("/api/v1/auth/me")).status_code == 401


async def test_logout_clears_cookie(staff_client: AsyncClient):
    response = await staff_client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Signed out"
    assert f'{COOKIE}=""' in response.headers["set-cookie"] or "Max-Age=0" in response.headers["set-cookie"]
