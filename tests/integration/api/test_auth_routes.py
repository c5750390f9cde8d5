import pytest

from src.domain.entities import User, UserStatus
from tests.factories import DEFAULT_PASSWORD, auth_headers


def cookie_value(response, name):
    for header in response.headers.get_list("set-cookie"):
        pair = header.split(";", 1)[0]
        key, _, value = pair.partition("=")
        if key == name:
            return value.strip('"')
    return None


async def login(client, email, password=DEFAULT_PASSWORD, **extra):
    response = await client.post("/api/auth/login", json={"email": email, "password": password, **extra})
    client.cookies.clear()
    return response


@pytest.mark.asyncio
async def test_login_sets_http_only_cookies(client, tenants, fetch):
    user_id = tenants.acme_admin.id

    response = await login(client, "Boss@Acme.example.com")

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "boss@acme.example.com"
    assert "access_token" not in response.json()
    headers = response.headers.get_list("set-cookie")
    assert any(h.startswith("access_token=") and "httponly" in h.lower() for h in headers)
    assert any(h.startswith("refresh_token=") and "httponly" in h.lower() for h in headers)
    stored = await fetch(User, user_id)
    assert stored.status == UserStatus.online
    assert stored.refresh_token_hash is not None


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, tenants):
    response = await login(client, "boss@acme.example.com", password="not-the-password")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_me_from_access_cookie(client, tenants):
    response = await login(client, "manager@acme.example.com")
    access = cookie_value(response, "access_token")

    me = await client.get("/api/me", headers={"Cookie": f"access_token={access}"})

    assert me.status_code == 200
    assert me.json() == {
        "user_id": str(tenants.acme_manager.id),
        "organization_id": str(tenants.acme.id),
        "department_id": str(tenants.operations.id),
        "role": "Manager",
        "is_hod": False,
        "is_platform_admin": False,
    }


@pytest.mark.asyncio
async def test_me_for_platform_admin(client, tenants):
    response = await client.get("/api/me", headers=auth_headers(tenants.platform_admin))

    assert response.json()["is_platform_admin"] is True


@pytest.mark.asyncio
async def test_refresh_rotates_and_rejects_reuse(client, tenants):
    response = await login(client, "worker@acme.example.com")
    refresh_token = cookie_value(response, "refresh_token")

    rotated = await client.post("/api/auth/refresh", headers={"Cookie": f"refresh_token={refresh_token}"})
    client.cookies.clear()
    replayed = await client.post("/api/auth/refresh", headers={"Cookie": f"refresh_token={refresh_token}"})
    client.cookies.clear()

    assert rotated.status_code == 200
    assert cookie_value(rotated, "refresh_token") not in (None, refresh_token)
    assert replayed.status_code == 401


@pytest.mark.asyncio
async def test_refresh_without_cookie(client, tenants):
    response = await client.post("/api/auth/refresh")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_session(client, tenants, fetch):
    user_id = tenants.acme_worker.id
    response = await login(client, "worker@acme.example.com")
    access = cookie_value(response, "access_token")

    logout = await client.post("/api/auth/logout", headers={"Cookie": f"access_token={access}"})
    client.cookies.clear()

    assert logout.status_code == 200
    assert logout.json() == {"message": "Logged out"}
    stored = await fetch(User, user_id)
    assert stored.status == UserStatus.offline
    assert stored.refresh_token_hash is None


@pytest.mark.asyncio
async def test_register_creates_organization_and_signs_in(client, tenants):
    response = await client.post(
        "/api/auth/register",
        json={
            "organization_name": "Initech",
            "organization_email": "hello@initech.example.com",
            "organization_phone": "555-0142",
            "organization_address": "3 Office Park",
            "organization_industry": "Software",
            "department_name": "Engineering",
            "first_name": "Peter",
            "last_name": "Gibbons",
            "email": "peter@initech.example.com",
            "password": "Password123!",
            "position": "Director",
        },
    )
    client.cookies.clear()

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "SuperAdmin"
    assert cookie_value(response, "access_token") is not None


@pytest.mark.asyncio
async def test_register_duplicate_organization(client, tenants):
    response = await client.post(
        "/api/auth/register",
        json={
            "organization_name": "Acme",
            "organization_email": "other@acme.example.com",
            "organization_phone": "555-0100",
            "organization_address": "1 Main Street",
            "organization_industry": "Construction",
            "department_name": "Engineering",
            "first_name": "Dup",
            "last_name": "Licate",
            "email": "dup@acme.example.com",
            "password": "Password123!",
            "position": "Director",
        },
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_ENTRY"


@pytest.mark.asyncio
async def test_presence_status_update(client, tenants):
    headers = auth_headers(tenants.acme_worker)

    online = await client.patch("/api/users/me/status", json={"status": "online"}, headers=headers)
    away = await client.patch("/api/users/me/status", json={"status": "away"}, headers=headers)
    seen = await client.get(f"/api/users/{tenants.acme_worker.id}/status", headers=auth_headers(tenants.acme_admin))

    assert online.status_code == 200
    assert away.json()["previous_status"] == "online"
    assert seen.json()["status"] == "away"


@pytest.mark.asyncio
async def test_offline_user_cannot_go_away(client, tenants):
    response = await client.patch(
        "/api/users/me/status", json={"status": "away"}, headers=auth_headers(tenants.acme_worker)
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"
