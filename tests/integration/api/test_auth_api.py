from urllib.parse import parse_qs, urlparse

import pytest

from config import ApplicationConfig
from src.app.services.oauth_gateway import GoogleProfile, IIdentityProvider
from src.depends import get_identity_provider


class FakeGoogle(IIdentityProvider):
    def __init__(self, profile: GoogleProfile):
        self.profile = profile

    def authorize_url(self, state, redirect_uri):
        return f"https://accounts.google.test/auth?state={state}&redirect_uri={redirect_uri}"

    async def exchange_code(self, code, redirect_uri):
        return self.profile


@pytest.fixture
def google(app):
    provider = FakeGoogle(GoogleProfile(email="New.Person@Gmail.com", name="New Person"))
    app.dependency_overrides[get_identity_provider] = lambda: provider
    return provider


async def _login(client):
    response = await client.get("/api/auth/google/login")
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


@pytest.mark.asyncio
async def test_google_sign_in_sets_session_cookie(client, google):
    state = await _login(client)

    response = await client.get(f"/api/auth/google/callback?code=abc&state={state}")

    assert response.status_code == 302
    assert response.headers["location"] == f"{ApplicationConfig.APP_URL}/onboarding"
    assert ApplicationConfig.SESSION_COOKIE_NAME in response.cookies

    response = await client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json()["email"] == "new.person@gmail.com"
    assert response.json()["company_id"] is None

    response = await client.get("/api/user/company-status")
    assert response.json()["needs_onboarding"] is True


@pytest.mark.asyncio
async def test_member_lands_on_dashboard(client, google, employee):
    google.profile = GoogleProfile(email="bob@acme.com", name="Bob")
    state = await _login(client)

    response = await client.get(f"/api/auth/google/callback?code=abc&state={state}")

    assert response.headers["location"] == f"{ApplicationConfig.APP_URL}/dashboard"


@pytest.mark.asyncio
async def test_callback_failures_redirect_with_error(client, google):
    await _login(client)

    response = await client.get("/api/auth/google/callback?code=abc&state=forged")
    assert response.headers["location"].endswith("?error=invalid_state")

    response = await client.get("/api/auth/google/callback?error=access_denied")
    assert response.headers["location"].endswith("?error=access_denied")

    response = await client.get("/api/auth/google/callback?state=x")
    assert response.headers["location"].endswith("?error=missing_code")

    google.profile = GoogleProfile(email="x@gmail.com", email_verified=False)
    state = await _login(client)
    response = await client.get(f"/api/auth/google/callback?code=abc&state={state}")
    assert response.headers["location"].endswith("?error=email_not_verified")


@pytest.mark.asyncio
async def test_logout_clears_session(client, google):
    state = await _login(client)
    await client.get(f"/api/auth/google/callback?code=abc&state={state}")

    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.get("/api/auth/session")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unauthenticated_requests_get_error_envelope(client):
    response = await client.get("/api/onboarding/progress")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Not authenticated", "code": "UNAUTHENTICATED"}

    response = await client.get(
        "/api/dashboard/stats", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_role_gate_on_dashboard(client, employee, hr):
    _, employee_headers = employee
    _, hr_headers = hr

    response = await client.get("/api/dashboard/stats", headers=employee_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "INSUFFICIENT_ROLE"

    response = await client.get("/api/dashboard/stats", headers=hr_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
