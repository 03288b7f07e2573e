from urllib.parse import parse_qs, urlparse

import pytest

from config import ApplicationConfig


@pytest.fixture
def github_api(provider_routes):
    provider_routes.update(
        {
            ("POST", "https://github.com/login/oauth/access_token"): (
                200,
                {"access_token": "gho_test", "token_type": "bearer"},
            ),
            ("GET", "https://api.github.com/user"): (
                200,
                {"id": 1, "login": "octo", "name": "Octo", "email": "octo@acme.com"},
            ),
            ("GET", "https://api.github.com/user/repos"): (
                200,
                [{"id": 9, "name": "api", "full_name": "acme/api", "private": True}],
            ),
        }
    )
    return provider_routes


async def _connect(client, provider="github"):
    response = await client.get(f"/api/integrations/{provider}/login")
    assert response.status_code == 302
    query = parse_qs(urlparse(response.headers["location"]).query)
    assert query["redirect_uri"][0].endswith(f"/api/integrations/{provider}/callback")
    return await client.get(
        f"/api/integrations/{provider}/callback?code=c0de&state={query['state'][0]}"
    )


@pytest.mark.asyncio
async def test_connect_github_and_list_repositories(client, github_api):
    response = await _connect(client)

    assert response.status_code == 302
    assert response.headers["location"] == f"{ApplicationConfig.APP_URL}/?success=github_connected"
    cookie = response.cookies["github_session"]
    assert "gho_test" not in cookie

    response = await client.get("/api/integrations/github/status")
    assert response.json()["authenticated"] is True
    assert response.json()["user"]["login"] == "octo"

    response = await client.get("/api/integrations/github/repositories")
    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["full_name"] == "acme/api"

    response = await client.post("/api/integrations/github/disconnect")
    assert response.json() == {"success": True, "provider": "github"}

    response = await client.get("/api/integrations/github/status")
    assert response.json()["authenticated"] is False


@pytest.mark.asyncio
async def test_revoked_token_clears_cookie(client, github_api):
    await _connect(client)
    github_api[("GET", "https://api.github.com/user")] = (401, {"message": "Bad credentials"})

    response = await client.get("/api/integrations/github/status")

    assert response.json()["token_revoked"] is True
    assert "github_session" not in client.cookies


@pytest.mark.asyncio
async def test_failed_exchange_redirects_with_error(client, provider_routes):
    provider_routes[("POST", "https://github.com/login/oauth/access_token")] = (
        200,
        {"error": "bad_verification_code"},
    )

    response = await _connect(client)

    assert response.headers["location"].endswith("?error=github_oauth_failed")
    assert "github_session" not in response.cookies


@pytest.mark.asyncio
async def test_callback_guards(client):
    response = await client.get("/api/integrations/gitlab/callback?code=x&state=y")
    assert response.headers["location"].endswith("?error=unknown_provider")

    response = await client.get("/api/integrations/jira/callback?error=access_denied")
    assert response.headers["location"].endswith("?error=jira_access_denied")

    response = await client.get("/api/integrations/notion/callback?code=x&state=y")
    assert response.headers["location"].endswith("?error=invalid_state")


@pytest.mark.asyncio
async def test_resources_require_connection(client):
    response = await client.get("/api/integrations/jira/projects")
    assert response.status_code == 401
    assert response.json()["code"] == "NOT_CONNECTED"

    response = await client.get("/api/integrations/notion/databases")
    assert response.status_code == 404
    assert response.json()["code"] == "UNKNOWN_RESOURCE"


@pytest.mark.asyncio
async def test_tampered_cookie_is_not_connected(client):
    client.cookies.set("github_session", "garbage")

    response = await client.get("/api/integrations/github/status")

    assert response.json()["authenticated"] is False


JIRA_API = "https://api.atlassian.com/ex/jira/site-1/rest/api/3"


@pytest.fixture
def jira_api(provider_routes):
    provider_routes.update(
        {
            ("POST", "https://auth.atlassian.com/oauth/token"): (
                200,
                {"access_token": "jat", "refresh_token": "jrt"},
            ),
            ("GET", "https://api.atlassian.com/me"): (
                200,
                {"account_id": "acc-1", "name": "Helen", "email": "hr@acme.com"},
            ),
            ("GET", "https://api.atlassian.com/oauth/token/accessible-resources"): (
                200,
                [{"id": "site-1", "name": "acme", "url": "https://acme.atlassian.net"}],
            ),
        }
    )
    return provider_routes


@pytest.fixture
def notion_api(provider_routes):
    provider_routes.update(
        {
            ("POST", "https://api.notion.com/v1/oauth/token"): (
                200,
                {
                    "access_token": "ntn",
                    "workspace_name": "Acme",
                    "owner": {"user": {"id": "u1", "name": "Ada", "person": {"email": "ada@acme.com"}}},
                },
            ),
            ("GET", "https://api.notion.com/v1/pages/p1"): (200, {"id": "p1", "object": "page"}),
            ("GET", "https://api.notion.com/v1/blocks/p1/children"): (
                200,
                {"results": [{"id": "b1", "type": "paragraph"}]},
            ),
        }
    )
    return provider_routes


@pytest.mark.asyncio
async def test_create_and_assign_jira_issue(client, jira_api):
    await _connect(client, "jira")
    jira_api[("POST", f"{JIRA_API}/issue")] = (201, {"id": "10001", "key": "ENG-7", "self": "x"})
    jira_api[("PUT", f"{JIRA_API}/issue/ENG-7/assignee")] = (204, None)

    response = await client.post(
        "/api/integrations/jira/issues", json={"project_key": "eng", "summary": "Laptop setup"}
    )
    assert response.status_code == 201
    assert response.json()["issue"]["key"] == "ENG-7"

    response = await client.put(
        "/api/integrations/jira/issues/ENG-7/assignee", json={"account_id": "acc-2"}
    )
    assert response.status_code == 200
    assert response.json()["issue"] == {"issue_key": "ENG-7", "account_id": "acc-2"}


@pytest.mark.asyncio
async def test_create_jira_issue_errors(client, jira_api):
    response = await client.post(
        "/api/integrations/jira/issues", json={"project_key": "ENG", "summary": "x"}
    )
    assert response.status_code == 401

    await _connect(client, "jira")

    response = await client.post("/api/integrations/jira/issues", json={"project_key": "ENG"})
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields: summary"

    jira_api[("POST", f"{JIRA_API}/issue")] = (
        400,
        {"errorMessages": ["Project ENG does not exist"], "errors": {}},
    )
    response = await client.post(
        "/api/integrations/jira/issues", json={"project_key": "ENG", "summary": "x"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Project ENG does not exist"

    jira_api[("POST", f"{JIRA_API}/issue")] = (500, {"errorMessages": ["boom"]})
    response = await client.post(
        "/api/integrations/jira/issues", json={"project_key": "ENG", "summary": "x"}
    )
    assert response.status_code == 502
    assert response.json()["code"] == "UPSTREAM_FAILURE"


@pytest.mark.asyncio
async def test_jira_user_lookup(client, jira_api):
    await _connect(client, "jira")
    jira_api[("GET", f"{JIRA_API}/user")] = (
        200,
        {"accountId": "acc-2", "displayName": "Bob", "active": True},
    )

    response = await client.get("/api/integrations/jira/users/acc-2")
    assert response.status_code == 200
    assert response.json()["item"]["display_name"] == "Bob"

    response = await client.get("/api/integrations/jira/projects/ENG")
    assert response.status_code == 404
    assert response.json()["code"] == "UNKNOWN_RESOURCE"


@pytest.mark.asyncio
async def test_notion_page_detail_permissions_and_share(client, notion_api):
    await _connect(client, "notion")

    response = await client.get("/api/integrations/notion/pages/p1")
    assert response.status_code == 200
    assert [b["id"] for b in response.json()["item"]["blocks"]] == ["b1"]

    response = await client.get("/api/integrations/notion/pages/p1/permissions")
    assert response.status_code == 200
    assert response.json()["permissions"][0]["email"] == "ada@acme.com"

    response = await client.post(
        "/api/integrations/notion/pages/p1/share",
        json={"email": "bob@acme.com", "permission": "read"},
    )
    assert response.status_code == 200
    assert response.json()["shared_with"] == "bob@acme.com"

    response = await client.post(
        "/api/integrations/notion/pages/gone/share",
        json={"email": "bob@acme.com", "permission": "read"},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "PAGE_NOT_FOUND"
