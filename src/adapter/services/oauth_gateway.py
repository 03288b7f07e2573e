"""
OAuth token exchange and API proxy calls over httpx.

Google backs application sign-in; GitHub, Jira (Atlassian) and Notion back
the workspace integrations. Every provider failure is raised as
UpstreamError and never retried.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote, urlencode

import httpx

from src.app.services.oauth_gateway import (
    GoogleProfile,
    IIdentityProvider,
    IntegrationSession,
    IWorkspaceGateway,
    UpstreamError,
)

logger = logging.getLogger(__name__)

NOTION_VERSION = "2022-06-28"

OAUTH_CONFIGS = {
    "google": {
        "authorize_url": "https://accounts.google.com/o/oauth2/v2/auth",
        "token_url": "https://oauth2.googleapis.com/token",
        "scopes": ["openid", "email", "profile"],
    },
    "github": {
        "authorize_url": "https://github.com/login/oauth/authorize",
        "token_url": "https://github.com/login/oauth/access_token",
        "scopes": ["repo", "user:email"],
    },
    "jira": {
        "authorize_url": "https://auth.atlassian.com/authorize",
        "token_url": "https://auth.atlassian.com/oauth/token",
        "scopes": ["read:jira-user", "read:jira-work", "write:jira-work", "offline_access"],
    },
    "notion": {
        "authorize_url": "https://api.notion.com/v1/oauth/authorize",
        "token_url": "https://api.notion.com/v1/oauth/token",
        "scopes": [],
    },
}

GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GITHUB_API = "https://api.github.com"
ATLASSIAN_API = "https://api.atlassian.com"
NOTION_API = "https://api.notion.com/v1"


def get_oauth_config(provider: str) -> Optional[dict]:
    """Get OAuth configuration for a provider."""
    return OAUTH_CONFIGS.get(provider.lower())


async def _request(
    client: httpx.AsyncClient, provider: str, method: str, url: str, **kwargs
) -> Any:
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        raise UpstreamError(provider, f"{method} {url} failed: {e}") from e

    if response.status_code >= 400:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        raise UpstreamError(
            provider,
            f"{method} {url} returned {response.status_code}: {response.text[:200]}",
            response.status_code,
            payload,
        )

    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(provider, f"{method} {url} returned invalid JSON") from e


def _bearer(token: str, **extra: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}", "Accept": "application/json", **extra}


def _token_from(provider: str, payload: Any) -> Tuple[str, Optional[str]]:
    if not isinstance(payload, dict) or payload.get("error") or not payload.get("access_token"):
        detail = payload.get("error_description") or payload.get("error") if isinstance(payload, dict) else None
        raise UpstreamError(provider, f"token exchange failed: {detail or 'no access token'}")
    return payload["access_token"], payload.get("refresh_token")


class GoogleIdentityProvider(IIdentityProvider):
    def __init__(self, client: httpx.AsyncClient, client_id: str, client_secret: str):
        self.client = client
        self.client_id = client_id
        self.client_secret = client_secret

    def authorize_url(self, state: str, redirect_uri: str) -> str:
        config = OAUTH_CONFIGS["google"]
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(config["scopes"]),
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{config['authorize_url']}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> GoogleProfile:
        payload = await _request(
            self.client,
            "google",
            "POST",
            OAUTH_CONFIGS["google"]["token_url"],
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        access_token, _ = _token_from("google", payload)

        info = await _request(
            self.client, "google", "GET", GOOGLE_USERINFO_URL, headers=_bearer(access_token)
        )
        if not info.get("email"):
            raise UpstreamError("google", "profile has no email")
        return GoogleProfile(
            email=info["email"],
            name=info.get("name"),
            picture=info.get("picture"),
            email_verified=bool(info.get("email_verified", True)),
        )


class HttpWorkspaceGateway(IWorkspaceGateway):
    """GitHub, Jira and Notion over one shared AsyncClient"""

    def __init__(self, client: httpx.AsyncClient, credentials: Dict[str, Tuple[str, str]]):
        self.client = client
        self.credentials = credentials

    def _credentials(self, provider: str) -> Tuple[str, str]:
        client_id, client_secret = self.credentials.get(provider, ("", ""))
        if not client_id or not client_secret:
            raise UpstreamError(provider, "OAuth client is not configured")
        return client_id, client_secret

    def authorize_url(self, provider: str, state: str, redirect_uri: str) -> str:
        config = get_oauth_config(provider)
        if config is None:
            raise UpstreamError(provider, "unknown provider")
        client_id, _ = self._credentials(provider)

        params = {"client_id": client_id, "redirect_uri": redirect_uri, "state": state}
        if provider == "github":
            params["scope"] = " ".join(config["scopes"])
        elif provider == "jira":
            params.update(
                audience="api.atlassian.com",
                scope=" ".join(config["scopes"]),
                response_type="code",
                prompt="consent",
            )
        elif provider == "notion":
            params.update(response_type="code", owner="user")
        return f"{config['authorize_url']}?{urlencode(params)}"

    # Token exchange

    async def exchange_code(
        self, provider: str, code: str, redirect_uri: str
    ) -> IntegrationSession:
        if provider == "github":
            return await self._exchange_github(code, redirect_uri)
        if provider == "jira":
            return await self._exchange_jira(code, redirect_uri)
        if provider == "notion":
            return await self._exchange_notion(code, redirect_uri)
        raise UpstreamError(provider, "unknown provider")

    async def _exchange_github(self, code: str, redirect_uri: str) -> IntegrationSession:
        client_id, client_secret = self._credentials("github")
        payload = await _request(
            self.client,
            "github",
            "POST",
            OAUTH_CONFIGS["github"]["token_url"],
            json={
                "client_id": client_id,
                "client_secret": client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
            headers={"Accept": "application/json"},
        )
        access_token, refresh_token = _token_from("github", payload)
        session = IntegrationSession(
            provider="github", access_token=access_token, refresh_token=refresh_token
        )
        session.profile = await self.verify(session)
        return session

    async def _exchange_jira(self, code: str, redirect_uri: str) -> IntegrationSession:
        client_id, client_secret = self._credentials("jira")
        payload = await _request(
            self.client,
            "jira",
            "POST",
            OAUTH_CONFIGS["jira"]["token_url"],
            json={
                "grant_type": "authorization_code",
                "client_id": client_id,
                "client_secret": client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
        )
        access_token, refresh_token = _token_from("jira", payload)
        session = IntegrationSession(
            provider="jira", access_token=access_token, refresh_token=refresh_token
        )
        session.profile = await self.verify(session)

        resources = await _request(
            self.client,
            "jira",
            "GET",
            f"{ATLASSIAN_API}/oauth/token/accessible-resources",
            headers=_bearer(access_token),
        )
        session.sites = [
            {"id": r.get("id"), "name": r.get("name"), "url": r.get("url")}
            for r in resources or []
        ]
        return session

    async def _exchange_notion(self, code: str, redirect_uri: str) -> IntegrationSession:
        client_id, client_secret = self._credentials("notion")
        payload = await _request(
            self.client,
            "notion",
            "POST",
            OAUTH_CONFIGS["notion"]["token_url"],
            json={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
            },
            auth=(client_id, client_secret),
            headers={"Notion-Version": NOTION_VERSION},
        )
        access_token, _ = _token_from("notion", payload)
        owner = (payload.get("owner") or {}).get("user") or {}
        return IntegrationSession(
            provider="notion",
            access_token=access_token,
            profile={
                "id": owner.get("id"),
                "name": owner.get("name"),
                "email": (owner.get("person") or {}).get("email"),
                "avatar_url": owner.get("avatar_url"),
                "workspace_id": payload.get("workspace_id"),
                "workspace_name": payload.get("workspace_name"),
                "bot_id": payload.get("bot_id"),
            },
        )

    # Profile

    async def verify(self, session: IntegrationSession) -> Dict[str, Any]:
        token = session.access_token
        if session.provider == "github":
            user = await _request(
                self.client, "github", "GET", f"{GITHUB_API}/user", headers=_bearer(token)
            )
            email = user.get("email")
            if not email:
                try:
                    emails = await _request(
                        self.client,
                        "github",
                        "GET",
                        f"{GITHUB_API}/user/emails",
                        headers=_bearer(token),
                    )
                except UpstreamError as e:
                    logger.warning(f"GitHub emails unavailable: {e}")
                    emails = []
                primary = next((e for e in emails if e.get("primary") and e.get("verified")), None)
                email = primary.get("email") if primary else None
            return {
                "id": user.get("id"),
                "login": user.get("login"),
                "name": user.get("name"),
                "email": email,
                "avatar_url": user.get("avatar_url"),
            }

        if session.provider == "jira":
            me = await _request(
                self.client, "jira", "GET", f"{ATLASSIAN_API}/me", headers=_bearer(token)
            )
            return {
                "account_id": me.get("account_id"),
                "name": me.get("name"),
                "email": me.get("email"),
                "picture": me.get("picture"),
            }

        if session.provider == "notion":
            await _request(
                self.client,
                "notion",
                "GET",
                f"{NOTION_API}/users/me",
                headers=_bearer(token, **{"Notion-Version": NOTION_VERSION}),
            )
            return session.profile

        raise UpstreamError(session.provider, "unknown provider")

    # Resources

    async def fetch(
        self, session: IntegrationSession, resource: str, params: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        handler = {
            ("github", "repositories"): self._github_repositories,
            ("github", "issues"): self._github_issues,
            ("jira", "projects"): self._jira_projects,
            ("jira", "issues"): self._jira_issues,
            ("jira", "users"): self._jira_users,
            ("jira", "assignable-users"): self._jira_assignable_users,
            ("jira", "groups"): self._jira_groups,
            ("notion", "pages"): self._notion_pages,
            ("notion", "members"): self._notion_members,
        }.get((session.provider, resource))
        if handler is None:
            raise UpstreamError(session.provider, f"unknown resource {resource}")
        return await handler(session, params)

    async def _github_repositories(self, session, params) -> List[Dict[str, Any]]:
        repos = await _request(
            self.client,
            "github",
            "GET",
            f"{GITHUB_API}/user/repos",
            params={"sort": "updated", "per_page": 50},
            headers=_bearer(session.access_token),
        )
        return [
            {
                "id": r.get("id"),
                "name": r.get("name"),
                "full_name": r.get("full_name"),
                "private": r.get("private"),
                "html_url": r.get("html_url"),
                "description": r.get("description"),
                "updated_at": r.get("updated_at"),
            }
            for r in repos
        ]

    async def _github_issues(self, session, params) -> List[Dict[str, Any]]:
        owner, repo = quote(params["owner"], safe=""), quote(params["repo"], safe="")
        issues = await _request(
            self.client,
            "github",
            "GET",
            f"{GITHUB_API}/repos/{owner}/{repo}/issues",
            params={"state": params.get("state") or "open", "per_page": 50},
            headers=_bearer(session.access_token),
        )
        return [
            {
                "number": i.get("number"),
                "title": i.get("title"),
                "state": i.get("state"),
                "html_url": i.get("html_url"),
                "user": (i.get("user") or {}).get("login"),
                "created_at": i.get("created_at"),
            }
            for i in issues
            if "pull_request" not in i
        ]

    def _jira_site(self, session: IntegrationSession, params) -> str:
        site_id = params.get("site_id") or (session.sites[0]["id"] if session.sites else None)
        if not site_id:
            raise UpstreamError("jira", "no accessible Jira site")
        return quote(str(site_id), safe="")

    async def _jira_projects(self, session, params) -> List[Dict[str, Any]]:
        site_id = self._jira_site(session, params)
        projects = await _request(
            self.client,
            "jira",
            "GET",
            f"{ATLASSIAN_API}/ex/jira/{site_id}/rest/api/3/project",
            headers=_bearer(session.access_token),
        )
        return [
            {"id": p.get("id"), "key": p.get("key"), "name": p.get("name")}
            for p in projects
        ]

    async def _jira_issues(self, session, params) -> List[Dict[str, Any]]:
        site_id = self._jira_site(session, params)
        project = str(params["project"]).replace('"', "")
        payload = await _request(
            self.client,
            "jira",
            "GET",
            f"{ATLASSIAN_API}/ex/jira/{site_id}/rest/api/3/search/jql",
            params={
                "jql": f'project = "{project}" ORDER BY updated DESC',
                "maxResults": 50,
                "fields": "summary,status,assignee,updated",
            },
            headers=_bearer(session.access_token),
        )
        issues = []
        for issue in payload.get("issues", []):
            fields = issue.get("fields") or {}
            issues.append(
                {
                    "id": issue.get("id"),
                    "key": issue.get("key"),
                    "summary": fields.get("summary"),
                    "status": (fields.get("status") or {}).get("name"),
                    "assignee": (fields.get("assignee") or {}).get("displayName"),
                    "updated": fields.get("updated"),
                }
            )
        return issues

    async def _notion_pages(self, session, params) -> List[Dict[str, Any]]:
        payload = await _request(
            self.client,
            "notion",
            "POST",
            f"{NOTION_API}/search",
            json={"filter": {"property": "object", "value": "page"}, "page_size": 50},
            headers=_bearer(session.access_token, **{"Notion-Version": NOTION_VERSION}),
        )
        pages = []
        for page in payload.get("results", []):
            title = ""
            for prop in (page.get("properties") or {}).values():
                if prop.get("type") == "title":
                    title = "".join(t.get("plain_text", "") for t in prop.get("title", []))
                    break
            pages.append(
                {
                    "id": page.get("id"),
                    "title": title or "Untitled",
                    "url": page.get("url"),
                    "last_edited_time": page.get("last_edited_time"),
                }
            )
        return pages

    def _notion_headers(self, session: IntegrationSession) -> Dict[str, str]:
        return _bearer(session.access_token, **{"Notion-Version": NOTION_VERSION})

    async def _notion_members(self, session, params) -> List[Dict[str, Any]]:
        payload = await _request(
            self.client,
            "notion",
            "GET",
            f"{NOTION_API}/users",
            params={"page_size": 100},
            headers=self._notion_headers(session),
        )
        return [
            {
                "id": u.get("id"),
                "name": u.get("name") or (u.get("person") or {}).get("email") or "Unknown User",
                "email": (u.get("person") or {}).get("email"),
                "type": u.get("type") or "person",
                "avatar_url": u.get("avatar_url"),
            }
            for u in payload.get("results", [])
        ]

    # Jira users

    def _jira_api(self, session: IntegrationSession, params) -> str:
        return f"{ATLASSIAN_API}/ex/jira/{self._jira_site(session, params)}/rest/api/3"

    @staticmethod
    def _jira_user(user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "account_id": user.get("accountId"),
            "display_name": user.get("displayName"),
            "email": user.get("emailAddress"),
            "active": user.get("active"),
            "avatar_url": (user.get("avatarUrls") or {}).get("48x48"),
        }

    async def _jira_users(self, session, params) -> List[Dict[str, Any]]:
        query = {"maxResults": params.get("max_results") or 50}
        if params.get("query"):
            query["query"] = params["query"]
        if params.get("project"):
            query["project"] = params["project"]
        users = await _request(
            self.client,
            "jira",
            "GET",
            f"{self._jira_api(session, params)}/users/search",
            params=query,
            headers=_bearer(session.access_token),
        )
        return [self._jira_user(u) for u in users]

    async def _jira_assignable_users(self, session, params) -> List[Dict[str, Any]]:
        users = await _request(
            self.client,
            "jira",
            "GET",
            f"{self._jira_api(session, params)}/user/assignable/search",
            params={"project": params["project"]},
            headers=_bearer(session.access_token),
        )
        return [self._jira_user(u) for u in users]

    async def _jira_groups(self, session, params) -> List[Dict[str, Any]]:
        query = {"maxResults": params.get("max_results") or 50}
        if params.get("query"):
            query["query"] = params["query"]
        payload = await _request(
            self.client,
            "jira",
            "GET",
            f"{self._jira_api(session, params)}/groups/picker",
            params=query,
            headers=_bearer(session.access_token),
        )
        return [
            {"name": g.get("name"), "group_id": g.get("groupId")}
            for g in payload.get("groups", [])
        ]

    # Single items

    async def fetch_item(
        self,
        session: IntegrationSession,
        resource: str,
        item_id: str,
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        if (session.provider, resource) == ("jira", "users"):
            user = await _request(
                self.client,
                "jira",
                "GET",
                f"{self._jira_api(session, params)}/user",
                params={"accountId": item_id},
                headers=_bearer(session.access_token),
            )
            return self._jira_user(user)

        if (session.provider, resource) == ("notion", "pages"):
            page_id = quote(item_id, safe="")
            page = await _request(
                self.client,
                "notion",
                "GET",
                f"{NOTION_API}/pages/{page_id}",
                headers=self._notion_headers(session),
            )
            if params.get("include_blocks") is False:
                return {"page": page, "blocks": []}
            blocks = await _request(
                self.client,
                "notion",
                "GET",
                f"{NOTION_API}/blocks/{page_id}/children",
                params={"page_size": 100},
                headers=self._notion_headers(session),
            )
            return {"page": page, "blocks": blocks.get("results", [])}

        raise UpstreamError(session.provider, f"unknown resource {resource}")

    # Write actions

    async def perform(
        self, session: IntegrationSession, action: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        if (session.provider, action) == ("jira", "create_issue"):
            return await self._jira_create_issue(session, payload)
        if (session.provider, action) == ("jira", "assign_issue"):
            return await self._jira_assign_issue(session, payload)
        raise UpstreamError(session.provider, f"unknown action {action}")

    async def _jira_create_issue(self, session, payload) -> Dict[str, Any]:
        summary = payload["summary"].strip()
        description = (payload.get("description") or "").strip() or summary
        body = {
            "fields": {
                "project": {"key": payload["project_key"].strip().upper()},
                "summary": summary,
                "description": {
                    "type": "doc",
                    "version": 1,
                    "content": [
                        {"type": "paragraph", "content": [{"type": "text", "text": description}]}
                    ],
                },
                "issuetype": {"name": payload.get("issue_type") or "Task"},
            }
        }
        issue = await _request(
            self.client,
            "jira",
            "POST",
            f"{self._jira_api(session, payload)}/issue",
            json=body,
            headers=_bearer(session.access_token),
        )
        logger.info(f"Created Jira issue {issue.get('key')}")
        return {"id": issue.get("id"), "key": issue.get("key"), "self": issue.get("self")}

    async def _jira_assign_issue(self, session, payload) -> Dict[str, Any]:
        issue_key = quote(payload["issue_key"], safe="")
        account_id = payload.get("account_id") or None
        await _request(
            self.client,
            "jira",
            "PUT",
            f"{self._jira_api(session, payload)}/issue/{issue_key}/assignee",
            json={"accountId": account_id},
            headers=_bearer(session.access_token),
        )
        return {"issue_key": payload["issue_key"], "account_id": account_id}
