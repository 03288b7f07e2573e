"""
Workspace integration use cases (GitHub, Jira, Notion).

Integration state lives in an encrypted cookie, not the database; these use
cases only talk to the provider gateway.
"""

import logging
from typing import Any, Dict, Optional

from src.libs.result import Error, Result, Return
from src.app.services.oauth_gateway import IntegrationSession, IWorkspaceGateway, UpstreamError

from .dtos import (
    AssignJiraIssueCommand,
    CreateJiraIssueCommand,
    IntegrationStatusResponse,
    JiraIssueResponse,
    NotionPermissionsResponse,
    ShareNotionPageCommand,
    ShareNotionPageResponse,
    WorkspaceItemResponse,
    WorkspaceItemsResponse,
)

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("github", "jira", "notion")

# (provider, resource) -> required query parameters
RESOURCES = {
    ("github", "repositories"): (),
    ("github", "issues"): ("owner", "repo"),
    ("jira", "projects"): (),
    ("jira", "issues"): ("project",),
    ("jira", "users"): (),
    ("jira", "assignable-users"): ("project",),
    ("jira", "groups"): (),
    ("notion", "pages"): (),
    ("notion", "members"): (),
}

ITEM_RESOURCES = {("jira", "users"), ("notion", "pages")}


def _unknown_provider(provider: str) -> Error:
    return Error("UNKNOWN_PROVIDER", f"Unsupported integration: {provider}")


def _not_connected(provider: str) -> Error:
    return Error("NOT_CONNECTED", f"{provider} is not connected")


def _upstream_error(e: UpstreamError, action: str, not_found: str = "RESOURCE_NOT_FOUND") -> Error:
    if e.unauthorized:
        return Error("NOT_CONNECTED", f"{e.provider} token was rejected")
    if e.not_found:
        return Error(not_found, f"{action}: not found or no access")
    logger.error(f"{action} failed: {e}")
    return Error("UPSTREAM_FAILURE", str(e))


class ConnectIntegrationUseCase:
    """Exchange an OAuth code for an integration session"""

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self, provider: str, code: str, redirect_uri: str
    ) -> Result[IntegrationSession]:
        if provider not in SUPPORTED_PROVIDERS:
            return Return.err(_unknown_provider(provider))

        try:
            session = await self.gateway.exchange_code(provider, code, redirect_uri)
        except UpstreamError as e:
            logger.error(f"OAuth exchange failed: {e}")
            return Return.err(Error("UPSTREAM_FAILURE", str(e)))

        logger.info(f"{provider} integration connected")
        return Return.ok(session)


class IntegrationStatusUseCase:
    """
    Business Rules:
    - No cookie means not connected
    - A token the provider rejects is reported as revoked so the caller can
      clear the cookie
    """

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self, provider: str, session: Optional[IntegrationSession]
    ) -> Result[IntegrationStatusResponse]:
        if provider not in SUPPORTED_PROVIDERS:
            return Return.err(_unknown_provider(provider))

        if session is None or session.provider != provider:
            return Return.ok(IntegrationStatusResponse(provider=provider, authenticated=False))

        try:
            profile = await self.gateway.verify(session)
        except UpstreamError as e:
            if e.unauthorized:
                return Return.ok(
                    IntegrationStatusResponse(
                        provider=provider, authenticated=False, token_revoked=True
                    )
                )
            logger.error(f"Integration status check failed: {e}")
            return Return.err(Error("UPSTREAM_FAILURE", str(e)))

        return Return.ok(
            IntegrationStatusResponse(
                provider=provider, authenticated=True, user=profile, sites=session.sites
            )
        )


class FetchWorkspaceItemsUseCase:
    """Proxy a list resource from a connected provider"""

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self,
        provider: str,
        resource: str,
        session: Optional[IntegrationSession],
        params: Dict[str, Any],
    ) -> Result[WorkspaceItemsResponse]:
        required = RESOURCES.get((provider, resource))
        if required is None:
            return Return.err(
                Error("UNKNOWN_RESOURCE", f"{provider} does not provide {resource}")
            )

        if session is None or session.provider != provider:
            return Return.err(_not_connected(provider))

        missing = [name for name in required if not params.get(name)]
        if missing:
            return Return.err(
                Error("VALIDATION_ERROR", f"Missing parameters: {', '.join(missing)}")
            )

        try:
            items = await self.gateway.fetch(session, resource, params)
        except UpstreamError as e:
            return Return.err(_upstream_error(e, f"Fetching {provider} {resource}"))

        return Return.ok(
            WorkspaceItemsResponse(
                provider=provider, resource=resource, items=items, total=len(items)
            )
        )


class GetWorkspaceItemUseCase:
    """Proxy a single item (a Jira user, a Notion page with its blocks)"""

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self,
        provider: str,
        resource: str,
        item_id: str,
        session: Optional[IntegrationSession],
        params: Dict[str, Any],
    ) -> Result[WorkspaceItemResponse]:
        if (provider, resource) not in ITEM_RESOURCES:
            return Return.err(
                Error("UNKNOWN_RESOURCE", f"{provider} does not provide {resource} by id")
            )

        if session is None or session.provider != provider:
            return Return.err(_not_connected(provider))

        try:
            item = await self.gateway.fetch_item(session, resource, item_id, params)
        except UpstreamError as e:
            return Return.err(_upstream_error(e, f"Fetching {provider} {resource} {item_id}"))

        return Return.ok(WorkspaceItemResponse(provider=provider, resource=resource, item=item))


def _jira_validation_error(e: UpstreamError) -> Error:
    payload = e.payload if isinstance(e.payload, dict) else {}
    messages = list(payload.get("errorMessages") or [])
    messages += [f"{field}: {message}" for field, message in (payload.get("errors") or {}).items()]
    return Error("VALIDATION_ERROR", "; ".join(messages) or "Jira rejected the request")


class CreateJiraIssueUseCase:
    """
    Business Rules:
    - summary and project_key are required
    - Without an explicit site the first accessible site is used
    - Field errors reported by Jira come back as validation errors
    """

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self, session: Optional[IntegrationSession], command: CreateJiraIssueCommand
    ) -> Result[JiraIssueResponse]:
        if session is None or session.provider != "jira":
            return Return.err(_not_connected("jira"))

        missing = [
            name for name in ("summary", "project_key") if not getattr(command, name).strip()
        ]
        if missing:
            return Return.err(
                Error("VALIDATION_ERROR", f"Missing required fields: {', '.join(missing)}")
            )

        if not command.site_id and not session.sites:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "No Jira site available. Please reconnect your Jira account.",
                )
            )

        try:
            issue = await self.gateway.perform(session, "create_issue", command.model_dump())
        except UpstreamError as e:
            if e.status_code == 400:
                return Return.err(_jira_validation_error(e))
            return Return.err(_upstream_error(e, "Creating Jira issue", "PROJECT_NOT_FOUND"))

        return Return.ok(JiraIssueResponse(issue=issue))


class AssignJiraIssueUseCase:
    """Assign a Jira issue; an empty account id unassigns it"""

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self,
        session: Optional[IntegrationSession],
        issue_key: str,
        command: AssignJiraIssueCommand,
    ) -> Result[JiraIssueResponse]:
        if session is None or session.provider != "jira":
            return Return.err(_not_connected("jira"))

        if not issue_key.strip():
            return Return.err(Error("VALIDATION_ERROR", "Missing required fields: issue_key"))

        if not command.site_id and not session.sites:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "No Jira site available. Please reconnect your Jira account.",
                )
            )

        payload = command.model_dump()
        payload["issue_key"] = issue_key.strip()
        try:
            issue = await self.gateway.perform(session, "assign_issue", payload)
        except UpstreamError as e:
            if e.status_code == 400:
                return Return.err(_jira_validation_error(e))
            return Return.err(_upstream_error(e, f"Assigning Jira issue {issue_key}"))

        return Return.ok(JiraIssueResponse(issue=issue))


class NotionPagePermissionsUseCase:
    """
    Business Rules:
    - Notion exposes no per-page sharing data; the connected integration
      owner is reported with write access once the page is reachable
    """

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self, session: Optional[IntegrationSession], page_id: str
    ) -> Result[NotionPermissionsResponse]:
        if session is None or session.provider != "notion":
            return Return.err(_not_connected("notion"))

        try:
            await self.gateway.fetch_item(session, "pages", page_id, {"include_blocks": False})
        except UpstreamError as e:
            return Return.err(_upstream_error(e, f"Fetching Notion page {page_id}", "PAGE_NOT_FOUND"))

        profile = session.profile or {}
        return Return.ok(
            NotionPermissionsResponse(
                page_id=page_id,
                permissions=[
                    {
                        "id": profile.get("id"),
                        "name": profile.get("name"),
                        "email": profile.get("email"),
                        "permission": "write",
                    }
                ],
                note="Notion's API exposes limited permission data; only the connected account is listed",
            )
        )


class ShareNotionPageUseCase:
    """
    Business Rules:
    - email and permission are required
    - The page must be reachable with the connected token
    - Notion's API cannot share pages, so sharing is acknowledged without an upstream write
    """

    def __init__(self, gateway: IWorkspaceGateway):
        self.gateway = gateway

    async def execute(
        self,
        session: Optional[IntegrationSession],
        page_id: str,
        command: ShareNotionPageCommand,
    ) -> Result[ShareNotionPageResponse]:
        if session is None or session.provider != "notion":
            return Return.err(_not_connected("notion"))

        missing = [name for name in ("email", "permission") if not getattr(command, name).strip()]
        if missing:
            return Return.err(
                Error("VALIDATION_ERROR", f"Missing required fields: {', '.join(missing)}")
            )

        try:
            await self.gateway.fetch_item(session, "pages", page_id, {"include_blocks": False})
        except UpstreamError as e:
            return Return.err(_upstream_error(e, f"Fetching Notion page {page_id}", "PAGE_NOT_FOUND"))

        logger.info(f"Notion page {page_id} share requested for {command.email}")
        return Return.ok(
            ShareNotionPageResponse(
                page_id=page_id,
                shared_with=command.email.strip(),
                permission=command.permission.strip(),
                message="Notion's API does not share pages directly; invite the user from Notion to grant access",
            )
        )
