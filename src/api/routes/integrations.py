import logging
import secrets
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from config import ApplicationConfig
from src.api.error import http_error
from src.api.utils.cookies import (
    INTEGRATION_COOKIE_MAX_AGE,
    OAUTH_STATE_MAX_AGE,
    TokenEncryption,
    clear_cookie,
    session_cookie_name,
    set_http_only_cookie,
    state_cookie_name,
)
from src.app.services.oauth_gateway import IWorkspaceGateway, UpstreamError
from src.app.use_cases.integrations import (
    SUPPORTED_PROVIDERS,
    AssignJiraIssueCommand,
    AssignJiraIssueUseCase,
    ConnectIntegrationUseCase,
    CreateJiraIssueCommand,
    CreateJiraIssueUseCase,
    FetchWorkspaceItemsUseCase,
    GetWorkspaceItemUseCase,
    IntegrationStatusResponse,
    IntegrationStatusUseCase,
    JiraIssueResponse,
    NotionPagePermissionsUseCase,
    NotionPermissionsResponse,
    ShareNotionPageCommand,
    ShareNotionPageResponse,
    ShareNotionPageUseCase,
    WorkspaceItemResponse,
    WorkspaceItemsResponse,
)
from src.depends import get_workspace_gateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations", tags=["Integrations"])


def get_token_encryption() -> TokenEncryption:
    return TokenEncryption()


def _app_redirect(**params: str) -> RedirectResponse:
    url = f"{ApplicationConfig.APP_URL.rstrip('/')}/?{urlencode(params)}"
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/login")
async def integration_login(
    provider: str,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
):
    """Redirect to the provider's consent page"""
    if provider not in SUPPORTED_PROVIDERS:
        return _app_redirect(error="unknown_provider")

    state = secrets.token_urlsafe(24)
    redirect_uri = str(request.url_for("integration_callback", provider=provider))
    try:
        authorize_url = gateway.authorize_url(provider, state, redirect_uri)
    except UpstreamError as e:
        logger.error(f"Cannot start {provider} OAuth: {e}")
        return _app_redirect(error=f"{provider}_not_configured")

    response = RedirectResponse(authorize_url, status_code=status.HTTP_302_FOUND)
    set_http_only_cookie(response, state_cookie_name(provider), state, OAUTH_STATE_MAX_AGE)
    return response


@router.get("/{provider}/callback", name="integration_callback")
async def integration_callback(
    provider: str,
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """
    OAuth callback for a workspace provider

    Stores the connected session in an encrypted HTTP-only cookie and
    redirects with ?success=<provider>_connected, or ?error=<code>.
    """
    if provider not in SUPPORTED_PROVIDERS:
        return _app_redirect(error="unknown_provider")
    if error:
        return _app_redirect(error=f"{provider}_access_denied")
    if not code:
        return _app_redirect(error="missing_code")

    expected_state = request.cookies.get(state_cookie_name(provider))
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        return _app_redirect(error="invalid_state")

    redirect_uri = str(request.url_for("integration_callback", provider=provider))
    result = await ConnectIntegrationUseCase(gateway).execute(provider, code, redirect_uri)

    if result.is_err():
        response = _app_redirect(error=f"{provider}_oauth_failed")
        clear_cookie(response, state_cookie_name(provider))
        return response

    response = _app_redirect(success=f"{provider}_connected")
    set_http_only_cookie(
        response,
        session_cookie_name(provider),
        encryption.encrypt_session(result.value),
        INTEGRATION_COOKIE_MAX_AGE,
    )
    clear_cookie(response, state_cookie_name(provider))
    return response


@router.get(
    "/{provider}/status",
    status_code=status.HTTP_200_OK,
    response_model=IntegrationStatusResponse,
)
async def integration_status(
    provider: str,
    request: Request,
    response: Response,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """Whether the provider is connected; a revoked token clears the cookie"""
    session = encryption.decrypt_session(request.cookies.get(session_cookie_name(provider)))

    result = await IntegrationStatusUseCase(gateway).execute(provider, session)
    if result.is_err():
        raise http_error(result.error)

    if result.value.token_revoked:
        clear_cookie(response, session_cookie_name(provider))
    return result.value


@router.post("/{provider}/disconnect", status_code=status.HTTP_200_OK)
async def integration_disconnect(provider: str, response: Response):
    clear_cookie(response, session_cookie_name(provider))
    return {"success": True, "provider": provider}


def _session(provider: str, request: Request, encryption: TokenEncryption):
    return encryption.decrypt_session(request.cookies.get(session_cookie_name(provider)))


@router.post(
    "/jira/issues",
    status_code=status.HTTP_201_CREATED,
    response_model=JiraIssueResponse,
)
async def create_jira_issue(
    command: CreateJiraIssueCommand,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """
    Create an issue in a Jira project

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (missing fields, no site, Jira field errors)
        - 401 Unauthorized: NOT_CONNECTED
        - 404 Not Found: PROJECT_NOT_FOUND
        - 502 Bad Gateway: UPSTREAM_FAILURE
    """
    session = _session("jira", request, encryption)

    result = await CreateJiraIssueUseCase(gateway).execute(session, command)
    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.put(
    "/jira/issues/{issue_key}/assignee",
    status_code=status.HTTP_200_OK,
    response_model=JiraIssueResponse,
)
async def assign_jira_issue(
    issue_key: str,
    command: AssignJiraIssueCommand,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """Assign a Jira issue to an account, or unassign it when account_id is empty"""
    session = _session("jira", request, encryption)

    result = await AssignJiraIssueUseCase(gateway).execute(session, issue_key, command)
    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/notion/pages/{page_id}/permissions",
    status_code=status.HTTP_200_OK,
    response_model=NotionPermissionsResponse,
)
async def notion_page_permissions(
    page_id: str,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    session = _session("notion", request, encryption)

    result = await NotionPagePermissionsUseCase(gateway).execute(session, page_id)
    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.post(
    "/notion/pages/{page_id}/share",
    status_code=status.HTTP_200_OK,
    response_model=ShareNotionPageResponse,
)
async def share_notion_page(
    page_id: str,
    command: ShareNotionPageCommand,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """
    Acknowledge a share request for a reachable Notion page

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: NOT_CONNECTED
        - 404 Not Found: PAGE_NOT_FOUND
    """
    session = _session("notion", request, encryption)

    result = await ShareNotionPageUseCase(gateway).execute(session, page_id, command)
    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/{provider}/{resource}",
    status_code=status.HTTP_200_OK,
    response_model=WorkspaceItemsResponse,
)
async def workspace_items(
    provider: str,
    resource: str,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """
    Proxy a provider list resource

    github/repositories, github/issues?owner&repo, jira/projects,
    jira/issues?project, jira/users, jira/assignable-users?project,
    jira/groups, notion/pages, notion/members

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: NOT_CONNECTED
        - 404 Not Found: UNKNOWN_RESOURCE
        - 502 Bad Gateway: UPSTREAM_FAILURE
    """
    session = encryption.decrypt_session(request.cookies.get(session_cookie_name(provider)))

    use_case = FetchWorkspaceItemsUseCase(gateway)
    result = await use_case.execute(provider, resource, session, dict(request.query_params))

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/{provider}/{resource}/{item_id}",
    status_code=status.HTTP_200_OK,
    response_model=WorkspaceItemResponse,
)
async def workspace_item(
    provider: str,
    resource: str,
    item_id: str,
    request: Request,
    gateway: IWorkspaceGateway = Depends(get_workspace_gateway),
    encryption: TokenEncryption = Depends(get_token_encryption),
):
    """
    Proxy a single provider item: jira/users/{account_id}, notion/pages/{page_id}

    Raises:
        - 401 Unauthorized: NOT_CONNECTED
        - 404 Not Found: UNKNOWN_RESOURCE, RESOURCE_NOT_FOUND
        - 502 Bad Gateway: UPSTREAM_FAILURE
    """
    session = _session(provider, request, encryption)

    use_case = GetWorkspaceItemUseCase(gateway)
    result = await use_case.execute(
        provider, resource, item_id, session, dict(request.query_params)
    )

    if result.is_err():
        raise http_error(result.error)

    return result.value
