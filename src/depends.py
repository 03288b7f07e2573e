from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.email_sender import SmtpEmailSender
from src.adapter.services.oauth_gateway import GoogleIdentityProvider, HttpWorkspaceGateway
from src.adapter.services.text_extractor import DocumentTextExtractor
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.email_sender import IEmailSender
from src.app.services.oauth_gateway import IIdentityProvider, IWorkspaceGateway
from src.app.services.onboarding_progress import resolve_completion_policy
from src.app.services.text_extractor import ITextExtractor
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity, ResolveIdentityUseCase
from src.domain.entities import CompletionPolicy
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

COMPLETION_POLICY = resolve_completion_policy(ApplicationConfig.COMPLETION_POLICY)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def _unauthenticated(message: str = "Not authenticated") -> ClientError:
    return ClientError(
        Error("UNAUTHENTICATED", message), status_code=status.HTTP_401_UNAUTHORIZED
    )


async def get_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Identity:
    """
    Resolve the caller from the session cookie or a Bearer token.

    The identity is kept on request.state so later lookups within the same
    request do not hit the database again.

    Raises:
        ClientError: 401 if the token is missing, invalid, expired, or the
            user no longer exists or is inactive
    """
    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    token = (
        credentials.credentials
        if credentials is not None
        else request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)
    )
    if not token:
        raise _unauthenticated()

    payload = verify_jwt(token)
    if payload is None:
        raise _unauthenticated("Invalid or expired session")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise _unauthenticated("Invalid or expired session")

    result = await ResolveIdentityUseCase(uow).execute(user_id)
    if result.is_err():
        raise _unauthenticated(result.error.message)

    request.state.identity = result.value
    return result.value


async def get_http_client():
    async with httpx.AsyncClient(timeout=ApplicationConfig.OAUTH_TIMEOUT_SECONDS) as client:
        yield client


def get_identity_provider(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> IIdentityProvider:
    return GoogleIdentityProvider(
        client,
        ApplicationConfig.GOOGLE_CLIENT_ID,
        ApplicationConfig.GOOGLE_CLIENT_SECRET,
    )


def get_workspace_gateway(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> IWorkspaceGateway:
    return HttpWorkspaceGateway(
        client,
        {
            "github": (ApplicationConfig.GITHUB_CLIENT_ID, ApplicationConfig.GITHUB_CLIENT_SECRET),
            "jira": (ApplicationConfig.ATLASSIAN_CLIENT_ID, ApplicationConfig.ATLASSIAN_CLIENT_SECRET),
            "notion": (ApplicationConfig.NOTION_CLIENT_ID, ApplicationConfig.NOTION_CLIENT_SECRET),
        },
    )


def get_email_sender() -> IEmailSender:
    return SmtpEmailSender.from_config(ApplicationConfig)


def get_text_extractor() -> ITextExtractor:
    return DocumentTextExtractor()


def get_completion_policy() -> CompletionPolicy:
    return COMPLETION_POLICY
