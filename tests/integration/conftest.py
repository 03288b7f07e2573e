from typing import List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.oauth_gateway import HttpWorkspaceGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.api.utils.jwt import create_session_token
from src.app.services.email_sender import DocumentReviewedEmail, IEmailSender, InvitationEmail
from src.depends import get_email_sender, get_session, get_unit_of_work, get_workspace_gateway
from src.domain.entities import Company, User, UserRole

WORKSPACE_CREDENTIALS = {
    "github": ("gh-id", "gh-secret"),
    "jira": ("jira-id", "jira-secret"),
    "notion": ("notion-id", "notion-secret"),
}


class RecordingEmailSender(IEmailSender):
    def __init__(self):
        self.invitations: List[InvitationEmail] = []
        self.reviews: List[DocumentReviewedEmail] = []

    def send_invitation(self, message: InvitationEmail) -> bool:
        self.invitations.append(message)
        return True

    def send_document_reviewed(self, message: DocumentReviewedEmail) -> bool:
        self.reviews.append(message)
        return True


def auth_headers(user_id, email: str) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user_id, email)}"}


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def provider_routes():
    """(method, url) -> (status code, JSON body) served to the workspace gateway"""
    return {}


@pytest_asyncio.fixture
async def app(session_factory, email_sender, provider_routes):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    def provider_handler(request: httpx.Request):
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        status_code, body = provider_routes.get((request.method, url), (404, {"message": "Not Found"}))
        return httpx.Response(status_code, json=body)

    provider_client = httpx.AsyncClient(transport=httpx.MockTransport(provider_handler))

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_workspace_gateway] = lambda: HttpWorkspaceGateway(
        provider_client, WORKSPACE_CREDENTIALS
    )

    yield app

    await provider_client.aclose()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_company(session_factory):
    async def make(name: str = "Acme Corp", domain: str = "acme.com", **kwargs):
        async with session_factory() as session:
            company = Company(name=name, domain=domain, contact_email=f"hr@{domain}", **kwargs)
            session.add(company)
            await session.commit()
            return company.id

    return make


@pytest.fixture
def make_user(session_factory):
    """Insert a user and return (user_id, auth headers)"""

    async def make(
        email: str,
        company_id=None,
        role: UserRole = UserRole.employee,
        name: Optional[str] = None,
    ):
        async with session_factory() as session:
            user = User(email=email, name=name, company_id=company_id, role=role)
            session.add(user)
            await session.commit()
            return user.id, auth_headers(user.id, email)

    return make


@pytest_asyncio.fixture
async def acme(make_company):
    return await make_company()


@pytest_asyncio.fixture
async def hr(acme, make_user):
    return await make_user("hr@acme.com", acme, UserRole.hr_manager, "Helen HR")


@pytest_asyncio.fixture
async def employee(acme, make_user):
    return await make_user("bob@acme.com", acme, UserRole.employee, "Bob")
