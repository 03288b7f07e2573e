from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.use_cases.auth import Identity
from src.domain.entities import (
    Company,
    Invitation,
    InvitationStatus,
    OnboardingRecord,
    OnboardingStatus,
    User,
    UserRole,
)

REPOSITORY_METHODS = {
    "users": [
        "get_by_id",
        "get_by_email",
        "get_by_ids",
        "count_by_company",
        "create",
        "update",
    ],
    "companies": ["get_by_id", "get_by_domain", "search", "create", "update"],
    "invitations": [
        "get_by_id",
        "get_pending_by_company_and_email",
        "get_latest_pending_by_email",
        "list_by_company",
        "count_pending_by_company",
        "create",
        "update",
        "mark_accepted",
        "delete",
    ],
    "onboarding": [
        "get_record",
        "list_records_by_company",
        "count_records_by_status",
        "create_record",
        "update_record",
        "list_tasks",
        "list_policies",
        "add_checklist",
        "update_task",
        "update_policy",
        "list_documents",
        "list_documents_by_company",
        "count_documents_by_status",
        "get_document",
        "get_document_by_type",
        "create_document",
        "update_document",
        "delete_document",
    ],
    "files": ["store", "get", "read", "list_files", "get_derived", "update", "delete"],
}


def _returns_argument(value, *args, **kwargs):
    return value


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock())
        setattr(uow, repo_name, repo)

    # Writes hand back what they were given, like the SQL repositories do after refresh
    for repo_name, method in [
        ("users", "create"),
        ("users", "update"),
        ("companies", "create"),
        ("companies", "update"),
        ("invitations", "create"),
        ("invitations", "update"),
        ("onboarding", "create_record"),
        ("onboarding", "update_record"),
        ("onboarding", "update_task"),
        ("onboarding", "update_policy"),
        ("onboarding", "create_document"),
        ("onboarding", "update_document"),
        ("files", "update"),
    ]:
        getattr(getattr(uow, repo_name), method).side_effect = _returns_argument

    uow.files.store.side_effect = _returns_argument
    uow.onboarding.list_tasks.return_value = []
    uow.onboarding.list_policies.return_value = []
    uow.onboarding.list_documents.return_value = []
    uow.invitations.mark_accepted.return_value = True
    return uow


@pytest.fixture
def company():
    return Company(id=uuid4(), name="Acme Corp", domain="acme.com", contact_email="hr@acme.com")


def make_identity(role: str = "employee", company_id=None, email: str = "bob@acme.com", **kwargs):
    return Identity(
        user_id=kwargs.pop("user_id", uuid4()),
        email=email,
        name=kwargs.pop("name", "Bob"),
        role=role,
        company_id=company_id,
        **kwargs,
    )


@pytest.fixture
def hr_identity(company):
    return make_identity("hr_manager", company.id, email="hr@acme.com", name="Helen HR")


@pytest.fixture
def employee_identity(company):
    return make_identity("employee", company.id)


@pytest.fixture
def unaffiliated_identity():
    return make_identity("employee", None)


@pytest.fixture
def identity_factory():
    return make_identity


@pytest.fixture
def pending_invitation(company):
    now = datetime.utcnow()
    return Invitation(
        id=uuid4(),
        company_id=company.id,
        email="bob@acme.com",
        name="Bob",
        role=UserRole.employee,
        department="Engineering",
        position="Developer",
        invited_by=uuid4(),
        status=InvitationStatus.pending,
        invited_at=now,
        expires_at=now + timedelta(days=7),
    )


@pytest.fixture
def in_progress_record(company, employee_identity):
    return OnboardingRecord(
        id=uuid4(),
        employee_id=employee_identity.user_id,
        company_id=company.id,
        status=OnboardingStatus.in_progress,
        started_at=datetime.utcnow(),
    )


@pytest.fixture
def user_factory():
    def build(email="bob@acme.com", company_id=None, role=UserRole.employee, **kwargs):
        return User(id=kwargs.pop("id", uuid4()), email=email, company_id=company_id, role=role, **kwargs)

    return build
