import pytest

from src.app.services.oauth_gateway import IntegrationSession, IWorkspaceGateway, UpstreamError
from src.app.use_cases.integrations import (
    AssignJiraIssueCommand,
    AssignJiraIssueUseCase,
    ConnectIntegrationUseCase,
    CreateJiraIssueCommand,
    CreateJiraIssueUseCase,
    FetchWorkspaceItemsUseCase,
    GetWorkspaceItemUseCase,
    IntegrationStatusUseCase,
    NotionPagePermissionsUseCase,
    ShareNotionPageCommand,
    ShareNotionPageUseCase,
)


class FakeGateway(IWorkspaceGateway):
    def __init__(self, error=None, items=None):
        self.error = error
        self.items = items or []
        self.fetched = []
        self.performed = []

    def authorize_url(self, provider, state, redirect_uri):
        return f"https://{provider}.example/authorize?state={state}"

    async def exchange_code(self, provider, code, redirect_uri):
        if self.error:
            raise self.error
        return IntegrationSession(provider=provider, access_token=f"token-{code}", profile={"login": "octo"})

    async def verify(self, session):
        if self.error:
            raise self.error
        return session.profile

    async def fetch(self, session, resource, params):
        if self.error:
            raise self.error
        self.fetched.append((resource, params))
        return self.items

    async def fetch_item(self, session, resource, item_id, params):
        if self.error:
            raise self.error
        self.fetched.append((resource, item_id, params))
        return {"id": item_id}

    async def perform(self, session, action, payload):
        if self.error:
            raise self.error
        self.performed.append((action, payload))
        return {"key": "ENG-7"}


@pytest.fixture
def github_session():
    return IntegrationSession(provider="github", access_token="gho_abc", profile={"login": "octo"})


@pytest.mark.asyncio
async def test_connect_exchanges_code():
    result = await ConnectIntegrationUseCase(FakeGateway()).execute(
        "github", "abc", "https://api.acme.com/cb"
    )

    assert result.is_ok()
    assert result.value.access_token == "token-abc"


@pytest.mark.asyncio
async def test_connect_unknown_provider_and_upstream_failure():
    result = await ConnectIntegrationUseCase(FakeGateway()).execute("gitlab", "abc", "cb")
    assert result.error.code == "UNKNOWN_PROVIDER"

    gateway = FakeGateway(error=UpstreamError("github", "bad_verification_code", 400))
    result = await ConnectIntegrationUseCase(gateway).execute("github", "abc", "cb")
    assert result.error.code == "UPSTREAM_FAILURE"


@pytest.mark.asyncio
async def test_status(github_session):
    use_case = IntegrationStatusUseCase(FakeGateway())

    result = await use_case.execute("github", github_session)
    assert result.value.authenticated is True
    assert result.value.user == {"login": "octo"}

    result = await use_case.execute("github", None)
    assert result.value.authenticated is False

    result = await use_case.execute("jira", github_session)
    assert result.value.authenticated is False


@pytest.mark.asyncio
async def test_status_reports_revoked_token(github_session):
    gateway = FakeGateway(error=UpstreamError("github", "Bad credentials", 401))

    result = await IntegrationStatusUseCase(gateway).execute("github", github_session)

    assert result.is_ok()
    assert result.value.authenticated is False
    assert result.value.token_revoked is True


@pytest.mark.asyncio
async def test_status_propagates_other_failures(github_session):
    gateway = FakeGateway(error=UpstreamError("github", "Server error", 503))

    result = await IntegrationStatusUseCase(gateway).execute("github", github_session)

    assert result.error.code == "UPSTREAM_FAILURE"


@pytest.mark.asyncio
async def test_fetch_items(github_session):
    gateway = FakeGateway(items=[{"id": 1, "title": "Fix login"}])

    result = await FetchWorkspaceItemsUseCase(gateway).execute(
        "github", "issues", github_session, {"owner": "acme", "repo": "api"}
    )

    assert result.is_ok()
    assert result.value.total == 1
    assert gateway.fetched == [("issues", {"owner": "acme", "repo": "api"})]


@pytest.mark.asyncio
async def test_fetch_errors(github_session):
    use_case = FetchWorkspaceItemsUseCase(FakeGateway())

    result = await use_case.execute("github", "wikis", github_session, {})
    assert result.error.code == "UNKNOWN_RESOURCE"

    result = await use_case.execute("github", "repositories", None, {})
    assert result.error.code == "NOT_CONNECTED"

    result = await use_case.execute("github", "issues", github_session, {"owner": "acme"})
    assert result.error.code == "VALIDATION_ERROR"
    assert "repo" in result.error.message

    revoked = FetchWorkspaceItemsUseCase(FakeGateway(error=UpstreamError("github", "x", 401)))
    result = await revoked.execute("github", "repositories", github_session, {})
    assert result.error.code == "NOT_CONNECTED"


@pytest.fixture
def jira_session():
    return IntegrationSession(provider="jira", access_token="jat", sites=[{"id": "site-1"}])


@pytest.fixture
def notion_session():
    return IntegrationSession(
        provider="notion",
        access_token="ntn",
        profile={"id": "u1", "name": "Ada", "email": "ada@acme.com"},
    )


@pytest.mark.asyncio
async def test_get_item(notion_session):
    gateway = FakeGateway()

    result = await GetWorkspaceItemUseCase(gateway).execute(
        "notion", "pages", "p1", notion_session, {}
    )

    assert result.value.item == {"id": "p1"}
    assert gateway.fetched == [("pages", "p1", {})]

    result = await GetWorkspaceItemUseCase(gateway).execute(
        "github", "repositories", "r1", notion_session, {}
    )
    assert result.error.code == "UNKNOWN_RESOURCE"

    missing = GetWorkspaceItemUseCase(FakeGateway(error=UpstreamError("notion", "x", 404)))
    result = await missing.execute("notion", "pages", "p2", notion_session, {})
    assert result.error.code == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_jira_issue(jira_session):
    gateway = FakeGateway()

    result = await CreateJiraIssueUseCase(gateway).execute(
        jira_session, CreateJiraIssueCommand(project_key="ENG", summary="Laptop setup")
    )

    assert result.is_ok()
    assert result.value.issue == {"key": "ENG-7"}
    action, payload = gateway.performed[0]
    assert action == "create_issue"
    assert payload["issue_type"] == "Task"


@pytest.mark.asyncio
async def test_create_jira_issue_validation(jira_session):
    gateway = FakeGateway()
    use_case = CreateJiraIssueUseCase(gateway)

    result = await use_case.execute(jira_session, CreateJiraIssueCommand(project_key=" "))
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "Missing required fields: summary, project_key"

    siteless = IntegrationSession(provider="jira", access_token="jat")
    result = await use_case.execute(
        siteless, CreateJiraIssueCommand(project_key="ENG", summary="x")
    )
    assert result.error.message == "No Jira site available. Please reconnect your Jira account."

    result = await use_case.execute(None, CreateJiraIssueCommand(project_key="ENG", summary="x"))
    assert result.error.code == "NOT_CONNECTED"
    assert gateway.performed == []


@pytest.mark.asyncio
async def test_create_jira_issue_reports_field_errors(jira_session):
    rejected = UpstreamError(
        "jira",
        "bad request",
        400,
        {"errorMessages": [], "errors": {"issuetype": "Specify a valid issue type"}},
    )

    result = await CreateJiraIssueUseCase(FakeGateway(error=rejected)).execute(
        jira_session, CreateJiraIssueCommand(project_key="ENG", summary="x", issue_type="Epic")
    )

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "issuetype: Specify a valid issue type"

    failing = CreateJiraIssueUseCase(FakeGateway(error=UpstreamError("jira", "down", 503)))
    result = await failing.execute(
        jira_session, CreateJiraIssueCommand(project_key="ENG", summary="x")
    )
    assert result.error.code == "UPSTREAM_FAILURE"


@pytest.mark.asyncio
async def test_assign_jira_issue(jira_session):
    gateway = FakeGateway()

    result = await AssignJiraIssueUseCase(gateway).execute(
        jira_session, " ENG-7 ", AssignJiraIssueCommand(account_id="acc-1")
    )

    assert result.is_ok()
    assert gateway.performed == [
        ("assign_issue", {"site_id": None, "account_id": "acc-1", "issue_key": "ENG-7"})
    ]

    result = await AssignJiraIssueUseCase(gateway).execute(
        jira_session, " ", AssignJiraIssueCommand()
    )
    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_notion_permissions_list_connected_account(notion_session):
    gateway = FakeGateway()

    result = await NotionPagePermissionsUseCase(gateway).execute(notion_session, "p1")

    assert result.value.permissions == [
        {"id": "u1", "name": "Ada", "email": "ada@acme.com", "permission": "write"}
    ]
    assert gateway.fetched == [("pages", "p1", {"include_blocks": False})]

    missing = NotionPagePermissionsUseCase(FakeGateway(error=UpstreamError("notion", "x", 404)))
    result = await missing.execute(notion_session, "p2")
    assert result.error.code == "PAGE_NOT_FOUND"


@pytest.mark.asyncio
async def test_share_notion_page(notion_session):
    use_case = ShareNotionPageUseCase(FakeGateway())

    result = await use_case.execute(
        notion_session, "p1", ShareNotionPageCommand(email="bob@acme.com", permission="read")
    )
    assert result.value.shared_with == "bob@acme.com"
    assert result.value.permission == "read"

    result = await use_case.execute(notion_session, "p1", ShareNotionPageCommand(email="bob@acme.com"))
    assert result.error.code == "VALIDATION_ERROR"
    assert "permission" in result.error.message

    revoked = ShareNotionPageUseCase(FakeGateway(error=UpstreamError("notion", "x", 401)))
    result = await revoked.execute(
        notion_session, "p1", ShareNotionPageCommand(email="bob@acme.com", permission="read")
    )
    assert result.error.code == "NOT_CONNECTED"
