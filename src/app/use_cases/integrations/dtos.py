"""
Integration Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class IntegrationStatusResponse(BaseModel):
    provider: str
    authenticated: bool
    user: Optional[Dict[str, Any]] = None
    sites: List[Dict[str, Any]] = []
    token_revoked: bool = False


class WorkspaceItemsResponse(BaseModel):
    provider: str
    resource: str
    items: List[Dict[str, Any]]
    total: int


class WorkspaceItemResponse(BaseModel):
    provider: str
    resource: str
    item: Dict[str, Any]


class CreateJiraIssueCommand(BaseModel):
    site_id: Optional[str] = None
    project_key: str = ""
    summary: str = ""
    description: Optional[str] = None
    issue_type: str = "Task"


class AssignJiraIssueCommand(BaseModel):
    site_id: Optional[str] = None
    account_id: Optional[str] = None


class JiraIssueResponse(BaseModel):
    success: bool = True
    issue: Dict[str, Any]


class NotionPermissionsResponse(BaseModel):
    page_id: str
    permissions: List[Dict[str, Any]]
    note: str


class ShareNotionPageCommand(BaseModel):
    email: str = ""
    permission: str = ""


class ShareNotionPageResponse(BaseModel):
    success: bool = True
    page_id: str
    shared_with: str
    permission: str
    message: str
