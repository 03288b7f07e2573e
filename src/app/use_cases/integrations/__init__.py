"""
Workspace Integration Use Cases
"""

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
from .integration_use_cases import (
    ITEM_RESOURCES,
    RESOURCES,
    SUPPORTED_PROVIDERS,
    AssignJiraIssueUseCase,
    ConnectIntegrationUseCase,
    CreateJiraIssueUseCase,
    FetchWorkspaceItemsUseCase,
    GetWorkspaceItemUseCase,
    IntegrationStatusUseCase,
    NotionPagePermissionsUseCase,
    ShareNotionPageUseCase,
)

__all__ = [
    "ConnectIntegrationUseCase",
    "IntegrationStatusUseCase",
    "FetchWorkspaceItemsUseCase",
    "GetWorkspaceItemUseCase",
    "CreateJiraIssueUseCase",
    "AssignJiraIssueUseCase",
    "NotionPagePermissionsUseCase",
    "ShareNotionPageUseCase",
    "IntegrationStatusResponse",
    "WorkspaceItemsResponse",
    "WorkspaceItemResponse",
    "CreateJiraIssueCommand",
    "AssignJiraIssueCommand",
    "JiraIssueResponse",
    "NotionPermissionsResponse",
    "ShareNotionPageCommand",
    "ShareNotionPageResponse",
    "ITEM_RESOURCES",
    "RESOURCES",
    "SUPPORTED_PROVIDERS",
]
