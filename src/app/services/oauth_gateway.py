from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class UpstreamError(Exception):
    """A third-party provider call failed"""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"{provider}: {message}")

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class GoogleProfile(BaseModel):
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    email_verified: bool = True


class IntegrationSession(BaseModel):
    """State kept in the encrypted integration cookie"""

    provider: str
    access_token: str
    refresh_token: Optional[str] = None
    profile: Dict[str, Any] = {}
    sites: List[Dict[str, Any]] = []


class IIdentityProvider(ABC):
    """Sign-in provider for application sessions"""

    @abstractmethod
    def authorize_url(self, state: str, redirect_uri: str) -> str:
        """Consent page URL"""
        pass

    @abstractmethod
    async def exchange_code(self, code: str, redirect_uri: str) -> GoogleProfile:
        """Exchange an authorization code and fetch the signed-in profile"""
        pass


class IWorkspaceGateway(ABC):
    """OAuth and API proxy for workspace integrations"""

    @abstractmethod
    def authorize_url(self, provider: str, state: str, redirect_uri: str) -> str:
        """Consent page URL for a provider"""
        pass

    @abstractmethod
    async def exchange_code(
        self, provider: str, code: str, redirect_uri: str
    ) -> IntegrationSession:
        """Exchange an authorization code and fetch the connected profile"""
        pass

    @abstractmethod
    async def verify(self, session: IntegrationSession) -> Dict[str, Any]:
        """Re-fetch the profile; raises UpstreamError when the token is rejected"""
        pass

    @abstractmethod
    async def fetch(
        self, session: IntegrationSession, resource: str, params: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Fetch a list resource (repositories, issues, projects, users, pages, members)"""
        pass

    @abstractmethod
    async def fetch_item(
        self,
        session: IntegrationSession,
        resource: str,
        item_id: str,
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Fetch one item (a Jira user, a Notion page with its blocks)"""
        pass

    @abstractmethod
    async def perform(
        self, session: IntegrationSession, action: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Run a write action (create_issue, assign_issue)"""
        pass
