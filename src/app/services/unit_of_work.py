from abc import ABC, abstractmethod

from src.app.repositories.company_repository import ICompanyRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.onboarding_repository import IOnboardingRepository
from src.app.repositories.stored_file_repository import IStoredFileRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    companies: ICompanyRepository
    invitations: IInvitationRepository
    onboarding: IOnboardingRepository
    files: IStoredFileRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
