"""
Google Sign-In Use Case

Exchanges a Google authorization code and upserts the user.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.oauth_gateway import IIdentityProvider, UpstreamError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole

from .dtos import SignInResponse

logger = logging.getLogger(__name__)


class GoogleSignInUseCase:
    """
    Business Rules:
    - First sign-in creates an unaffiliated employee
    - Emails are stored lowercase
    - Name and picture are refreshed from the profile on every sign-in
    - Deactivated users cannot sign in
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, code: str, redirect_uri: str) -> Result[SignInResponse]:
        try:
            profile = await self.identity_provider.exchange_code(code, redirect_uri)
        except UpstreamError as e:
            logger.error(f"Google sign-in failed: {e}")
            return Return.err(Error("UPSTREAM_FAILURE", str(e)))

        if not profile.email_verified:
            return Return.err(Error("EMAIL_NOT_VERIFIED", "Google account email is not verified"))

        email = profile.email.strip().lower()
        now = datetime.utcnow()

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            is_new_user = user is None

            if user is None:
                user = User(
                    email=email,
                    name=profile.name,
                    image=profile.picture,
                    role=UserRole.employee,
                    last_login_at=now,
                )
                user = await self.uow.users.create(user)
                logger.info(f"Created user {user.id} on first sign-in")
            else:
                if not user.is_active:
                    return Return.err(Error("USER_INACTIVE", "This account has been deactivated"))
                user.name = profile.name or user.name
                user.image = profile.picture or user.image
                user.last_login_at = now
                user = await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                SignInResponse(
                    user_id=str(user.id),
                    email=user.email,
                    is_new_user=is_new_user,
                    needs_onboarding=user.company_id is None,
                )
            )
