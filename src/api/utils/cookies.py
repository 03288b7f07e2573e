"""
Cookie helpers: HTTP-only cookie defaults and the encrypted integration session.
"""

import base64
import hashlib
import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from fastapi import Response
from pydantic import ValidationError

from config import ApplicationConfig
from src.app.services.oauth_gateway import IntegrationSession

logger = logging.getLogger(__name__)

INTEGRATION_COOKIE_MAX_AGE = 7 * 24 * 60 * 60
OAUTH_STATE_MAX_AGE = 10 * 60


def session_cookie_name(provider: str) -> str:
    return f"{provider}_session"


def state_cookie_name(provider: str) -> str:
    return f"{provider}_oauth_state"


def set_http_only_cookie(response: Response, name: str, value: str, max_age: int):
    response.set_cookie(
        key=name,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=ApplicationConfig.is_production(),
        samesite="lax",
        path="/",
    )


def clear_cookie(response: Response, name: str):
    response.delete_cookie(key=name, path="/")


class TokenEncryption:
    """Fernet encryption for integration sessions stored client-side"""

    def __init__(self, key: Optional[str] = None):
        key = key or ApplicationConfig.INTEGRATION_COOKIE_KEY
        if not key:
            # Derived from the session secret so a bare dev config still works
            digest = hashlib.sha256(ApplicationConfig.JWT_SECRET.encode()).digest()
            key = base64.urlsafe_b64encode(digest).decode()
        self.fernet = Fernet(key.encode() if isinstance(key, str) else key)

    def encrypt_session(self, session: IntegrationSession) -> str:
        return self.fernet.encrypt(session.model_dump_json().encode()).decode()

    def decrypt_session(self, value: Optional[str]) -> Optional[IntegrationSession]:
        """None for a missing, tampered or stale cookie"""
        if not value:
            return None
        try:
            payload = self.fernet.decrypt(value.encode(), ttl=INTEGRATION_COOKIE_MAX_AGE)
            return IntegrationSession.model_validate_json(payload)
        except (InvalidToken, ValidationError):
            logger.info("Ignoring unreadable integration cookie")
            return None
