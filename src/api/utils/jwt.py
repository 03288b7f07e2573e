from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_session_token(
    user_id: UUID, email: str, ttl_hours: Optional[int] = None
) -> str:
    """
    Create the signed session token set after sign-in

    Args:
        user_id: User UUID
        email: User email (lowercase)
        ttl_hours: Lifetime, SESSION_TTL_HOURS by default

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    hours = ttl_hours if ttl_hours is not None else ApplicationConfig.SESSION_TTL_HOURS
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=hours),
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
