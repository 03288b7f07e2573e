import logging
import secrets
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from config import ApplicationConfig
from src.api.utils.cookies import (
    OAUTH_STATE_MAX_AGE,
    clear_cookie,
    set_http_only_cookie,
    state_cookie_name,
)
from src.api.utils.jwt import create_session_token
from src.app.services.oauth_gateway import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import GoogleSignInUseCase, Identity
from src.depends import get_identity, get_identity_provider, get_unit_of_work

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

GOOGLE_STATE_COOKIE = state_cookie_name("google")


def _app_redirect(path: str = "/", **params: str) -> RedirectResponse:
    url = f"{ApplicationConfig.APP_URL.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/google/login")
async def google_login(
    request: Request,
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """Redirect to Google's consent page with a fresh state cookie"""
    state = secrets.token_urlsafe(24)
    redirect_uri = str(request.url_for("google_callback"))

    response = RedirectResponse(
        identity_provider.authorize_url(state, redirect_uri),
        status_code=status.HTTP_302_FOUND,
    )
    set_http_only_cookie(response, GOOGLE_STATE_COOKIE, state, OAUTH_STATE_MAX_AGE)
    return response


@router.get("/google/callback", name="google_callback")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Google OAuth callback

    Validates state, signs the user in and sets the session cookie.
    Failures redirect to the app with ?error=<code> instead of rendering JSON.
    """
    if error:
        return _app_redirect(error="access_denied")
    if not code:
        return _app_redirect(error="missing_code")

    expected_state = request.cookies.get(GOOGLE_STATE_COOKIE)
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        return _app_redirect(error="invalid_state")

    redirect_uri = str(request.url_for("google_callback"))
    use_case = GoogleSignInUseCase(uow, identity_provider)
    result = await use_case.execute(code, redirect_uri)

    if result.is_err():
        logger.warning(f"Sign-in rejected: {result.error.code}")
        response = _app_redirect(error=result.error.code.lower())
        clear_cookie(response, GOOGLE_STATE_COOKIE)
        return response

    signed_in = result.value
    token = create_session_token(signed_in.user_id, signed_in.email)

    response = _app_redirect("/onboarding" if signed_in.needs_onboarding else "/dashboard")
    set_http_only_cookie(
        response,
        ApplicationConfig.SESSION_COOKIE_NAME,
        token,
        ApplicationConfig.SESSION_TTL_HOURS * 3600,
    )
    clear_cookie(response, GOOGLE_STATE_COOKIE)
    return response


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout():
    response = JSONResponse({"success": True})
    clear_cookie(response, ApplicationConfig.SESSION_COOKIE_NAME)
    return response


@router.get("/session", status_code=status.HTTP_200_OK, response_model=Identity)
async def get_session(identity: Identity = Depends(get_identity)):
    """The identity resolved from the current session"""
    return identity
