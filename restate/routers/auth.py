"""
Authentication endpoints: OAuth redirect and callback, current user and logout.
The session secret returned by the callback is sent back in the X-Appwrite-Session header.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from typing import Optional

from restate.appwrite import OAuthProvider
from restate.services.auth import AuthService
from restate.schemas.auth import CurrentUserResponse, SessionResponse, LogoutResponse
from restate.utils.dependencies import get_auth_service, require_session
from restate.utils.exceptions import UnauthorizedError
from restate.schemas.error import get_auth_error_responses


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get(
    "/oauth/{provider}",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    summary="Start OAuth login",
    description="Redirects the browser to the provider through Appwrite"
)
async def start_oauth(
    provider: OAuthProvider,
    redirect_uri: Optional[str] = Query(None, description="Override for the callback URL"),
    auth_service: AuthService = Depends(get_auth_service)
) -> RedirectResponse:
    url = auth_service.get_oauth_url(redirect_uri, provider)
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get(
    "/callback",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Complete OAuth login",
    description="Exchanges the OAuth token carried by the redirect (`userId` and `secret` query parameters) for a session",
    responses=get_auth_error_responses()
)
async def oauth_callback(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> SessionResponse:
    """
    Exchange the OAuth token for a session.

    Raises:
        OAuthError: If the redirect did not carry userId and secret, or no session secret came back
    """
    session = await auth_service.complete_login(str(request.url))
    return SessionResponse.model_validate(session)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Current user",
    responses=get_auth_error_responses()
)
async def get_current_user(
    session: str = Depends(require_session),
    auth_service: AuthService = Depends(get_auth_service)
) -> CurrentUserResponse:
    user = await auth_service.get_current_user()
    if user is None:
        raise UnauthorizedError("Session is invalid or expired")
    return user


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
    responses=get_auth_error_responses()
)
async def logout(
    session: str = Depends(require_session),
    auth_service: AuthService = Depends(get_auth_service)
) -> LogoutResponse:
    return LogoutResponse(success=await auth_service.logout())
