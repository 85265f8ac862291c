"""
Authentication service: OAuth2 login through Appwrite, logout and the current user.
Sessions live only in the Appwrite client; nothing is stored locally.
"""

from typing import Awaitable, Callable, Dict, Any, Optional
import logging

import httpx

from restate.appwrite import AppwriteClient, Account, Avatars, OAuthProvider
from restate.config import Settings, settings as default_settings
from restate.schemas.auth import CurrentUserResponse
from restate.utils.exceptions import OAuthError
from restate.utils.resource import RemoteResource

logger = logging.getLogger(__name__)

# Receives the provider URL and the redirect target; returns the URL the
# browser was finally redirected to, or None when the flow did not succeed.
BrowserOpener = Callable[[str, str], Awaitable[Optional[str]]]


def parse_oauth_callback(callback_url: str) -> Dict[str, str]:
    """
    Extract `userId` and `secret` from an OAuth redirect URL.

    Raises:
        OAuthError: If either parameter is missing
    """
    params = httpx.URL(callback_url).params
    secret = params.get("secret")
    user_id = params.get("userId")

    if not secret or not user_id:
        raise OAuthError("Invalid response from OAuth provider")

    return {"user_id": user_id, "secret": secret}


class AuthService:
    """
    OAuth login and session handling on top of the Appwrite account API.

    `client` carries the user's session. Token exchange goes through
    `server_client`, which must send the project API key: only then does
    Appwrite return the session secret instead of setting a cookie.
    """

    def __init__(
        self,
        client: AppwriteClient,
        config: Optional[Settings] = None,
        server_client: Optional[AppwriteClient] = None
    ):
        self.config = config or default_settings
        self.client = client
        self.account = Account(client)
        self.server_account = Account(server_client or client)
        self.avatars = Avatars(client)

    def get_oauth_url(
        self,
        redirect_uri: Optional[str] = None,
        provider: OAuthProvider = OAuthProvider.GOOGLE
    ) -> str:
        """URL that starts the provider login; both outcomes redirect to `redirect_uri`."""
        redirect_uri = redirect_uri or self.config.oauth_redirect_url
        return self.account.create_oauth2_token(provider, redirect_uri, redirect_uri)

    async def exchange_token(self, user_id: str, secret: str) -> Dict[str, Any]:
        """
        Turn an OAuth token into a session and attach it to the user client.

        Raises:
            OAuthError: If the backend did not return a session secret
            AppwriteException: If the exchange call fails
        """
        session = await self.server_account.create_session(user_id, secret)
        if not isinstance(session, dict) or not session.get("secret"):
            raise OAuthError("Failed to create session")
        self.client.set_session(session["secret"])
        logger.info(f"Session created for user {user_id}")
        return session

    async def complete_login(self, callback_url: str) -> Dict[str, Any]:
        """Exchange the token carried by an OAuth redirect URL for a session."""
        params = parse_oauth_callback(callback_url)
        return await self.exchange_token(params["user_id"], params["secret"])

    async def login(
        self,
        open_browser: BrowserOpener,
        redirect_uri: Optional[str] = None,
        provider: OAuthProvider = OAuthProvider.GOOGLE
    ) -> bool:
        """
        Run the full OAuth flow.

        Args:
            open_browser: Opens the provider URL and returns the final redirect URL
            redirect_uri: Where the provider sends the browser back
            provider: OAuth2 provider

        Returns:
            True if a session was created, False otherwise
        """
        try:
            redirect_uri = redirect_uri or self.config.oauth_redirect_url
            url = self.get_oauth_url(redirect_uri, provider)
            if not url:
                raise OAuthError("Failed to login")

            result_url = await open_browser(url, redirect_uri)
            if not result_url:
                raise OAuthError("Failed to open browser")

            await self.complete_login(result_url)
            return True
        except Exception as e:
            logger.error(f"Login failed: {e}")
            return False

    async def logout(self) -> bool:
        try:
            await self.account.delete_session("current")
            return True
        except Exception as e:
            logger.error(f"Logout failed: {e}")
            return False

    async def get_current_user(self) -> Optional[CurrentUserResponse]:
        """
        Get the signed-in user with an initials avatar.

        Returns:
            Current user, or None when there is no valid session
        """
        try:
            user = await self.account.get()
            if user.get("$id"):
                return CurrentUserResponse.model_validate({
                    **user,
                    "avatar": self.avatars.get_initials(user.get("name")),
                })
            return None
        except Exception as e:
            logger.error(f"get_current_user error: {e}")
            return None


class SessionState:
    """
    Process-wide view of who is signed in.
    Wraps `AuthService.get_current_user` in a RemoteResource.
    """

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self.resource: RemoteResource[Optional[CurrentUserResponse]] = RemoteResource(
            auth_service.get_current_user
        )

    @property
    def user(self) -> Optional[CurrentUserResponse]:
        return self.resource.data

    @property
    def is_logged_in(self) -> bool:
        return self.resource.data is not None

    @property
    def loading(self) -> bool:
        return self.resource.loading

    async def refresh(self) -> Optional[CurrentUserResponse]:
        return await self.resource.refetch()
