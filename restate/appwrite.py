"""
Async client for the Appwrite REST API.
Wraps document, account and avatar endpoints behind small service classes
and maps remote failures onto AppwriteException.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
import json
import logging

import httpx

from restate.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

RESPONSE_FORMAT = "1.5.0"


class AppwriteException(Exception):
    """Error raised for any failed Appwrite call."""

    def __init__(
        self,
        message: str,
        code: int = 0,
        type: Optional[str] = None,
        response: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.type = type
        self.response = response

    def __str__(self) -> str:
        if self.type:
            return f"{self.message} ({self.code} {self.type})"
        return self.message


class OAuthProvider(str, Enum):
    """OAuth2 providers enabled for the project."""
    GOOGLE = "google"
    GITHUB = "github"
    APPLE = "apple"


class Query:
    """Builders for Appwrite query strings (JSON syntax)."""

    @staticmethod
    def _build(method: str, attribute: Optional[str] = None, values: Optional[List[Any]] = None) -> str:
        query: Dict[str, Any] = {"method": method}
        if attribute is not None:
            query["attribute"] = attribute
        if values is not None:
            query["values"] = values
        return json.dumps(query)

    @staticmethod
    def equal(attribute: str, value: Any) -> str:
        values = value if isinstance(value, list) else [value]
        return Query._build("equal", attribute, values)

    @staticmethod
    def contains(attribute: str, value: Any) -> str:
        values = value if isinstance(value, list) else [value]
        return Query._build("contains", attribute, values)

    @staticmethod
    def order_asc(attribute: str) -> str:
        return Query._build("orderAsc", attribute)

    @staticmethod
    def order_desc(attribute: str) -> str:
        return Query._build("orderDesc", attribute)

    @staticmethod
    def limit(limit: int) -> str:
        return Query._build("limit", values=[limit])


class ID:
    """Document id helpers."""

    @staticmethod
    def unique() -> str:
        # the server generates the id
        return "unique()"


class AppwriteClient:
    """
    Thin async HTTP client bound to one Appwrite project.

    Requests carry the project header and, when configured, a server API key
    or a user session secret. Cookies set by the server (client-side sessions)
    are kept for the lifetime of the client.
    """

    def __init__(
        self,
        endpoint: str,
        project: str,
        platform: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.endpoint = endpoint.rstrip("/")
        self.project = project
        self.platform = platform

        headers = {
            "X-Appwrite-Project": project,
            "X-Appwrite-Response-Format": RESPONSE_FORMAT,
            "Content-Type": "application/json",
        }
        if platform:
            headers["User-Agent"] = f"ReState ({platform})"
        if api_key:
            headers["X-Appwrite-Key"] = api_key
        if session:
            headers["X-Appwrite-Session"] = session

        self._http = httpx.AsyncClient(
            base_url=self.endpoint,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def session(self) -> Optional[str]:
        return self._http.headers.get("X-Appwrite-Session")

    def set_session(self, secret: Optional[str]) -> None:
        """Attach (or with None, detach) a user session secret."""
        if secret:
            self._http.headers["X-Appwrite-Session"] = secret
        else:
            self._http.headers.pop("X-Appwrite-Session", None)
            self._http.cookies.clear()

    def build_url(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Build an absolute URL for endpoints the caller opens directly (browser, image tags)."""
        query = dict(params or {})
        query["project"] = self.project
        url = httpx.URL(f"{self.endpoint}/{path.lstrip('/')}", params=query)
        return str(url)

    async def call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform one API request and decode the response.

        Args:
            method: HTTP method
            path: API path relative to the endpoint, e.g. "/account"
            params: Query string parameters
            payload: JSON body

        Returns:
            Decoded JSON body, the raw text for non-JSON responses, or an empty
            dict for empty responses

        Raises:
            AppwriteException: On transport failures and non-2xx responses
        """
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"Appwrite request {method} {path} failed: {e}")
            raise AppwriteException(f"Network request failed: {e}") from e

        body = self._decode(response)

        if response.status_code >= 400:
            if isinstance(body, dict):
                raise AppwriteException(
                    body.get("message", response.reason_phrase),
                    code=body.get("code", response.status_code),
                    type=body.get("type"),
                    response=body,
                )
            raise AppwriteException(
                body or response.reason_phrase,
                code=response.status_code,
                response=body,
            )

        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        if "application/json" in response.headers.get("content-type", ""):
            try:
                return response.json()
            except ValueError:
                return response.text
        return response.text

    async def ping(self) -> bool:
        """Return True when the Appwrite endpoint answers."""
        try:
            await self.call("GET", "/health/version")
            return True
        except AppwriteException as e:
            logger.error(f"Appwrite connection failed: {e}")
            return False

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AppwriteClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class Databases:
    """Document endpoints."""

    def __init__(self, client: AppwriteClient):
        self.client = client

    @staticmethod
    def _documents_path(database_id: str, collection_id: str) -> str:
        return f"/databases/{database_id}/collections/{collection_id}/documents"

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        params = {"queries[]": queries} if queries else None
        return await self.client.call(
            "GET", self._documents_path(database_id, collection_id), params=params
        )

    async def get_document(self, database_id: str, collection_id: str, document_id: str) -> Dict[str, Any]:
        return await self.client.call(
            "GET", f"{self._documents_path(database_id, collection_id)}/{document_id}"
        )

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: Dict[str, Any],
        permissions: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"documentId": document_id, "data": data}
        if permissions is not None:
            payload["permissions"] = permissions
        return await self.client.call(
            "POST", self._documents_path(database_id, collection_id), payload=payload
        )

    async def delete_document(self, database_id: str, collection_id: str, document_id: str) -> None:
        await self.client.call(
            "DELETE", f"{self._documents_path(database_id, collection_id)}/{document_id}"
        )


class Account:
    """Account and session endpoints."""

    def __init__(self, client: AppwriteClient):
        self.client = client

    def create_oauth2_token(
        self,
        provider: OAuthProvider,
        success: Optional[str] = None,
        failure: Optional[str] = None,
        scopes: Optional[List[str]] = None
    ) -> str:
        """
        Return the URL that starts the OAuth2 token flow in a browser.

        After the provider round-trip Appwrite redirects to `success` with
        `secret` and `userId` in the query string.
        """
        params: Dict[str, Any] = {}
        if success:
            params["success"] = success
        if failure:
            params["failure"] = failure
        if scopes:
            params["scopes[]"] = scopes
        return self.client.build_url(f"/account/tokens/oauth2/{OAuthProvider(provider).value}", params)

    async def create_session(self, user_id: str, secret: str) -> Dict[str, Any]:
        """
        Exchange a token for a session.

        Appwrite returns the session secret only to requests carrying an API
        key; other callers get an empty secret and a cookie on this client.
        """
        return await self.client.call(
            "POST",
            "/account/sessions/token",
            payload={"userId": user_id, "secret": secret},
        )

    async def get(self) -> Dict[str, Any]:
        return await self.client.call("GET", "/account")

    async def delete_session(self, session_id: str = "current") -> None:
        await self.client.call("DELETE", f"/account/sessions/{session_id}")
        if session_id == "current":
            self.client.set_session(None)


class Avatars:
    """Avatar image endpoints; these only build URLs."""

    def __init__(self, client: AppwriteClient):
        self.client = client

    def get_initials(self, name: Optional[str] = None, width: Optional[int] = None, height: Optional[int] = None) -> str:
        params: Dict[str, Any] = {}
        if name:
            params["name"] = name
        if width:
            params["width"] = width
        if height:
            params["height"] = height
        return self.client.build_url("/avatars/initials", params)


def create_client(
    config: Optional[Settings] = None,
    session: Optional[str] = None,
    use_api_key: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> AppwriteClient:
    """
    Create an AppwriteClient from settings.

    Args:
        config: Settings to use (defaults to the global settings)
        session: Optional user session secret
        use_api_key: Send the server API key (needed for seeding)
        transport: Optional httpx transport, used by tests

    Returns:
        Configured AppwriteClient
    """
    config = config or default_settings
    return AppwriteClient(
        endpoint=config.appwrite_endpoint,
        project=config.appwrite_project_id,
        platform=config.appwrite_platform,
        api_key=config.appwrite_api_key if use_api_key else None,
        session=session,
        timeout=config.appwrite_timeout,
        transport=transport,
    )
