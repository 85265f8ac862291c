"""
FastAPI dependency injection utilities for settings, the Appwrite client and services.
"""

from typing import AsyncGenerator, Optional
from fastapi import Depends, Header

from restate.appwrite import AppwriteClient, create_client
from restate.config import Settings, get_settings
from restate.services.auth import AuthService
from restate.services.property import PropertyService
from restate.utils.exceptions import UnauthorizedError


def get_app_settings() -> Settings:
    return get_settings()


async def get_appwrite_client(
    x_appwrite_session: Optional[str] = Header(None, alias="X-Appwrite-Session"),
    config: Settings = Depends(get_app_settings)
) -> AsyncGenerator[AppwriteClient, None]:
    """
    Yield an Appwrite client for the request, carrying the caller's session if any.
    The client is closed once the response has been produced.
    """
    client = create_client(config, session=x_appwrite_session)
    try:
        yield client
    finally:
        await client.close()


async def get_server_appwrite_client(
    config: Settings = Depends(get_app_settings)
) -> AsyncGenerator[AppwriteClient, None]:
    """Yield a client that sends the project API key, for OAuth token exchange."""
    client = create_client(config, use_api_key=True)
    try:
        yield client
    finally:
        await client.close()


async def get_property_service(
    client: AppwriteClient = Depends(get_appwrite_client),
    config: Settings = Depends(get_app_settings)
) -> PropertyService:
    """
    Get property service instance.

    Args:
        client: Request-scoped Appwrite client
        config: Application settings

    Returns:
        PropertyService instance
    """
    return PropertyService(client, config)


async def get_auth_service(
    client: AppwriteClient = Depends(get_appwrite_client),
    server_client: AppwriteClient = Depends(get_server_appwrite_client),
    config: Settings = Depends(get_app_settings)
) -> AuthService:
    return AuthService(client, config, server_client=server_client)


async def require_session(
    x_appwrite_session: Optional[str] = Header(None, alias="X-Appwrite-Session")
) -> str:
    """
    Require the session header.

    Raises:
        UnauthorizedError: If no session secret was sent
    """
    if not x_appwrite_session:
        raise UnauthorizedError("Session required")
    return x_appwrite_session
