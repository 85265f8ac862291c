"""
Utility modules for the ReState API.
"""

from .exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ServiceUnavailableError,
    PropertyNotFoundError,
    AgentNotFoundError,
    OAuthError
)
from .resource import RemoteResource

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "NotFoundError",
    "UnauthorizedError",
    "ServiceUnavailableError",
    "PropertyNotFoundError",
    "AgentNotFoundError",
    "OAuthError",
    "RemoteResource",
]
