"""
Service layer for business logic implementation.
Contains services for authentication, property reads, seeding and error handling.
"""

from .auth import AuthService, SessionState
from .property import PropertyService
from .seed import SeedService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "SessionState",
    "PropertyService",
    "SeedService",
    "ErrorHandlerService"
]
