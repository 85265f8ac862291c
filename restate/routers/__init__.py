"""
API route handlers for the ReState API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .agents import router as agents_router

__all__ = ["auth_router", "properties_router", "agents_router"]
