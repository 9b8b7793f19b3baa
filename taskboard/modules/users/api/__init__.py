"""
REST API Endpoints

Thin API layer that delegates to services.
"""

from .auth_endpoints import AUTH_ROUTES
from .user_endpoints import USER_ROUTES

__all__ = [
    "AUTH_ROUTES",
    "USER_ROUTES",
]
