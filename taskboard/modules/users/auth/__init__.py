"""
Authentication and Authorization Module

Provides:
- Access token signing and verification
- Bearer token authentication dependency
- Role-based access control (RBAC)
"""

from .tokens import TokenIssuer
from .middleware import get_bearer_token, get_current_claim
from .permissions import authorize, require_roles

__all__ = [
    "TokenIssuer",
    "get_bearer_token",
    "get_current_claim",
    "authorize",
    "require_roles",
]
