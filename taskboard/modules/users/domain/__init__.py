"""
Domain Models

Pure data models representing users and caller identity.
"""

from .user import User, Role
from .claims import IdentityClaim, AccessToken
from .password_policy import check_password_strength

__all__ = [
    "User",
    "Role",
    "IdentityClaim",
    "AccessToken",
    "check_password_strength",
]
