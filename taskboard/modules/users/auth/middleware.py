"""
Authentication Middleware

FastAPI dependencies for bearer-token authentication and caller identity.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.modules.errors import Unauthenticated
from taskboard.modules.users.domain.claims import IdentityClaim

logger = logging.getLogger("taskboard.users.auth")

bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    """
    Extract the token from an `Authorization: Bearer <token>` header.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise Unauthenticated("Authentication required. Missing bearer token.")
    return credentials.credentials


async def get_current_claim(
    request: Request,
    token: str = Depends(get_bearer_token)
) -> IdentityClaim:
    """
    FastAPI dependency to get the authenticated caller's identity.

    Raises Unauthenticated if the token is invalid, expired, or names a user
    that no longer exists.
    """
    auth_service = request.app.state.auth_service
    return await auth_service.validate_token(token)
