"""
Auth Service

Sign-in (credential verification + token issuance) and per-request token
validation.
"""
import logging
from typing import Optional

from taskboard.modules.crypto import dummy_hash, verify_password
from taskboard.modules.errors import InvalidCredentials, Unauthenticated
from taskboard.modules.users.auth.tokens import TokenIssuer
from taskboard.modules.users.domain.claims import AccessToken, IdentityClaim
from taskboard.modules.users.domain.user import User
from taskboard.modules.users.services.user_service import UserService

logger = logging.getLogger("taskboard.auth")


class AuthService:
    """Service for authentication."""

    def __init__(self, tokens: TokenIssuer, user_service: Optional[UserService] = None):
        self.tokens = tokens
        self.user_service = user_service or UserService()

    async def sign_in(self, username: str, password: str) -> User:
        """
        Verify a username (email) and password pair.

        Unknown accounts and wrong passwords fail identically with
        InvalidCredentials.
        """
        logger.debug(f"[AuthService.sign_in] username={username}")

        user = await self.user_service.get_user_by_email(username)
        if user is None:
            verify_password(password, dummy_hash())
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentials()

        logger.info(f"User {user.id} signed in")
        return user

    def issue_token(self, user: User) -> AccessToken:
        return self.tokens.issue(user)

    async def authenticate(self, username: str, password: str) -> AccessToken:
        """Sign in and issue an access token."""
        user = await self.sign_in(username, password)
        return self.issue_token(user)

    async def validate_token(self, token: Optional[str]) -> IdentityClaim:
        """
        Validate a bearer token and return the caller's identity.

        The embedded user id must still resolve to an existing user.
        """
        if not token:
            raise Unauthenticated()

        claim = self.tokens.decode(token)

        user = await self.user_service.find_user(claim.id)
        if user is None:
            logger.info(f"Token rejected: user {claim.id} no longer exists")
            raise Unauthenticated("User no longer exists")

        return claim
