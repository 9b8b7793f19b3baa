"""
Access Tokens

Signs and verifies the time-limited JWTs handed out at sign-in. The signing
secret is supplied at construction and never changes afterwards.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt

from taskboard.modules.clock import utcnow
from taskboard.modules.errors import Unauthenticated
from taskboard.modules.settings import Settings
from taskboard.modules.users.domain.claims import AccessToken, IdentityClaim
from taskboard.modules.users.domain.user import Role, User

logger = logging.getLogger("taskboard.auth.tokens")


class TokenIssuer:
    """Mints and decodes signed identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 720):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expires_minutes,
        )

    def issue(self, user: User, now: Optional[datetime] = None) -> AccessToken:
        now = now or utcnow()
        payload: Dict[str, Any] = {
            "id": user.id,
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        return AccessToken(access_token=token)

    def decode(self, token: str) -> IdentityClaim:
        """
        Verify signature and expiry and return the embedded claim.

        Raises:
            Unauthenticated: malformed, expired or wrongly-signed token, or a
                payload without a usable id/role.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"[TokenIssuer.decode] rejected token: {e}")
            raise Unauthenticated("Invalid token")

        user_id = payload.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise Unauthenticated("Invalid token")

        try:
            role = Role(payload.get("role"))
        except ValueError:
            raise Unauthenticated("Invalid token")

        return IdentityClaim(id=user_id, role=role)
