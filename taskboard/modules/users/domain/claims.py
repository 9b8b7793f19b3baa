"""
Identity Claim and Access Token

The authenticated caller's identity, recovered from a bearer token for the
duration of one request. Never persisted.
"""
from dataclasses import dataclass

from .user import Role


@dataclass(frozen=True)
class IdentityClaim:
    id: str
    role: Role


@dataclass(frozen=True)
class AccessToken:
    access_token: str

    def to_dict(self) -> dict:
        return {"access_token": self.access_token}
