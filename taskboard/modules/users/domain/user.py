"""
User Domain Model

Pure data model representing a user entity.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from taskboard.modules.clock import as_datetime, utcnow


class Role(str, Enum):
    ADMIN = "Admin"
    MEMBER = "Member"


@dataclass
class User:
    """User domain model."""
    id: str
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create User from dictionary (e.g., from database row)."""
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            password_hash=data.get("password", ""),
            role=Role(data.get("role") or Role.MEMBER.value),
            created_at=as_datetime(data.get("created_at")) or utcnow(),
            updated_at=as_datetime(data.get("updated_at")) or utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert User to dictionary. The password hash is never included."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
