"""
User Repository

Handles all database operations for users table.
"""
import logging
from typing import Optional, List, Dict, Any
from uuid import uuid4

from databases import Database

from taskboard.modules.clock import utcnow
from taskboard.modules.database import database

logger = logging.getLogger("taskboard.users.repository")

USER_COLUMNS = "id, name, email, password, role, created_at, updated_at"


def _like_pattern(fragment: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = fragment.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserRepository:
    """Repository for user data access."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db if db is not None else database

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> str:
        """Create a new user and return user_id."""
        user_id = uuid4().hex
        now = utcnow()
        query = """
            INSERT INTO users (id, name, email, password, role, created_at, updated_at)
            VALUES (:id, :name, :email, :password, :role, :created_at, :updated_at)
        """
        await self.db.execute(query, {
            "id": user_id,
            "name": name,
            "email": email,
            "password": password_hash,
            "role": role,
            "created_at": now,
            "updated_at": now,
        })
        return user_id

    async def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user by ID."""
        query = f"SELECT {USER_COLUMNS} FROM users WHERE id = :user_id"
        row = await self.db.fetch_one(query, {"user_id": user_id})
        if not row:
            return None
        return dict(row)

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get user by email."""
        query = f"SELECT {USER_COLUMNS} FROM users WHERE email = :email"
        row = await self.db.fetch_one(query, {"email": email})
        if not row:
            return None
        return dict(row)

    async def update(
        self,
        user_id: str,
        updates: Dict[str, Any]
    ) -> bool:
        """Update user fields."""
        allowed_fields = ["name"]
        set_clauses = []
        values = {"user_id": user_id}

        for field in allowed_fields:
            if field in updates:
                set_clauses.append(f"{field} = :{field}")
                values[field] = updates[field]

        if not set_clauses:
            return False

        set_clauses.append("updated_at = :updated_at")
        values["updated_at"] = utcnow()
        query = f"UPDATE users SET {', '.join(set_clauses)} WHERE id = :user_id"
        await self.db.execute(query, values)
        return True

    async def delete(self, user_id: str) -> bool:
        """Permanently delete a user."""
        query = "DELETE FROM users WHERE id = :user_id"
        await self.db.execute(query, {"user_id": user_id})
        return True

    async def count(self, name_filter: Optional[str] = None) -> int:
        """Count users, optionally restricted to a name substring."""
        query = "SELECT COUNT(*) FROM users"
        values = {}

        if name_filter:
            query += " WHERE LOWER(name) LIKE :name_pattern ESCAPE '\\'"
            values["name_pattern"] = _like_pattern(name_filter)

        total = await self.db.fetch_val(query, values)
        return int(total or 0)

    async def list(
        self,
        limit: int,
        offset: int,
        name_filter: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """List one page of users, newest first."""
        query = f"SELECT {USER_COLUMNS} FROM users"
        values: Dict[str, Any] = {"limit": limit, "offset": offset}

        if name_filter:
            query += " WHERE LOWER(name) LIKE :name_pattern ESCAPE '\\'"
            values["name_pattern"] = _like_pattern(name_filter)

        query += " ORDER BY created_at DESC, id DESC LIMIT :limit OFFSET :offset"

        rows = await self.db.fetch_all(query, values)
        return [dict(row) for row in rows]
