"""
Task Repository

Handles all database operations for tasks table.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple
from uuid import uuid4

from databases import Database

from taskboard.modules.clock import utcnow
from taskboard.modules.database import database

logger = logging.getLogger("taskboard.tasks.repository")

TASK_COLUMNS = (
    "id, title, description, due_date, status, priority, "
    "created_by, assigned_to, created_at, updated_at"
)

# Equality filters accepted by count() and list()
FILTER_FIELDS = ["status", "priority", "assigned_to"]


def _plain(value: Any) -> Any:
    """Enums are bound by value."""
    return getattr(value, "value", value)


class TaskRepository:
    """Repository for task data access."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db if db is not None else database

    @staticmethod
    def _where(filters: Optional[Dict[str, Any]]) -> Tuple[str, Dict[str, Any]]:
        clauses = []
        values: Dict[str, Any] = {}

        for field in FILTER_FIELDS:
            value = (filters or {}).get(field)
            if value is None:
                continue
            clauses.append(f"{field} = :{field}")
            values[field] = _plain(value)

        if not clauses:
            return "", values
        return " WHERE " + " AND ".join(clauses), values

    async def create(
        self,
        title: str,
        description: str,
        due_date: Optional[datetime],
        status: str,
        priority: str,
        created_by: str,
        assigned_to: Optional[str] = None,
    ) -> str:
        """Create a new task and return task_id."""
        task_id = uuid4().hex
        now = utcnow()
        query = """
            INSERT INTO tasks
            (id, title, description, due_date, status, priority, created_by, assigned_to, created_at, updated_at)
            VALUES (:id, :title, :description, :due_date, :status, :priority, :created_by, :assigned_to, :created_at, :updated_at)
        """
        await self.db.execute(query, {
            "id": task_id,
            "title": title,
            "description": description,
            "due_date": due_date,
            "status": _plain(status),
            "priority": _plain(priority),
            "created_by": created_by,
            "assigned_to": assigned_to,
            "created_at": now,
            "updated_at": now,
        })
        logger.debug(f"[TaskRepository.create] task_id={task_id}")
        return task_id

    async def get_by_id(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Get task by ID."""
        query = f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = :task_id"
        row = await self.db.fetch_one(query, {"task_id": task_id})
        if not row:
            return None
        return dict(row)

    async def update(
        self,
        task_id: str,
        updates: Dict[str, Any]
    ) -> bool:
        """Update task fields. created_by is never writable."""
        allowed_fields = ["title", "description", "due_date", "status", "priority", "assigned_to"]
        set_clauses = []
        values = {"task_id": task_id}

        for field in allowed_fields:
            if field in updates:
                set_clauses.append(f"{field} = :{field}")
                values[field] = _plain(updates[field])

        if not set_clauses:
            return False

        set_clauses.append("updated_at = :updated_at")
        values["updated_at"] = utcnow()
        query = f"UPDATE tasks SET {', '.join(set_clauses)} WHERE id = :task_id"
        await self.db.execute(query, values)
        return True

    async def delete(self, task_id: str) -> bool:
        """Permanently delete a task."""
        query = "DELETE FROM tasks WHERE id = :task_id"
        await self.db.execute(query, {"task_id": task_id})
        return True

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count tasks matching the equality filters."""
        where, values = self._where(filters)
        total = await self.db.fetch_val(f"SELECT COUNT(*) FROM tasks{where}", values)
        return int(total or 0)

    async def list(
        self,
        limit: int,
        offset: int,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """List one page of tasks matching the filters, newest first."""
        where, values = self._where(filters)
        values.update({"limit": limit, "offset": offset})
        query = (
            f"SELECT {TASK_COLUMNS} FROM tasks{where}"
            " ORDER BY created_at DESC, id DESC LIMIT :limit OFFSET :offset"
        )
        rows = await self.db.fetch_all(query, values)
        return [dict(row) for row in rows]
