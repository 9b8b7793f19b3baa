"""
Task Domain Model

Pure data model representing a task entity. Status and priority are two
independent enumerations; any value may move to any other.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from taskboard.modules.clock import as_datetime, utcnow


class TaskStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    CLOSED = "Closed"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class Task:
    """Task domain model."""
    id: str
    title: str
    description: str
    due_date: Optional[datetime]
    status: TaskStatus
    priority: TaskPriority
    created_by: str
    assigned_to: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from dictionary (e.g., from database row)."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            due_date=as_datetime(data.get("due_date")),
            status=TaskStatus(data.get("status") or TaskStatus.OPEN.value),
            priority=TaskPriority(data.get("priority") or TaskPriority.MEDIUM.value),
            created_by=data["created_by"],
            assigned_to=data.get("assigned_to"),
            created_at=as_datetime(data.get("created_at")) or utcnow(),
            updated_at=as_datetime(data.get("updated_at")) or utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert Task to its wire representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "status": self.status.value,
            "priority": self.priority.value,
            "createdBy": self.created_by,
            "assigned_to": self.assigned_to,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
