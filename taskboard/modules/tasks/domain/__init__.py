"""
Domain Models

Pure data models representing task entities.
"""

from .task import Task, TaskStatus, TaskPriority

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
]
