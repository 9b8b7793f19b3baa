"""
Data Access Layer (Repositories)

Repositories handle all database interactions.
"""

from .task_repository import TaskRepository

__all__ = [
    "TaskRepository",
]
