"""
Business Logic Services

Services contain business logic and orchestrate repository calls.
"""

from .task_service import TaskService

__all__ = [
    "TaskService",
]
