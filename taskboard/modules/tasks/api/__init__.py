"""
REST API Endpoints

Thin API layer that delegates to services.
"""

from .task_endpoints import TASK_ROUTES

__all__ = [
    "TASK_ROUTES",
]
