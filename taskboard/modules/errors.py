"""
Error Taxonomy

Client-facing failures raised by the services. Each carries the HTTP status
it is rendered with; anything not listed here surfaces as a plain 500.
"""
from typing import Dict, Optional


class TaskboardError(Exception):
    """Base class for business errors."""
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class InvalidCredentials(TaskboardError):
    status_code = 401
    default_message = "Invalid username or password"


class Unauthenticated(TaskboardError):
    status_code = 401
    default_message = "Not authenticated"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(TaskboardError):
    status_code = 403
    default_message = "You do not have permission to perform this action"


class UserNotFound(TaskboardError):
    status_code = 404
    default_message = "User not found"


class TaskNotFound(TaskboardError):
    status_code = 404
    default_message = "please provide a valid task id"


class InvalidAssignee(TaskboardError):
    status_code = 400
    default_message = "please provide a valid userId"


class UserAlreadyExists(TaskboardError):
    status_code = 422
    default_message = "User already exists"


class ValidationError(TaskboardError):
    status_code = 400
    default_message = "Invalid input"
