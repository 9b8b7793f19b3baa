"""
Task API Endpoints

REST API endpoints for the task registry, declared as a routing table.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from taskboard.modules.routing import RouteSpec
from taskboard.modules.tasks.domain.task import TaskPriority, TaskStatus
from taskboard.modules.tasks.services.task_service import TaskService
from taskboard.modules.users.auth.middleware import get_current_claim
from taskboard.modules.users.domain.claims import IdentityClaim

logger = logging.getLogger("taskboard.tasks.api")


class CreateTaskRequest(BaseModel):
    # status and priority are deliberately absent: new tasks are always Open/Medium
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    due_date: datetime = Field(..., alias="dueDate")
    assigned_to: Optional[str] = None


async def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def _page_params(
    page_number: Optional[str] = Query(None, alias="pageNumber", description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Page size (default 5)"),
):
    return page_number, page_size


async def create_task(
    request: CreateTaskRequest,
    claim: IdentityClaim = Depends(get_current_claim),
    service: TaskService = Depends(get_task_service)
):
    """Create a task; the caller becomes its creator."""
    task = await service.create_task(request.model_dump(by_alias=True), claim)
    return task.to_dict()


async def list_tasks(
    page: tuple = Depends(_page_params),
    service: TaskService = Depends(get_task_service)
):
    result = await service.list_tasks(*page)
    return result.to_dict(lambda task: task.to_dict())


async def filter_tasks(
    status: Optional[TaskStatus] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    page: tuple = Depends(_page_params),
    service: TaskService = Depends(get_task_service)
):
    """Filter tasks by status and priority."""
    result = await service.filter_tasks(status, priority, *page)
    return result.to_dict(lambda task: task.to_dict())


async def filter_tasks_for_user(
    userId: str,
    status: Optional[TaskStatus] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    page: tuple = Depends(_page_params),
    service: TaskService = Depends(get_task_service)
):
    """Filter tasks assigned to a user by status and priority."""
    result = await service.filter_tasks_for_user(userId, status, priority, *page)
    return result.to_dict(lambda task: task.to_dict())


async def get_task(
    id: str,
    service: TaskService = Depends(get_task_service)
):
    task = await service.get_task(id)
    return task.to_dict()


async def assign_task(
    taskId: str,
    userId: str,
    service: TaskService = Depends(get_task_service)
):
    task = await service.assign_task(taskId, userId)
    return task.to_dict()


async def change_task_priority(
    taskId: str,
    priority: TaskPriority = Query(..., description='"Low" | "Medium" | "High"'),
    service: TaskService = Depends(get_task_service)
):
    task = await service.change_priority(taskId, priority)
    return task.to_dict()


async def change_task_status(
    taskId: str,
    status: TaskStatus = Query(..., description='"Open" | "InProgress" | "Closed"'),
    service: TaskService = Depends(get_task_service)
):
    task = await service.change_status(taskId, status)
    return task.to_dict()


async def change_task_description(
    taskId: str,
    description: str = Query(..., min_length=1),
    service: TaskService = Depends(get_task_service)
):
    task = await service.change_description(taskId, description)
    return task.to_dict()


async def delete_task(
    taskId: str,
    service: TaskService = Depends(get_task_service)
):
    return await service.delete_task(taskId)


TASK_ROUTES = [
    RouteSpec("POST", "/task", create_task, input_schema=CreateTaskRequest, status_code=201),
    RouteSpec("GET", "/task", list_tasks),
    # /task/filter must be mounted before /task/{id}
    RouteSpec("GET", "/task/filter", filter_tasks, summary="filter task"),
    RouteSpec("GET", "/task/filter/{userId}", filter_tasks_for_user, summary="filter task by userId"),
    RouteSpec("GET", "/task/{id}", get_task),
    RouteSpec("PUT", "/task/assign-task/{taskId}/{userId}", assign_task),
    RouteSpec("PUT", "/task/change-task-priority/{taskId}", change_task_priority),
    RouteSpec("PUT", "/task/change-task-status/{taskId}", change_task_status),
    RouteSpec("PUT", "/task/change-task-description/{taskId}", change_task_description),
    RouteSpec("DELETE", "/task/delete-task/{taskId}", delete_task),
]
