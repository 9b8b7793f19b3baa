"""
Task Service

Business logic for the task registry: creation, lookup, listing, and the
assignment / priority / status / description mutations.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from taskboard.modules.errors import InvalidAssignee, TaskNotFound, UserNotFound, ValidationError
from taskboard.modules.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest, paginate
from taskboard.modules.tasks.domain.task import Task, TaskPriority, TaskStatus
from taskboard.modules.tasks.repositories.task_repository import TaskRepository
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.services.user_service import UserService

logger = logging.getLogger("taskboard.tasks.service")


class TaskService:
    """Service for task business logic."""

    def __init__(
        self,
        repository: Optional[TaskRepository] = None,
        user_service: Optional[UserService] = None,
        default_page_size: int = DEFAULT_PAGE_SIZE
    ):
        self.repository = repository or TaskRepository()
        self.user_service = user_service or UserService()
        self.default_page_size = default_page_size

    async def create_task(self, payload: Dict[str, Any], claim: IdentityClaim) -> Task:
        """
        Create a new task on behalf of `claim`.

        Every task starts Open with Medium priority whatever the payload says,
        and the caller is recorded as its creator.

        Args:
            payload: title, description, dueDate and optionally assigned_to
            claim: Identity of the creator

        Returns:
            Created task
        """
        logger.debug(f"[TaskService.create_task] created_by={claim.id}, keys={list(payload.keys())}")

        title = payload.get("title")
        description = payload.get("description")
        if not title or not description:
            raise ValidationError("title and description are required")

        due_date = payload.get("dueDate", payload.get("due_date"))
        if due_date is not None and not isinstance(due_date, datetime):
            try:
                due_date = datetime.fromisoformat(str(due_date))
            except ValueError:
                raise ValidationError(f"Invalid dueDate: {due_date}")

        assigned_to = payload.get("assigned_to")
        if assigned_to:
            await self._require_assignee(assigned_to)

        try:
            task_id = await self.repository.create(
                title=title,
                description=description,
                due_date=due_date,
                status=TaskStatus.OPEN.value,
                priority=TaskPriority.MEDIUM.value,
                created_by=claim.id,
                assigned_to=assigned_to or None,
            )
            task_data = await self.repository.get_by_id(task_id)
        except Exception as e:
            logger.error(f"[TaskService.create_task] ERROR: {e}", exc_info=True)
            raise

        logger.info(f"Task {task_id} created by {claim.id}")
        return Task.from_dict(task_data)

    async def get_task(self, task_id: str) -> Task:
        """Get task by ID."""
        logger.debug(f"[TaskService.get_task] task_id={task_id}")

        task_data = await self.repository.get_by_id(task_id)
        if not task_data:
            raise TaskNotFound()
        return Task.from_dict(task_data)

    async def list_tasks(self, page_number: Any = None, page_size: Any = None) -> Page[Task]:
        """List all tasks, newest first."""
        return await self._list({}, page_number, page_size)

    async def filter_tasks(
        self,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        page_number: Any = None,
        page_size: Any = None
    ) -> Page[Task]:
        """List tasks by status and/or priority. A None filter matches everything."""
        return await self._list({"status": status, "priority": priority}, page_number, page_size)

    async def filter_tasks_for_user(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        page_number: Any = None,
        page_size: Any = None
    ) -> Page[Task]:
        """List tasks assigned to `user_id`, optionally by status and/or priority."""
        if await self.user_service.find_user(user_id) is None:
            raise UserNotFound("please provide a valid userId")

        filters = {"status": status, "priority": priority, "assigned_to": user_id}
        return await self._list(filters, page_number, page_size)

    async def _list(self, filters: Dict[str, Any], page_number: Any, page_size: Any) -> Page[Task]:
        page = PageRequest.coerce(page_number, page_size, self.default_page_size)
        logger.debug(f"[TaskService._list] filters={filters}, page={page.page_number}, size={page.page_size}")

        async def fetch(limit: int, offset: int):
            rows = await self.repository.list(limit=limit, offset=offset, filters=filters)
            return [Task.from_dict(row) for row in rows]

        return await paginate(page, count=lambda: self.repository.count(filters), fetch=fetch)

    async def _require_assignee(self, user_id: str) -> None:
        if await self.user_service.find_user(user_id) is None:
            raise InvalidAssignee()

    async def _apply(self, task_id: str, updates: Dict[str, Any]) -> Task:
        await self.repository.update(task_id, updates)
        return await self.get_task(task_id)

    async def assign_task(self, task_id: str, user_id: str) -> Task:
        """Assign a task to an existing user."""
        logger.debug(f"[TaskService.assign_task] task_id={task_id}, user_id={user_id}")

        await self.get_task(task_id)
        await self._require_assignee(user_id)

        task = await self._apply(task_id, {"assigned_to": user_id})
        logger.info(f"Task {task_id} assigned to {user_id}")
        return task

    async def change_priority(self, task_id: str, priority: TaskPriority) -> Task:
        """Set the task's priority."""
        logger.debug(f"[TaskService.change_priority] task_id={task_id}, priority={priority}")

        await self.get_task(task_id)
        return await self._apply(task_id, {"priority": TaskPriority(priority)})

    async def change_status(self, task_id: str, status: TaskStatus) -> Task:
        """Set the task's status."""
        logger.debug(f"[TaskService.change_status] task_id={task_id}, status={status}")

        await self.get_task(task_id)
        return await self._apply(task_id, {"status": TaskStatus(status)})

    async def change_description(self, task_id: str, description: str) -> Task:
        """Replace the task's description."""
        logger.debug(f"[TaskService.change_description] task_id={task_id}")

        await self.get_task(task_id)
        if not description:
            raise ValidationError("description must not be empty")
        return await self._apply(task_id, {"description": description})

    async def delete_task(self, task_id: str) -> Dict[str, bool]:
        """Permanently delete a task."""
        logger.debug(f"[TaskService.delete_task] task_id={task_id}")

        await self.get_task(task_id)
        await self.repository.delete(task_id)

        logger.info(f"Task {task_id} deleted")
        return {"success": True}
