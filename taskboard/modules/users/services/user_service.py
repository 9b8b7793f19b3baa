"""
User Service

Business logic for user management operations.
"""
import logging
from typing import Optional, Dict, Any

from asyncpg.exceptions import UniqueViolationError

from taskboard.modules.crypto import hash_password
from taskboard.modules.errors import UserAlreadyExists, UserNotFound, ValidationError
from taskboard.modules.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest, paginate
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.user import Role, User
from taskboard.modules.users.repositories.user_repository import UserRepository

logger = logging.getLogger("taskboard.users.service")


def _actor(claim: Optional[IdentityClaim]) -> str:
    return claim.id if claim else "system"


class UserService:
    """Service for user business logic."""

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        default_page_size: int = DEFAULT_PAGE_SIZE
    ):
        self.repository = repository or UserRepository()
        self.default_page_size = default_page_size

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: Role = Role.MEMBER,
        claim: Optional[IdentityClaim] = None
    ) -> User:
        """
        Create a new user account.

        The email must not belong to an existing account; the existing record
        is left untouched when it does. The password is stored hashed.
        """
        logger.debug(f"[UserService.create_user] email={email}, role={role}")

        existing = await self.repository.get_by_email(email)
        if existing:
            raise UserAlreadyExists(f"User with email {email} already exists")

        try:
            user_id = await self.repository.create(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=Role(role).value
            )
            user_data = await self.repository.get_by_id(user_id)
        except UniqueViolationError:
            # Lost a race with a concurrent create for the same email
            logger.info(f"[UserService.create_user] duplicate email on insert: {email}")
            raise UserAlreadyExists(f"User with email {email} already exists")
        except Exception as e:
            logger.error(f"[UserService.create_user] ERROR: {e}", exc_info=True)
            raise

        logger.info(f"User {user_id} created by {_actor(claim)} (role={Role(role).value})")
        return User.from_dict(user_data)

    async def find_user(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None when it does not exist."""
        user_data = await self.repository.get_by_id(user_id)
        if not user_data:
            return None
        return User.from_dict(user_data)

    async def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        logger.debug(f"[UserService.get_user] user_id={user_id}")

        user = await self.find_user(user_id)
        if not user:
            raise UserNotFound(f"User {user_id} not found")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (the sign-in username)."""
        user_data = await self.repository.get_by_email(email)
        if not user_data:
            return None
        return User.from_dict(user_data)

    async def list_users(
        self,
        page_number: Any = None,
        page_size: Any = None
    ) -> Page[User]:
        """List users, newest first."""
        page = PageRequest.coerce(page_number, page_size, self.default_page_size)
        logger.debug(f"[UserService.list_users] page={page.page_number}, size={page.page_size}")

        return await paginate(
            page,
            count=lambda: self.repository.count(),
            fetch=self._fetch_users(),
        )

    async def filter_users(
        self,
        name: str,
        page_number: Any = None,
        page_size: Any = None
    ) -> Page[User]:
        """List users whose name contains `name`, case-insensitively."""
        page = PageRequest.coerce(page_number, page_size, self.default_page_size)
        logger.debug(f"[UserService.filter_users] name={name}, page={page.page_number}, size={page.page_size}")

        return await paginate(
            page,
            count=lambda: self.repository.count(name_filter=name),
            fetch=self._fetch_users(name),
        )

    def _fetch_users(self, name: Optional[str] = None):
        async def fetch(limit: int, offset: int):
            rows = await self.repository.list(limit=limit, offset=offset, name_filter=name)
            return [User.from_dict(row) for row in rows]
        return fetch

    async def update_user(
        self,
        user_id: str,
        updates: Dict[str, Any],
        claim: Optional[IdentityClaim] = None
    ) -> User:
        """Update user account. Only the name is mutable."""
        logger.debug(f"[UserService.update_user] user_id={user_id}, updates={list(updates.keys())}")

        await self.get_user(user_id)

        changes = {k: v for k, v in updates.items() if k == "name" and v is not None}
        if not changes:
            raise ValidationError("No fields to update")

        try:
            await self.repository.update(user_id, changes)
            user_data = await self.repository.get_by_id(user_id)
        except Exception as e:
            logger.error(f"[UserService.update_user] ERROR: {e}", exc_info=True)
            raise

        logger.info(f"User {user_id} updated by {_actor(claim)}")
        return User.from_dict(user_data)

    async def delete_user(
        self,
        user_id: str,
        claim: Optional[IdentityClaim] = None
    ) -> Dict[str, bool]:
        """Permanently delete a user."""
        logger.debug(f"[UserService.delete_user] user_id={user_id}")

        await self.get_user(user_id)
        await self.repository.delete(user_id)

        logger.info(f"User {user_id} deleted by {_actor(claim)}")
        return {"success": True}
