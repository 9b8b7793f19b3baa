"""
User Management API Endpoints

REST API endpoints for user CRUD operations, declared as a routing table.
"""
import logging
from typing import Optional

from fastapi import Depends, Query, Request
from pydantic import BaseModel, EmailStr, Field, field_validator

from taskboard.modules.routing import RouteSpec
from taskboard.modules.users.auth.middleware import get_current_claim
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.password_policy import check_password_strength
from taskboard.modules.users.domain.user import Role
from taskboard.modules.users.services.user_service import UserService

logger = logging.getLogger("taskboard.users.api")


# Request/Response Models
class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str
    role: Role

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


class UpdateUserRequest(BaseModel):
    name: str = Field(..., min_length=1)


async def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


async def create_user(
    request: CreateUserRequest,
    claim: IdentityClaim = Depends(get_current_claim),
    service: UserService = Depends(get_user_service)
):
    """Create a new user (admin only)."""
    logger.debug(f"[user_endpoints.create_user] email={request.email}")

    user = await service.create_user(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
        claim=claim
    )
    return user.to_dict()


async def get_user(
    id: str,
    service: UserService = Depends(get_user_service)
):
    """Get user details by ID."""
    user = await service.get_user(id)
    return user.to_dict()


async def list_users(
    page_number: Optional[str] = Query(None, alias="pageNumber", description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Page size (default 5)"),
    service: UserService = Depends(get_user_service)
):
    """List users, newest first."""
    page = await service.list_users(page_number, page_size)
    return page.to_dict(lambda user: user.to_dict())


async def update_user(
    id: str,
    request: UpdateUserRequest,
    claim: IdentityClaim = Depends(get_current_claim),
    service: UserService = Depends(get_user_service)
):
    """Update a user's name (admin only)."""
    user = await service.update_user(id, request.model_dump(exclude_unset=True), claim=claim)
    return user.to_dict()


async def delete_user(
    id: str,
    claim: IdentityClaim = Depends(get_current_claim),
    service: UserService = Depends(get_user_service)
):
    """Permanently delete a user (admin only)."""
    return await service.delete_user(id, claim=claim)


async def filter_users(
    name: str,
    page_number: Optional[str] = Query(None, alias="pageNumber", description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Page size (default 5)"),
    service: UserService = Depends(get_user_service)
):
    """Search users by a case-insensitive name fragment."""
    page = await service.filter_users(name, page_number, page_size)
    return page.to_dict(lambda user: user.to_dict())


ADMIN_ONLY = frozenset({Role.ADMIN})

USER_ROUTES = [
    RouteSpec("POST", "/user", create_user, ADMIN_ONLY, CreateUserRequest, status_code=201, summary="create user"),
    RouteSpec("GET", "/user", list_users, summary="All users"),
    RouteSpec("GET", "/user/filter/{name}", filter_users, summary="filter user"),
    RouteSpec("GET", "/user/{id}", get_user),
    RouteSpec("PUT", "/user/{id}", update_user, ADMIN_ONLY, UpdateUserRequest),
    RouteSpec("DELETE", "/user/{id}", delete_user, ADMIN_ONLY),
]
