"""
Shared fixtures: in-memory repositories wired into the real services, and an
ASGI client for the full application.
"""
import os

os.environ.setdefault("TASKBOARD_JWT_SECRET", "test-secret-key-for-the-taskboard-suite")

import httpx
import pytest
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher

from fakes import ADMIN_PASSWORD, MEMBER_PASSWORD, InMemoryTaskRepository, InMemoryUserRepository, TickingClock
from taskboard.app import create_app
from taskboard.modules import crypto
from taskboard.modules.settings import Settings
from taskboard.modules.tasks.services.task_service import TaskService
from taskboard.modules.users.auth.tokens import TokenIssuer
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.user import Role
from taskboard.modules.users.services.auth_service import AuthService
from taskboard.modules.users.services.user_service import UserService


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Keep Argon2 cheap in tests."""
    fast = PasswordHash((Argon2Hasher(time_cost=1, memory_cost=1024, parallelism=1),))
    monkeypatch.setattr(crypto, "_password_hasher", fast)


@pytest.fixture
def settings():
    return Settings(
        database_url="postgresql://localhost:5432/taskboard_test",
        jwt_secret="test-secret-key-for-the-taskboard-suite",
        jwt_expires_minutes=720,
        default_page_size=5,
    )


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def user_repository(clock):
    return InMemoryUserRepository(clock=clock)


@pytest.fixture
def task_repository(clock):
    return InMemoryTaskRepository(clock=clock)


@pytest.fixture
def user_service(user_repository):
    return UserService(repository=user_repository)


@pytest.fixture
def task_service(task_repository, user_service):
    return TaskService(repository=task_repository, user_service=user_service)


@pytest.fixture
def auth_service(token_issuer, user_service):
    return AuthService(tokens=token_issuer, user_service=user_service)


@pytest.fixture
async def admin(user_service):
    return await user_service.create_user(
        name="todoAdmin",
        email="abc@mail.com",
        password=ADMIN_PASSWORD,
        role=Role.ADMIN
    )


@pytest.fixture
async def member(user_service):
    return await user_service.create_user(
        name="John Doe",
        email="john.doe@example.com",
        password=MEMBER_PASSWORD,
        role=Role.MEMBER
    )


@pytest.fixture
def admin_claim(admin):
    return IdentityClaim(id=admin.id, role=admin.role)


@pytest.fixture
def member_claim(member):
    return IdentityClaim(id=member.id, role=member.role)


@pytest.fixture
def app(settings, user_service, task_service, auth_service):
    return create_app(
        settings,
        user_service=user_service,
        task_service=task_service,
        auth_service=auth_service
    )


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def admin_headers(admin, token_issuer):
    return {"Authorization": f"Bearer {token_issuer.issue(admin).access_token}"}


@pytest.fixture
def member_headers(member, token_issuer):
    return {"Authorization": f"Bearer {token_issuer.issue(member).access_token}"}
