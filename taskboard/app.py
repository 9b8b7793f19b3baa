import logging
from contextlib import asynccontextmanager
from typing import Optional

from databases import Database
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.modules.database import connect_to_db, disconnect_from_db, init_db
from taskboard.modules.errors import TaskboardError
from taskboard.modules.routing import build_router
from taskboard.modules.settings import Settings, get_settings
from taskboard.modules.tasks.api import TASK_ROUTES
from taskboard.modules.tasks.repositories import TaskRepository
from taskboard.modules.tasks.services import TaskService
from taskboard.modules.users.api import AUTH_ROUTES, USER_ROUTES
from taskboard.modules.users.auth.tokens import TokenIssuer
from taskboard.modules.users.repositories import UserRepository
from taskboard.modules.users.services import AuthService, UserService

logger = logging.getLogger("taskboard.app")


async def handle_taskboard_error(request: Request, exc: TaskboardError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[Database] = None,
    user_service: Optional[UserService] = None,
    task_service: Optional[TaskService] = None,
    auth_service: Optional[AuthService] = None,
) -> FastAPI:
    """
    Build the application.

    Services not passed in are built on repositories bound to `db` (or the
    process-wide database). The database is connected for the lifetime of
    the app.
    """
    settings = settings or get_settings()

    user_service = user_service or UserService(
        repository=UserRepository(db),
        default_page_size=settings.default_page_size,
    )
    task_service = task_service or TaskService(
        repository=TaskRepository(db),
        user_service=user_service,
        default_page_size=settings.default_page_size,
    )
    auth_service = auth_service or AuthService(
        tokens=TokenIssuer.from_settings(settings),
        user_service=user_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        await connect_to_db(db)
        await init_db(db)
        yield
        # Shutdown
        await disconnect_from_db(db)

    app = FastAPI(title="Taskboard", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.user_service = user_service
    app.state.task_service = task_service
    app.state.auth_service = auth_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskboardError, handle_taskboard_error)

    # Mount routing tables
    app.include_router(build_router(AUTH_ROUTES, tags=["auth"]))
    app.include_router(build_router(USER_ROUTES, tags=["user"]))
    app.include_router(build_router(TASK_ROUTES, tags=["task"]))

    @app.get("/")
    async def root():
        return {"status": "online", "system": "Taskboard"}

    return app


def main():
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
