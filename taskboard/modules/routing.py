"""
Routing Table

Endpoints are declared as explicit RouteSpec entries rather than decorators.
build_router() validates a table and mounts it on an APIRouter; entries are
mounted in table order, so literal paths must come before parameterised ones
that would shadow them.
"""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Set, Tuple, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from taskboard.modules.users.auth.permissions import require_roles
from taskboard.modules.users.domain.user import Role

logger = logging.getLogger("taskboard.routing")

ALLOWED_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}


@dataclass(frozen=True)
class RouteSpec:
    """One entry of a routing table."""
    method: str
    path: str
    handler: Callable[..., Any]
    required_roles: FrozenSet[Role] = field(default_factory=frozenset)
    input_schema: Optional[Type[BaseModel]] = None
    public: bool = False
    status_code: int = 200
    summary: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.method.upper(), self.path)


class RoutingTableError(ValueError):
    """Raised when a routing table is inconsistent."""


def _accepts_schema(handler: Callable[..., Any], schema: Type[BaseModel]) -> bool:
    params = inspect.signature(handler).parameters.values()
    return any(p.annotation is schema for p in params)


def validate_routes(routes: Iterable[RouteSpec]) -> List[RouteSpec]:
    """
    Check a routing table before it is mounted.

    Raises:
        RoutingTableError: duplicate (method, path), unknown method, unknown
            role, a public route that also requires roles, a non-coroutine
            handler, or an input schema the handler does not accept.
    """
    seen: Set[Tuple[str, str]] = set()
    checked = []

    for route in routes:
        if route.key in seen:
            raise RoutingTableError(f"Duplicate route {route.key[0]} {route.path}")
        seen.add(route.key)

        if route.key[0] not in ALLOWED_METHODS:
            raise RoutingTableError(f"Unsupported method {route.method} for {route.path}")

        if not route.path.startswith("/"):
            raise RoutingTableError(f"Route path must start with '/': {route.path}")

        for role in route.required_roles:
            if not isinstance(role, Role):
                raise RoutingTableError(f"Unknown role {role!r} on {route.key[0]} {route.path}")

        if route.public and route.required_roles:
            raise RoutingTableError(f"Public route {route.key[0]} {route.path} cannot require roles")

        if not inspect.iscoroutinefunction(route.handler):
            raise RoutingTableError(f"Handler for {route.key[0]} {route.path} must be async")

        if route.input_schema is not None and not _accepts_schema(route.handler, route.input_schema):
            raise RoutingTableError(
                f"Handler {route.handler.__name__} does not accept {route.input_schema.__name__}"
            )

        checked.append(route)

    return checked


def build_router(routes: Iterable[RouteSpec], **router_kwargs: Any) -> APIRouter:
    """Validate a routing table and mount it on a new APIRouter."""
    router = APIRouter(**router_kwargs)

    for route in validate_routes(routes):
        dependencies = [] if route.public else [Depends(require_roles(route.required_roles))]
        router.add_api_route(
            route.path,
            route.handler,
            methods=[route.key[0]],
            dependencies=dependencies,
            status_code=route.status_code,
            summary=route.summary,
        )
        logger.debug(
            f"[build_router] {route.key[0]} {route.path} -> {route.handler.__name__} "
            f"roles={sorted(r.value for r in route.required_roles)}"
        )

    return router
