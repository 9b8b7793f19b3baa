"""
Tests for routing table validation and mounting.
"""
import pytest
from pydantic import BaseModel

from taskboard.modules.routing import RouteSpec, RoutingTableError, build_router, validate_routes
from taskboard.modules.tasks.api import TASK_ROUTES
from taskboard.modules.users.api import AUTH_ROUTES, USER_ROUTES
from taskboard.modules.users.domain.user import Role


class Payload(BaseModel):
    value: str


async def handler(payload: Payload):
    return {"value": payload.value}


async def other_handler():
    return {}


def sync_handler():
    return {}


@pytest.mark.parametrize("table", [AUTH_ROUTES, USER_ROUTES, TASK_ROUTES])
def test_application_tables_are_valid(table):
    assert validate_routes(table) == table


def test_only_sign_in_is_public():
    public = [r.key for r in AUTH_ROUTES + USER_ROUTES + TASK_ROUTES if r.public]
    assert public == [("POST", "/auth/user/signin")]


def test_user_writes_are_admin_only():
    admin_only = {r.key for r in USER_ROUTES if r.required_roles == frozenset({Role.ADMIN})}
    assert admin_only == {("POST", "/user"), ("PUT", "/user/{id}"), ("DELETE", "/user/{id}")}


def test_task_routes_require_no_specific_role():
    assert all(not r.required_roles and not r.public for r in TASK_ROUTES)


def test_filter_route_is_mounted_before_task_by_id():
    paths = [route.path for route in build_router(TASK_ROUTES).routes]
    assert paths.index("/task/filter") < paths.index("/task/{id}")


def test_duplicate_route_rejected():
    with pytest.raises(RoutingTableError, match="Duplicate"):
        validate_routes([
            RouteSpec("GET", "/thing", other_handler),
            RouteSpec("get", "/thing", other_handler),
        ])


def test_same_path_different_method_is_allowed():
    routes = [RouteSpec("GET", "/thing", other_handler), RouteSpec("DELETE", "/thing", other_handler)]
    assert len(validate_routes(routes)) == 2


@pytest.mark.parametrize("route, message", [
    (RouteSpec("FETCH", "/thing", other_handler), "Unsupported method"),
    (RouteSpec("GET", "thing", other_handler), "must start with"),
    (RouteSpec("GET", "/thing", other_handler, frozenset({"Owner"})), "Unknown role"),
    (RouteSpec("GET", "/thing", other_handler, frozenset({Role.ADMIN}), public=True), "cannot require roles"),
    (RouteSpec("GET", "/thing", sync_handler), "must be async"),
    (RouteSpec("POST", "/thing", other_handler, input_schema=Payload), "does not accept"),
])
def test_inconsistent_routes_rejected(route, message):
    with pytest.raises(RoutingTableError, match=message):
        validate_routes([route])


def test_build_router_mounts_schema_handler():
    router = build_router([RouteSpec("POST", "/thing", handler, input_schema=Payload, status_code=201)])

    [route] = router.routes
    assert route.path == "/thing"
    assert route.methods == {"POST"}
    assert route.status_code == 201
    assert len(route.dependencies) == 1


def test_public_route_has_no_auth_dependency():
    router = build_router([RouteSpec("POST", "/open", handler, input_schema=Payload, public=True)])
    assert router.routes[0].dependencies == []
