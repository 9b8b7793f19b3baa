"""
Sign-in Endpoint

Exchanges credentials for an access token.
"""
from fastapi import Depends, Request
from pydantic import BaseModel

from taskboard.modules.routing import RouteSpec
from taskboard.modules.users.services.auth_service import AuthService


class SignInRequest(BaseModel):
    username: str
    password: str


async def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def sign_in(
    request: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    token = await service.authenticate(request.username, request.password)
    return token.to_dict()


AUTH_ROUTES = [
    RouteSpec("POST", "/auth/user/signin", sign_in, input_schema=SignInRequest, public=True, summary="user signin"),
]
