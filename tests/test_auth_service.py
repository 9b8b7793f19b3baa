"""
Tests for sign-in, token issuance and per-request token validation.
"""
from datetime import timedelta

import pytest

from taskboard.modules.clock import utcnow
from taskboard.modules.errors import InvalidCredentials, Unauthenticated
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.user import Role

from fakes import ADMIN_PASSWORD


@pytest.mark.asyncio
async def test_sign_in_with_valid_credentials(auth_service, admin):
    user = await auth_service.sign_in("abc@mail.com", ADMIN_PASSWORD)
    assert user.id == admin.id
    assert user.role == Role.ADMIN


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["nobody@example.com", "ABC@mail.com", ""])
async def test_sign_in_unknown_email(auth_service, admin, email):
    with pytest.raises(InvalidCredentials):
        await auth_service.sign_in(email, ADMIN_PASSWORD)


@pytest.mark.asyncio
async def test_wrong_password_fails_like_unknown_user(auth_service, admin):
    with pytest.raises(InvalidCredentials) as wrong_password:
        await auth_service.sign_in("abc@mail.com", "Wrong@1234")
    with pytest.raises(InvalidCredentials) as unknown_user:
        await auth_service.sign_in("ghost@mail.com", "Wrong@1234")

    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.status_code == unknown_user.value.status_code


@pytest.mark.asyncio
async def test_password_is_not_stored_verbatim(user_repository, admin):
    row = await user_repository.get_by_id(admin.id)
    assert row["password"] != ADMIN_PASSWORD


@pytest.mark.asyncio
async def test_authenticate_issues_token_for_user(auth_service, admin):
    token = await auth_service.authenticate("abc@mail.com", ADMIN_PASSWORD)
    claim = await auth_service.validate_token(token.access_token)
    assert claim == IdentityClaim(id=admin.id, role=Role.ADMIN)


@pytest.mark.asyncio
async def test_member_token_carries_member_role(auth_service, member):
    token = auth_service.issue_token(member)
    claim = await auth_service.validate_token(token.access_token)
    assert claim.role == Role.MEMBER


@pytest.mark.asyncio
async def test_token_fails_after_user_is_deleted(auth_service, user_service, member):
    token = auth_service.issue_token(member)
    await user_service.delete_user(member.id)

    with pytest.raises(Unauthenticated):
        await auth_service.validate_token(token.access_token)


@pytest.mark.asyncio
async def test_expired_token_fails(auth_service, token_issuer, member):
    token = token_issuer.issue(member, now=utcnow() - timedelta(hours=13))
    with pytest.raises(Unauthenticated):
        await auth_service.validate_token(token.access_token)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token_fails(auth_service, token):
    with pytest.raises(Unauthenticated):
        await auth_service.validate_token(token)
