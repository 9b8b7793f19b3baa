"""
Tests for the role-based access gate.
"""
import pytest

from taskboard.modules.errors import Forbidden
from taskboard.modules.users.auth.permissions import authorize
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.user import Role


@pytest.mark.parametrize("role", list(Role))
def test_empty_role_set_allows_any_claim(role):
    authorize(IdentityClaim(id="u1", role=role), set())


@pytest.mark.parametrize("role", list(Role))
def test_single_role_allows_only_that_role(role):
    claim = IdentityClaim(id="u1", role=role)
    for required in Role:
        if required == role:
            authorize(claim, {required})
        else:
            with pytest.raises(Forbidden):
                authorize(claim, {required})


def test_any_of_several_roles_is_enough():
    authorize(IdentityClaim(id="u1", role=Role.MEMBER), {Role.ADMIN, Role.MEMBER})


def test_roles_given_as_values():
    authorize(IdentityClaim(id="u1", role=Role.ADMIN), ["Admin"])
    with pytest.raises(Forbidden):
        authorize(IdentityClaim(id="u1", role=Role.MEMBER), ["Admin"])
