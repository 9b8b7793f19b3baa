"""
Permission and RBAC Utilities

Role-based access control: the access gate and its FastAPI dependency.
"""
import logging
from typing import Iterable, FrozenSet

from fastapi import Depends

from taskboard.modules.errors import Forbidden
from taskboard.modules.users.auth.middleware import get_current_claim
from taskboard.modules.users.domain.claims import IdentityClaim
from taskboard.modules.users.domain.user import Role

logger = logging.getLogger("taskboard.users.permissions")


def authorize(claim: IdentityClaim, required_roles: Iterable[Role]) -> None:
    """
    Decide whether an authenticated caller may invoke an operation.

    Args:
        claim: Identity of the caller (already validated)
        required_roles: Roles allowed to call; empty means any authenticated caller

    Raises:
        Forbidden: If required_roles is non-empty and does not contain the caller's role
    """
    roles = frozenset(Role(r) for r in required_roles)
    if not roles:
        return
    if claim.role not in roles:
        logger.info(f"Access denied for user {claim.id}: role {claim.role.value} not in {sorted(r.value for r in roles)}")
        raise Forbidden()


def require_roles(required_roles: Iterable[Role]):
    """
    Build a FastAPI dependency enforcing `required_roles`.

    The dependency resolves the caller's claim first, so a missing or invalid
    token fails with Unauthenticated before the role check runs.
    """
    roles: FrozenSet[Role] = frozenset(Role(r) for r in required_roles)

    async def dependency(claim: IdentityClaim = Depends(get_current_claim)) -> IdentityClaim:
        authorize(claim, roles)
        return claim

    return dependency
