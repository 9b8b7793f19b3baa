"""
Password Hashing

Argon2 hashes through pwdlib. Each stored hash carries its algorithm and cost
parameters, so existing hashes keep verifying when the hasher settings change.
"""
from typing import Optional, Tuple

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

_password_hasher: Optional[PasswordHash] = None
_dummy: Optional[Tuple[PasswordHash, str]] = None


def get_password_hasher() -> PasswordHash:
    """Get or create the process-wide hasher (pwdlib recommended settings)."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHash.recommended()
    return _password_hasher


def hash_password(password: str) -> str:
    return get_password_hasher().hash(password)


def verify_password(password: str, stored: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False for empty or unrecognised hashes instead of raising.
    """
    if not stored:
        return False
    try:
        return get_password_hasher().verify(password, stored)
    except UnknownHashError:
        return False


def dummy_hash() -> str:
    """
    Hash verified against when the account does not exist.

    Produced by the current hasher, so an unknown account and a wrong password
    cost the same work.
    """
    global _dummy
    hasher = get_password_hasher()
    if _dummy is None or _dummy[0] is not hasher:
        _dummy = (hasher, hasher.hash("taskboard-dummy-password"))
    return _dummy[1]
