"""
Password Policy

Strength rule applied to every new account, whether created over the API or
by the seed script.
"""
import re

PASSWORD_SPECIALS = "@$!%*?&"
PASSWORD_PATTERN = re.compile(r"[A-Za-z\d@$!%*?&]{8,}")

PASSWORD_RULE = (
    "Password must be at least 8 characters long and include at least one uppercase letter, "
    "one lowercase letter, one number, and one special character"
)


def check_password_strength(password: str) -> str:
    """
    Return the password unchanged if it satisfies the policy.

    Raises:
        ValueError: If the password is too short, uses characters outside the
            allowed set, or lacks an uppercase letter, lowercase letter, digit
            or special character.
    """
    if not (
        PASSWORD_PATTERN.fullmatch(password)
        and any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c.isdigit() for c in password)
        and any(c in PASSWORD_SPECIALS for c in password)
    ):
        raise ValueError(PASSWORD_RULE)
    return password
