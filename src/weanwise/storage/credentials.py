"""Credential checks shared by the backends."""

from ..errors import AuthError

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Lower-case and validate an email address."""
    normalized = email.strip().lower()
    local, _, domain = normalized.partition("@")
    if not local or "." not in domain:
        raise AuthError(f"Invalid email address: {email!r}")
    return normalized


def check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
