"""Utilities for password hashing and verification."""

from __future__ import annotations

import secrets
import string

import bcrypt

from signature_studio.core.config import get_settings

_TEMPORARY_PASSWORD_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash plain text password using bcrypt."""
    cost = rounds if rounds is not None else get_settings().security.bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def generate_temporary_password(length: int = 12) -> str:
    """Random password handed out once when an admin creates or resets a user."""
    while True:
        candidate = "".join(secrets.choice(_TEMPORARY_PASSWORD_ALPHABET) for _ in range(length))
        # must satisfy the same lower/upper/digit rule as user supplied passwords
        if (
            any(c.islower() for c in candidate)
            and any(c.isupper() for c in candidate)
            and any(c.isdigit() for c in candidate)
        ):
            return candidate


__all__ = ["hash_password", "verify_password", "generate_temporary_password"]
