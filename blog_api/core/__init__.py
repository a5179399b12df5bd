"""Core module exports."""

from .security import (
    create_access_token,
    create_user_token,
    decode_token,
    get_password_hash,
    get_token_subject,
    verify_password,
    ALGORITHM,
)

__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_token",
    "get_password_hash",
    "get_token_subject",
    "verify_password",
    "ALGORITHM",
]
