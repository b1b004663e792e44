"""
Security utilities for authentication and authorization.
"""

from .password import MIN_PASSWORD_LENGTH, PasswordHasher, password_hasher
from .tokens import TokenPayload, TokenService

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "PasswordHasher",
    "password_hasher",
    "TokenService",
    "TokenPayload",
]
