"""
Core module - Security, access policy and error taxonomy.
"""
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from app.core.errors import (
    CatRegistryError,
    ErrorKind,
    Unauthenticated,
    Forbidden,
    ValidationFailed,
    NotFound,
    StoreFailure,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "CatRegistryError",
    "ErrorKind",
    "Unauthenticated",
    "Forbidden",
    "ValidationFailed",
    "NotFound",
    "StoreFailure",
]
