"""
Request and response schemas for API endpoints.
"""
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.message import MessageResponse
from app.schemas.user import UserOutput, RegisterRequest, UserUpdate
from app.schemas.cat import (
    CatCreate,
    CatUpload,
    CatUpdate,
    CatAdminUpdate,
    CatRecord,
    CatResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    # Envelope
    "MessageResponse",
    # User
    "UserOutput",
    "RegisterRequest",
    "UserUpdate",
    # Cat
    "CatCreate",
    "CatUpload",
    "CatUpdate",
    "CatAdminUpdate",
    "CatRecord",
    "CatResponse",
]
