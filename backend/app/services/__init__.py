"""
Service layer for business logic.
"""
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.services.cat_service import CatService

__all__ = [
    "AuthService",
    "UserService",
    "CatService",
]
